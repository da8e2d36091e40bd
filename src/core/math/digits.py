"""
Digits — примитивы работы с десятичными коэффициентами

Модуль содержит низкоуровневые операции над неотрицательными целыми
коэффициентами, из которых строится BigDecimal:
- Каноникализация: коэффициент × 10^scale → (строка цифр, экспонента)
- Конверсия int ↔ строка цифр без ограничения int_max_str_digits
- Подсчёт значащих цифр
- Целочисленный квадратный корень методом Ньютона с ограничением итераций
- Валидация аргументов точности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каноническая строка цифр не имеет ведущих и хвостовых нулей
2. Ноль представлен пустой строкой цифр и экспонентой 0
3. Итеративные алгоритмы всегда завершаются (явный лимит итераций)
"""

import math
from typing import Final

from src.core.errors import ConvergenceError

# =============================================================================
# КОНСТАНТЫ ТОЧНОСТИ И ДИАПАЗОНА
# =============================================================================

# Гарантированная десятичная точность IEEE-754 double (значащих цифр)
DOUBLE_FIG: Final[int] = 16

# Максимальное число значащих цифр при конверсии из float
FLOAT_MAX_DIGITS: Final[int] = DOUBLE_FIG + 1

# Размер "машинного слова" в десятичных цифрах (для maxprec в dump)
BASE_FIG: Final[int] = 9

# Диапазон экспоненты: value = 0.digits × 10^exponent
EXPONENT_MAX: Final[int] = 999_999_999
EXPONENT_MIN: Final[int] = -999_999_999

# Лимит итераций Ньютона для квадратного корня
SQRT_MAX_ITERATIONS: Final[int] = 1000

# Размер блока при конверсии больших int ↔ str
# (обход sys.get_int_max_str_digits, по умолчанию 4300)
_CHUNK_DIGITS: Final[int] = 4000
_CHUNK_LIMIT: Final[int] = 10**_CHUNK_DIGITS

_LOG10_2: Final[float] = math.log10(2)


# =============================================================================
# КОНВЕРСИЯ INT ↔ СТРОКА ЦИФР
# =============================================================================


def int_to_digits(value: int) -> str:
    """
    Десятичная запись неотрицательного целого произвольной длины.

    Args:
        value: Неотрицательное целое

    Returns:
        Строка цифр без знака ("0" для нуля)
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value < _CHUNK_LIMIT:
        return str(value)

    parts: list[str] = []
    while value >= _CHUNK_LIMIT:
        value, low = divmod(value, _CHUNK_LIMIT)
        parts.append(str(low).zfill(_CHUNK_DIGITS))
    parts.append(str(value))
    return "".join(reversed(parts))


def digits_to_int(digits: str) -> int:
    """
    Целое из строки цифр произвольной длины.

    Args:
        digits: Строка из символов 0-9 (пустая строка → 0)

    Returns:
        Неотрицательное целое
    """
    if len(digits) <= _CHUNK_DIGITS:
        return int(digits) if digits else 0

    result = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start : start + _CHUNK_DIGITS]
        result = result * 10 ** len(chunk) + int(chunk)
    return result


def digit_count(value: int) -> int:
    """
    Количество десятичных цифр неотрицательного целого (0 для нуля).

    Examples:
        >>> digit_count(0)
        0
        >>> digit_count(999)
        3
        >>> digit_count(1000)
        4
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value == 0:
        return 0
    if value < _CHUNK_LIMIT:
        return len(str(value))

    # value >= 2^(bit_length - 1) → нижняя оценка, уточняем сравнением
    count = int((value.bit_length() - 1) * _LOG10_2) + 1
    while 10**count <= value:
        count += 1
    while count > 1 and 10 ** (count - 1) > value:
        count -= 1
    return count


# =============================================================================
# КАНОНИКАЛИЗАЦИЯ
# =============================================================================


def canonicalize(coefficient: int, scale: int) -> tuple[str, int]:
    """
    Каноническая форма значения coefficient × 10^scale.

    Отбрасывает хвостовые нули и пересчитывает экспоненту так, что
    value = 0.digits × 10^exponent.

    Args:
        coefficient: Модуль коэффициента (>= 0)
        scale: Степень десяти при коэффициенте

    Returns:
        (digits, exponent); для нуля ("", 0)

    Examples:
        >>> canonicalize(1500, -2)
        ('15', 2)
        >>> canonicalize(7, -3)
        ('7', -2)
        >>> canonicalize(0, 5)
        ('', 0)
    """
    if coefficient == 0:
        return "", 0

    text = int_to_digits(coefficient)
    digits = text.rstrip("0")
    return digits, scale + len(text)


def to_coefficient(digits: str, exponent: int) -> tuple[int, int]:
    """
    Обратная к canonicalize конверсия: (digits, exponent) → (coefficient, scale).

    Examples:
        >>> to_coefficient('15', 2)
        (15, 0)
        >>> to_coefficient('7', -2)
        (7, -3)
    """
    if not digits:
        return 0, 0
    return digits_to_int(digits), exponent - len(digits)


# =============================================================================
# КВАДРАТНЫЙ КОРЕНЬ
# =============================================================================


def isqrt_newton(value: int, max_iterations: int = SQRT_MAX_ITERATIONS) -> int:
    """
    floor(sqrt(value)) методом Ньютона на целых числах.

    Начальное приближение 2^ceil(bit_length/2) не меньше корня, поэтому
    последовательность монотонно убывает до floor(sqrt(value)).

    Args:
        value: Неотрицательное целое
        max_iterations: Лимит итераций

    Returns:
        Наибольшее n такое, что n * n <= value

    Raises:
        ValueError: Если value < 0
        ConvergenceError: Если лимит итераций исчерпан
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value < 2:
        return value

    guess = 1 << ((value.bit_length() + 1) // 2)
    for _ in range(max_iterations):
        candidate = (guess + value // guess) >> 1
        if candidate >= guess:
            return guess
        guess = candidate

    raise ConvergenceError(
        f"integer square root did not converge in {max_iterations} iterations"
    )


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_digits(digits: int | None, name: str = "digits") -> int:
    """
    Валидация аргумента точности (количество значащих цифр).

    Args:
        digits: Количество цифр или None
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        digits, либо 0 если передан None (0 = без ограничения)

    Raises:
        TypeError: Если digits не int
        ValueError: Если digits < 0
    """
    if digits is None:
        return 0
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise TypeError(f"{name} must be an integer, got {type(digits).__name__}")
    if digits < 0:
        raise ValueError(f"{name} must be non-negative, got {digits}")
    return digits
