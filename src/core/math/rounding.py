"""
Rounding — правила округления десятичных коэффициентов

Семь правил округления применяются на границе отбрасываемых цифр:

    | Правило    | Поведение на точной середине        |
    |------------|-------------------------------------|
    | up         | всегда от нуля                      |
    | down       | всегда к нулю (truncate)            |
    | half_up    | к ближайшему; середина → от нуля    |
    | half_down  | к ближайшему; середина → к нулю     |
    | half_even  | к ближайшему; середина → к чётному  |
    | ceiling    | всегда к +∞                         |
    | floor      | всегда к −∞                         |

Модуль stateless: правило выбирается вызывающим кодом (явно или из
текущего DecimalConfig).

ИНВАРИАНТЫ:
1. Если отбрасываемая часть равна нулю, округление никогда не меняет значение
2. Результат round_coefficient отличается от усечения не более чем на 1
"""

from enum import Enum
from typing import Final

from src.core.math.digits import digit_count


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """Правило округления."""

    UP = "up"
    DOWN = "down"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    HALF_EVEN = "half_even"
    CEILING = "ceiling"
    FLOOR = "floor"

    @classmethod
    def parse(cls, value: "RoundingMode | str") -> "RoundingMode":
        """
        Нормализация имени правила округления.

        Принимает значение enum, его строковое имя или алиас
        (truncate, default, banker, ceil). Регистр не учитывается.

        Args:
            value: RoundingMode или строка

        Returns:
            Соответствующий RoundingMode

        Raises:
            ValueError: Если имя не распознано

        Examples:
            >>> RoundingMode.parse("banker")
            <RoundingMode.HALF_EVEN: 'half_even'>
            >>> RoundingMode.parse("CEIL")
            <RoundingMode.CEILING: 'ceiling'>
        """
        if isinstance(value, RoundingMode):
            return value
        if not isinstance(value, str):
            raise ValueError(f"rounding mode must be a string, got {value!r}")

        key = value.strip().lower()
        if key in ROUNDING_ALIASES:
            return ROUNDING_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown rounding mode: {value!r}") from None


DEFAULT_ROUNDING_MODE: Final[RoundingMode] = RoundingMode.HALF_UP

ROUNDING_ALIASES: Final[dict[str, RoundingMode]] = {
    "truncate": RoundingMode.DOWN,
    "default": RoundingMode.HALF_UP,
    "banker": RoundingMode.HALF_EVEN,
    "ceil": RoundingMode.CEILING,
}


# =============================================================================
# РЕШЕНИЕ ОБ ОКРУГЛЕНИИ
# =============================================================================


def should_round_away(
    mode: RoundingMode,
    negative: bool,
    last_kept_digit: int,
    remainder: int,
    modulus: int,
) -> bool:
    """
    Нужно ли увеличить модуль усечённого коэффициента на единицу.

    Отбрасываемая часть задаётся дробью remainder / modulus в [0, 1):
    половина соответствует 2 * remainder == modulus.

    Args:
        mode: Правило округления
        negative: Знак округляемого значения
        last_kept_digit: Последняя сохраняемая цифра (для half_even)
        remainder: Отбрасываемая часть коэффициента (>= 0)
        modulus: Вес отбрасываемой части (10 ** число_цифр, > remainder)

    Returns:
        True если модуль результата нужно увеличить (округление от нуля)
    """
    if remainder == 0:
        return False

    twice = 2 * remainder
    if twice > modulus:
        position = 1
    elif twice < modulus:
        position = -1
    else:
        position = 0

    if mode == RoundingMode.UP:
        return True
    elif mode == RoundingMode.DOWN:
        return False
    elif mode == RoundingMode.CEILING:
        return not negative
    elif mode == RoundingMode.FLOOR:
        return negative
    elif mode == RoundingMode.HALF_UP:
        return position >= 0
    elif mode == RoundingMode.HALF_DOWN:
        return position > 0
    elif mode == RoundingMode.HALF_EVEN:
        return position > 0 or (position == 0 and last_kept_digit % 2 == 1)

    raise ValueError(f"unsupported rounding mode: {mode!r}")


def round_coefficient(
    coefficient: int,
    drop: int,
    mode: RoundingMode,
    negative: bool = False,
) -> int:
    """
    Отбрасывание младших цифр неотрицательного коэффициента с округлением.

    Args:
        coefficient: Модуль коэффициента (>= 0)
        drop: Количество отбрасываемых младших десятичных цифр
        mode: Правило округления
        negative: Знак значения (важен для ceiling/floor)

    Returns:
        Коэффициент без drop младших цифр, округлённый по mode.
        При drop <= 0 коэффициент возвращается без изменений.

    Examples:
        >>> round_coefficient(12345, 2, RoundingMode.HALF_UP)
        123
        >>> round_coefficient(12350, 2, RoundingMode.HALF_EVEN)
        124
        >>> round_coefficient(12250, 2, RoundingMode.HALF_EVEN)
        122
    """
    if coefficient < 0:
        raise ValueError(f"coefficient must be non-negative, got {coefficient}")
    if drop <= 0 or coefficient == 0:
        return coefficient

    # Все цифры отбрасываются и остаток < 0.1 единицы: 10**drop не строим
    if drop > digit_count(coefficient):
        return 1 if should_round_away(mode, negative, 0, 1, 10) else 0

    modulus = 10**drop
    kept, remainder = divmod(coefficient, modulus)

    if should_round_away(mode, negative, kept % 10, remainder, modulus):
        kept += 1

    return kept


# =============================================================================
# ДЕЛЕНИЕ С ОКРУГЛЕНИЕМ
# =============================================================================


def divide_to_precision(
    numerator: int,
    denominator: int,
    precision: int,
    mode: RoundingMode,
    negative: bool = False,
) -> tuple[int, int]:
    """
    Частное numerator / denominator, округлённое до precision значащих цифр.

    Деление в столбик выполняется с precision + 1 цифрами и sticky-цифрой
    остатка: ненулевой остаток гарантирует, что точная середина не будет
    перепутана с "чуть больше середины".

    Args:
        numerator: Делимое (>= 0)
        denominator: Делитель (> 0)
        precision: Количество значащих цифр результата (> 0)
        mode: Правило округления
        negative: Знак частного (важен для ceiling/floor)

    Returns:
        (coefficient, scale): частное = coefficient × 10^scale

    Examples:
        >>> divide_to_precision(4, 3, 3, RoundingMode.HALF_UP)
        (133, -2)
        >>> divide_to_precision(2, 3, 3, RoundingMode.HALF_UP)
        (667, -3)
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")
    if numerator == 0:
        return 0, 0

    shift = max(0, precision + 1 + digit_count(denominator) - digit_count(numerator))
    quotient, remainder = divmod(numerator * 10**shift, denominator)

    # sticky-цифра: 0 если деление точное, иначе 1
    quotient = quotient * 10 + (1 if remainder else 0)
    scale = -shift - 1

    drop = digit_count(quotient) - precision
    if drop > 0:
        quotient = round_coefficient(quotient, drop, mode, negative)
        scale += drop

    return quotient, scale
