"""
Errors — иерархия исключений десятичной арифметики

Каждое исключительное условие (деление на ноль, NaN, Infinity, выход
экспоненты за диапазон) управляется флагом в DecimalConfig:
- флаг включён → поднимается соответствующее исключение
- флаг выключен → возвращается sentinel (NaN, ±Infinity, ±0)

ParseError и ConvergenceError от флагов не зависят.
"""


class DecimalError(ArithmeticError):
    """Базовое исключение для всех ошибок BigDecimal."""

    pass


class ParseError(DecimalError, ValueError):
    """
    Невалидный десятичный литерал или dump-строка.

    Наследует ValueError: некорректный вход — это ошибка значения аргумента.
    """

    def __init__(self, text: str, reason: str = "invalid decimal literal"):
        super().__init__(f"{reason}: {text!r}")
        self.text = text
        self.reason = reason


class ZeroDivideError(DecimalError, ZeroDivisionError):
    """Деление на точный ноль при включённом флаге zero_divide."""

    pass


class DomainError(DecimalError):
    """
    Результат вне области определения операции.

    Возникает при:
    - конверсии NaN/Infinity в int или Fraction
    - получении NaN при включённом флаге nan (например, sqrt(-1))
    - получении Infinity при включённом флаге infinity
    """

    pass


class DecimalOverflowError(DecimalError, OverflowError):
    """Экспонента результата больше EXPONENT_MAX при включённом флаге overflow."""

    pass


class DecimalUnderflowError(DecimalError):
    """Экспонента результата меньше EXPONENT_MIN при включённом флаге underflow."""

    pass


class ConvergenceError(DecimalError):
    """Итеративный алгоритм не сошёлся за отведённое число итераций."""

    pass
