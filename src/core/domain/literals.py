"""
Literals — разбор десятичных литералов и конверсия из float

Грамматика литерала (пробелы по краям игнорируются):

    [+-] digits [. [digits]] [(e|E|d|D) [+-] digits]
    [+-] . digits [(e|E|d|D) [+-] digits]

где digits — цифры 0-9, допускающие одиночный '_' между цифрами (1_000).
Точные токены NaN, Infinity, +Infinity, -Infinity задают специальные значения.

Модуль возвращает примитивные части (ParsedNumber); сборка BigDecimal
и проверка диапазона экспоненты выполняются в big_decimal.
"""

import math
import re
from typing import Final, NamedTuple

from src.core.errors import ParseError
from src.core.math.digits import FLOAT_MAX_DIGITS, digits_to_int
from src.core.math.rounding import RoundingMode, divide_to_precision


class ParsedNumber(NamedTuple):
    """Разобранный литерал: value = ±coefficient × 10^scale, либо special."""

    negative: bool
    coefficient: int
    scale: int
    special: str | None = None  # "nan" | "infinity" | None


_DIGITS: Final[str] = r"[0-9]+(?:_[0-9]+)*"

_NUMBER_PATTERN: Final[str] = (
    rf"(?P<sign>[+-])?"
    rf"(?:(?P<int>{_DIGITS})(?:\.(?P<frac>{_DIGITS})?)?|\.(?P<frac_only>{_DIGITS}))"
    rf"(?:[eEdD](?P<exp>[+-]?[0-9]+))?"
)

_NUMBER_RE: Final[re.Pattern[str]] = re.compile(_NUMBER_PATTERN)

_SPECIAL_LITERALS: Final[dict[str, ParsedNumber]] = {
    "NaN": ParsedNumber(False, 0, 0, "nan"),
    "Infinity": ParsedNumber(False, 0, 0, "infinity"),
    "+Infinity": ParsedNumber(False, 0, 0, "infinity"),
    "-Infinity": ParsedNumber(True, 0, 0, "infinity"),
}

# Экспоненты длиннее этого заведомо вне диапазона; int() не вызываем
_MAX_EXPONENT_TEXT: Final[int] = 18
_SATURATED_EXPONENT: Final[int] = 10**_MAX_EXPONENT_TEXT


def _parts_from_match(match: re.Match[str]) -> ParsedNumber:
    integer = (match.group("int") or "").replace("_", "")
    fraction = (match.group("frac") or match.group("frac_only") or "").replace("_", "")

    exponent_text = match.group("exp") or "0"
    unsigned = exponent_text.lstrip("+-").lstrip("0")
    if len(unsigned) > _MAX_EXPONENT_TEXT:
        exponent = -_SATURATED_EXPONENT if exponent_text.startswith("-") else _SATURATED_EXPONENT
    else:
        exponent = int(exponent_text)

    return ParsedNumber(
        negative=match.group("sign") == "-",
        coefficient=digits_to_int((integer + fraction).lstrip("0")),
        scale=exponent - len(fraction),
    )


def parse_literal(text: str) -> ParsedNumber:
    """
    Строгий разбор десятичного литерала.

    Args:
        text: Литерал

    Returns:
        ParsedNumber

    Raises:
        ParseError: Если строка не является валидным литералом

    Examples:
        >>> parse_literal("-1_000.50e-1")
        ParsedNumber(negative=True, coefficient=100050, scale=-3, special=None)
        >>> parse_literal("NaN").special
        'nan'
    """
    if not isinstance(text, str):
        raise TypeError(f"literal must be str, got {type(text).__name__}")

    stripped = text.strip()
    if stripped in _SPECIAL_LITERALS:
        return _SPECIAL_LITERALS[stripped]

    match = _NUMBER_RE.fullmatch(stripped)
    if match is None:
        raise ParseError(text)
    return _parts_from_match(match)


def interpret_loosely(text: str) -> ParsedNumber:
    """
    Нестрогий разбор: самый длинный валидный числовой префикс.

    Хвост после префикса игнорируется; при отсутствии префикса — ноль.
    Никогда не поднимает ParseError.

    Examples:
        >>> interpret_loosely("12.5kg").coefficient
        125
        >>> interpret_loosely("abc")
        ParsedNumber(negative=False, coefficient=0, scale=0, special=None)

    Raises:
        TypeError: Если text не строка
    """
    if not isinstance(text, str):
        raise TypeError(f"literal must be str, got {type(text).__name__}")
    stripped = text.strip()
    if stripped in _SPECIAL_LITERALS:
        return _SPECIAL_LITERALS[stripped]

    match = _NUMBER_RE.match(stripped)
    if match is None:
        return ParsedNumber(False, 0, 0)
    return _parts_from_match(match)


def parse_float(
    value: float,
    digits: int = 0,
    mode: RoundingMode = RoundingMode.HALF_UP,
) -> ParsedNumber:
    """
    Конверсия float в десятичные части.

    Без digits используется кратчайшее представление, однозначно
    восстанавливающее float (не более FLOAT_MAX_DIGITS значащих цифр).
    С digits точное двоичное значение округляется до digits цифр.

    Args:
        value: Исходное значение
        digits: Количество значащих цифр (0 — кратчайшее представление)
        mode: Правило округления для digits > 0

    Returns:
        ParsedNumber (±0.0 сохраняют знак, inf/nan → special)

    Raises:
        ValueError: Если digits > FLOAT_MAX_DIGITS
    """
    if digits > FLOAT_MAX_DIGITS:
        raise ValueError(
            f"float conversion supports at most {FLOAT_MAX_DIGITS} digits, got {digits}"
        )

    if math.isnan(value):
        return ParsedNumber(False, 0, 0, "nan")

    negative = math.copysign(1.0, value) < 0
    if math.isinf(value):
        return ParsedNumber(negative, 0, 0, "infinity")
    if value == 0.0:
        return ParsedNumber(negative, 0, 0)

    if not digits:
        return parse_literal(repr(value))

    numerator, denominator = abs(value).as_integer_ratio()
    coefficient, scale = divide_to_precision(numerator, denominator, digits, mode, negative)
    return ParsedNumber(negative, coefficient, scale)
