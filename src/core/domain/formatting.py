"""
Formatting — текстовое представление BigDecimal

Формат задаётся строкой `[+ ][N][E|F]` либо целым N:
- '+'  — печатать '+' перед неотрицательными значениями
- ' '  — печатать пробел перед неотрицательными значениями
- N    — группировать цифры блоками по N, разделяя пробелом
- E    — научная нотация 0.DIGITSE<exp> (по умолчанию)
- F    — обычная запись с фиксированной точкой

Примеры для 1234.5678:
    ""    → 0.12345678E4
    "F"   → 1234.5678
    "+3F" → +1 234.567 8
    "4E"  → 0.1234 5678E4
"""

import re
from typing import Final, NamedTuple


class FormatSpec(NamedTuple):
    """Разобранная строка формата."""

    plus: str  # "", "+" или " "
    group: int  # 0 = без группировки
    fixed: bool  # True = F, False = E


DEFAULT_FORMAT: Final[FormatSpec] = FormatSpec(plus="", group=0, fixed=False)

_FORMAT_RE: Final[re.Pattern[str]] = re.compile(r"(?P<plus>[+ ])?(?P<group>[0-9]*)(?P<style>[EeFf])?")


def parse_format(fmt: str | int = "") -> FormatSpec:
    """
    Разбор строки формата.

    Raises:
        ValueError: Если формат не соответствует грамматике

    Examples:
        >>> parse_format("+5F")
        FormatSpec(plus='+', group=5, fixed=True)
        >>> parse_format(3)
        FormatSpec(plus='', group=3, fixed=False)
    """
    if isinstance(fmt, bool):
        raise TypeError("format must be str or int, got bool")
    if isinstance(fmt, int):
        if fmt < 0:
            raise ValueError(f"group width must be non-negative, got {fmt}")
        return FormatSpec(plus="", group=fmt, fixed=False)
    if not isinstance(fmt, str):
        raise TypeError(f"format must be str or int, got {type(fmt).__name__}")

    match = _FORMAT_RE.fullmatch(fmt)
    if match is None:
        raise ValueError(f"invalid format: {fmt!r}")

    group_text = match.group("group")
    style = (match.group("style") or "E").upper()
    return FormatSpec(
        plus=match.group("plus") or "",
        group=int(group_text) if group_text else 0,
        fixed=style == "F",
    )


def _group_from_left(text: str, size: int) -> str:
    if size <= 0 or len(text) <= size:
        return text
    return " ".join(text[i : i + size] for i in range(0, len(text), size))


def _group_from_right(text: str, size: int) -> str:
    if size <= 0 or len(text) <= size:
        return text
    head = len(text) % size
    blocks = [text[:head]] if head else []
    blocks.extend(text[i : i + size] for i in range(head, len(text), size))
    return " ".join(blocks)


def format_decimal(
    negative: bool,
    digits: str,
    exponent: int,
    special: str | None,
    spec: FormatSpec = DEFAULT_FORMAT,
) -> str:
    """
    Текстовое представление значения ±0.digits × 10^exponent.

    Args:
        negative: Знак значения
        digits: Каноническая строка цифр ("" для нуля)
        exponent: Десятичная экспонента
        special: "nan", "infinity" или None
        spec: Разобранный формат

    Returns:
        Строка; NaN всегда "NaN"
    """
    if special == "nan":
        return "NaN"

    prefix = "-" if negative else spec.plus
    if special == "infinity":
        return f"{prefix}Infinity"

    if not digits:
        return f"{prefix}0.0"

    if not spec.fixed:
        return f"{prefix}0.{_group_from_left(digits, spec.group)}E{exponent}"

    if exponent <= 0:
        integer, fraction = "0", "0" * -exponent + digits
    elif exponent >= len(digits):
        integer, fraction = digits + "0" * (exponent - len(digits)), "0"
    else:
        integer, fraction = digits[:exponent], digits[exponent:]

    integer = _group_from_right(integer, spec.group)
    fraction = _group_from_left(fraction, spec.group)
    return f"{prefix}{integer}.{fraction}"
