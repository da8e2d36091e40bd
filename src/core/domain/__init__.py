"""
Domain models and value objects.

Contains BigDecimal, its literal grammar and text formatting.
"""

from src.core.domain.big_decimal import (
    INFINITY,
    MINUS_ONE,
    NAN,
    NEGATIVE_INFINITY,
    NEGATIVE_ZERO,
    ONE,
    SIGN_NAN,
    SIGN_NEGATIVE_FINITE,
    SIGN_NEGATIVE_INFINITE,
    SIGN_NEGATIVE_ZERO,
    SIGN_POSITIVE_FINITE,
    SIGN_POSITIVE_INFINITE,
    SIGN_POSITIVE_ZERO,
    ZERO,
    BigDecimal,
    DecimalLike,
    Kind,
    to_decimal,
)
from src.core.domain.formatting import FormatSpec, format_decimal, parse_format
from src.core.domain.literals import ParsedNumber, interpret_loosely, parse_float, parse_literal

__all__ = [
    # BigDecimal
    "BigDecimal",
    "DecimalLike",
    "Kind",
    "to_decimal",
    # Values
    "NAN",
    "INFINITY",
    "NEGATIVE_INFINITY",
    "ZERO",
    "NEGATIVE_ZERO",
    "ONE",
    "MINUS_ONE",
    # Sign codes
    "SIGN_NAN",
    "SIGN_POSITIVE_ZERO",
    "SIGN_NEGATIVE_ZERO",
    "SIGN_POSITIVE_FINITE",
    "SIGN_NEGATIVE_FINITE",
    "SIGN_POSITIVE_INFINITE",
    "SIGN_NEGATIVE_INFINITE",
    # Literals
    "ParsedNumber",
    "parse_literal",
    "interpret_loosely",
    "parse_float",
    # Formatting
    "FormatSpec",
    "parse_format",
    "format_decimal",
]
