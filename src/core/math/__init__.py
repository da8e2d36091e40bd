"""
Core math modules для BigDecimal

Целочисленные примитивы над десятичными коэффициентами и правила округления.
"""

# Digits
from src.core.math.digits import (
    BASE_FIG,
    DOUBLE_FIG,
    EXPONENT_MAX,
    EXPONENT_MIN,
    FLOAT_MAX_DIGITS,
    SQRT_MAX_ITERATIONS,
    canonicalize,
    digit_count,
    digits_to_int,
    int_to_digits,
    isqrt_newton,
    to_coefficient,
    validate_digits,
)

# Rounding
from src.core.math.rounding import (
    DEFAULT_ROUNDING_MODE,
    ROUNDING_ALIASES,
    RoundingMode,
    divide_to_precision,
    round_coefficient,
    should_round_away,
)

__all__ = [
    # Digits: Constants
    "BASE_FIG",
    "DOUBLE_FIG",
    "EXPONENT_MAX",
    "EXPONENT_MIN",
    "FLOAT_MAX_DIGITS",
    "SQRT_MAX_ITERATIONS",
    # Digits: Functions
    "canonicalize",
    "digit_count",
    "digits_to_int",
    "int_to_digits",
    "isqrt_newton",
    "to_coefficient",
    "validate_digits",
    # Rounding: Types
    "RoundingMode",
    "DEFAULT_ROUNDING_MODE",
    "ROUNDING_ALIASES",
    # Rounding: Functions
    "divide_to_precision",
    "round_coefficient",
    "should_round_away",
]
