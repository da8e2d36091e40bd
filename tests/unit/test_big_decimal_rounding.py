"""
Тесты для BigDecimal — округление, сравнение, интроспекция, конверсии

Coverage:
- round_to_integer / round_to_places и семейства ceil/floor/truncate
- round(), math.ceil(), math.floor(), math.trunc()
- Сравнение с NaN, ±0, ±Infinity и смешанными типами
- Хэш, совместимый с int / Fraction / Decimal
- split, sign_code, precision, scale
- int, float, as_integer_ratio
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.domain.big_decimal import (
    INFINITY,
    NAN,
    NEGATIVE_INFINITY,
    NEGATIVE_ZERO,
    SIGN_NAN,
    SIGN_NEGATIVE_FINITE,
    SIGN_NEGATIVE_INFINITE,
    SIGN_NEGATIVE_ZERO,
    SIGN_POSITIVE_FINITE,
    SIGN_POSITIVE_INFINITE,
    SIGN_POSITIVE_ZERO,
    ZERO,
    BigDecimal,
)
from src.core.errors import DomainError
from src.modes.config import limit, rounding_mode


def D(text: str) -> BigDecimal:
    return BigDecimal.parse(text)


# =============================================================================
# ТЕСТЫ: Округление
# =============================================================================


class TestRoundToInteger:
    """Тесты round_to_integer по всем правилам."""

    @pytest.mark.parametrize(
        "mode,positive,negative",
        [
            ("up", 3, -3),
            ("down", 2, -2),
            ("half_up", 3, -3),
            ("half_down", 2, -2),
            ("half_even", 2, -2),
            ("ceiling", 3, -2),
            ("floor", 2, -3),
        ],
    )
    def test_ties(self, mode, positive, negative):
        assert D("2.5").round_to_integer(mode) == positive
        assert D("-2.5").round_to_integer(mode) == negative

    def test_default_mode_from_config(self):
        assert D("2.5").round_to_integer() == 3

        rounding_mode("half_even")
        assert D("2.5").round_to_integer() == 2
        assert round(D("2.5")) == 2

    def test_half_even_laws(self):
        """round(0.5, 0, half_even) = 0; round(1.5, 0, half_even) = 2."""
        assert D("0.5").round_to_places(0, "half_even") == 0
        assert D("1.5").round_to_places(0, "half_even") == 2
        assert D("0.5").round_to_integer("banker") == 0

    def test_returns_int(self):
        assert isinstance(D("7.9").round_to_integer(), int)
        assert D("1e30").round_to_integer() == 10**30

    def test_specials_raise(self):
        with pytest.raises(DomainError):
            NAN.round_to_integer()
        with pytest.raises(DomainError):
            INFINITY.floor_to_integer()

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="unknown rounding mode"):
            D("1.5").round_to_integer("sideways")


class TestRoundToPlaces:
    """Тесты round_to_places."""

    def test_fraction_places(self):
        assert D("1.2345").round_to_places(2) == D("1.23")
        assert D("1.235").round_to_places(2, "half_even") == D("1.24")
        assert D("1.245").round_to_places(2, "half_even") == D("1.24")

    def test_negative_places(self):
        """places < 0 обнуляет младшие целые разряды."""
        assert D("1234").round_to_places(-2) == 1200
        assert D("1250").round_to_places(-2, "half_even") == 1200
        assert D("1350").round_to_places(-2, "half_even") == 1400

    def test_carry(self):
        value = D("9.99").round_to_places(1)
        assert value == 10
        assert value.digits == "1"
        assert value.exponent == 2

    def test_enough_places_unchanged(self):
        value = D("1.5")
        assert value.round_to_places(5) is value

    def test_rounded_away_zero_keeps_sign(self):
        assert D("-0.4").round_to_places(0).sign_code == SIGN_NEGATIVE_ZERO
        assert D("0.4").round_to_places(0).sign_code == SIGN_POSITIVE_ZERO

    def test_specials_pass_through(self):
        assert NAN.round_to_places(2).is_nan()
        assert INFINITY.round_to_places(2) is INFINITY

    def test_places_type(self):
        with pytest.raises(TypeError, match="places must be an integer"):
            D("1.5").round_to_places(1.5)

    def test_builtin_round(self):
        assert round(D("2.567"), 2) == D("2.57")
        assert isinstance(round(D("2.5")), int)


class TestDirectedRounding:
    """Тесты ceil / floor / truncate."""

    def test_ceil_scenario(self):
        """ceil(3.14159) = 4; ceil(3.14159, 3) = 3.142."""
        value = D("3.14159")
        assert value.ceil_to_integer() == 4
        assert value.ceil_to_places(3) == D("3.142")

    def test_integers(self):
        value = D("-1.5")
        assert value.ceil_to_integer() == -1
        assert value.floor_to_integer() == -2
        assert value.truncate_to_integer() == -1

    def test_places(self):
        assert D("1.234").ceil_to_places(2) == D("1.24")
        assert D("1.234").floor_to_places(2) == D("1.23")
        assert D("-1.239").truncate_to_places(2) == D("-1.23")
        assert D("-1.231").floor_to_places(2) == D("-1.24")

    def test_math_module(self):
        assert math.ceil(D("1.1")) == 2
        assert math.floor(D("-1.1")) == -2
        assert math.trunc(D("-1.9")) == -1

    def test_fix_frac(self):
        value = D("-12.345")
        assert value.fix() == -12
        assert value.frac() == D("-0.345")
        assert value.fix() + value.frac() == value

    def test_fix_frac_zero_signs(self):
        assert D("12").frac().sign_code == SIGN_POSITIVE_ZERO
        assert D("-12").frac().sign_code == SIGN_NEGATIVE_ZERO
        assert D("-0.5").fix().sign_code == SIGN_NEGATIVE_ZERO

    def test_frac_ignores_limit(self):
        limit(2)
        assert D("123.456").frac() == D("0.456")

    def test_fix_specials(self):
        assert INFINITY.fix() is INFINITY
        assert NAN.frac().is_nan()


# =============================================================================
# ТЕСТЫ: Сравнение и хэш
# =============================================================================


class TestComparison:
    """Тесты сравнения."""

    def test_mixed_equality(self):
        assert D("1.0") == 1
        assert D("1") == 1.0
        assert D("0.5") == 0.5
        assert D("0.75") == Fraction(3, 4)
        assert D("1") == Decimal("1.00")
        assert D("1") != "1"

    def test_float_compared_by_exact_value(self):
        """float сравнивается по точному двоичному значению, как у Decimal."""
        exact = D("0.1000000000000000055511151231257827021181583404541015625")

        assert D("0.1") != 0.1
        assert exact == 0.1
        assert D("0.1") < 0.1
        assert D("0.1").compare(0.1) == -1
        assert exact.compare(0.1) == 0
        assert D("0.1") == BigDecimal.from_float(0.1)

    def test_signed_zero_equality(self):
        assert NEGATIVE_ZERO == ZERO
        assert D("-0.0") == 0.0

    def test_ordering(self):
        values = [D("3"), D("-1"), INFINITY, D("0.5"), NEGATIVE_INFINITY, D("-0.5")]
        assert sorted(values) == [NEGATIVE_INFINITY, D("-1"), D("-0.5"), D("0.5"), D("3"), INFINITY]
        assert NEGATIVE_INFINITY < D("-1e999")
        assert INFINITY > D("1e999999")
        assert D("1.5") <= Fraction(3, 2)
        assert D("1.5") >= 1

    def test_compare(self):
        assert D("1").compare("2") == -1
        assert D("10").compare("9.99") == 1
        assert D("0.1").compare("0.10") == 0
        assert D("0.12").compare("0.119") == 1
        assert NEGATIVE_ZERO.compare(0) == 0

    def test_nan(self):
        """NaN не равен ничему, включая себя; порядок не определён."""
        assert not NAN == NAN
        assert NAN != NAN
        assert not NAN < 1
        assert not NAN >= 1
        assert NAN.compare(1) is None
        assert D("1").compare(NAN) is None

    def test_infinities(self):
        assert INFINITY == INFINITY
        assert INFINITY != NEGATIVE_INFINITY
        assert INFINITY == float("inf")

    def test_string_ordering_rejected(self):
        with pytest.raises(TypeError):
            D("1") < "2"


class TestHash:
    """Тесты хэша: равные значения разных типов имеют равный хэш."""

    def test_consistent_with_numbers(self):
        assert hash(D("1.0")) == hash(1)
        assert hash(D("-1")) == hash(-1)
        assert hash(D("0.5")) == hash(Fraction(1, 2))
        assert hash(D("-2.5")) == hash(Fraction(-5, 2))
        assert hash(D("1.5")) == hash(Decimal("1.5"))
        assert hash(D("1e40")) == hash(10**40)

    def test_zero_and_infinity(self):
        assert hash(ZERO) == hash(NEGATIVE_ZERO) == 0
        assert hash(INFINITY) == hash(float("inf"))
        assert hash(NEGATIVE_INFINITY) == hash(float("-inf"))

    @pytest.mark.parametrize("value", [0.5, -2.25, 0.1, 1e-7, 3.0, 1e300])
    def test_equal_float_has_equal_hash(self, value):
        exact = D(str(Decimal(value)))

        assert exact == value
        assert hash(exact) == hash(value)
        if D(repr(value)) == value:
            assert hash(D(repr(value))) == hash(value)

    def test_set_membership(self):
        assert len({D("1"), D("1.00"), 1}) == 1
        assert isinstance(hash(NAN), int)


# =============================================================================
# ТЕСТЫ: Интроспекция
# =============================================================================


class TestIntrospection:
    """Тесты split / sign_code / precision / scale."""

    def test_split(self):
        assert D("-123.45").split() == (-1, "12345", 10, 3)
        assert ZERO.split() == (1, "0", 10, 0)
        assert NAN.split() == (0, "NaN", 10, 0)
        assert NEGATIVE_INFINITY.split() == (-1, "Infinity", 10, 0)

    def test_sign_code(self):
        assert NAN.sign_code == SIGN_NAN
        assert ZERO.sign_code == SIGN_POSITIVE_ZERO
        assert NEGATIVE_ZERO.sign_code == SIGN_NEGATIVE_ZERO
        assert D("5").sign_code == SIGN_POSITIVE_FINITE
        assert D("-5").sign_code == SIGN_NEGATIVE_FINITE
        assert INFINITY.sign_code == SIGN_POSITIVE_INFINITE
        assert NEGATIVE_INFINITY.sign_code == SIGN_NEGATIVE_INFINITE

    @pytest.mark.parametrize(
        "text,precision,scale",
        [
            ("1e20", 21, 0),
            ("1e-20", 20, 20),
            ("123.45", 5, 2),
            ("0.00123", 5, 5),
            ("1200", 4, 0),
            ("0", 0, 0),
        ],
    )
    def test_precision_scale(self, text, precision, scale):
        value = D(text)
        assert value.precision() == precision
        assert value.scale() == scale
        assert value.precision_scale() == (precision, scale)

    def test_significant_digits(self):
        assert D("1200").n_significant_digits() == 2
        assert ZERO.n_significant_digits() == 0

    def test_predicates(self):
        assert INFINITY.is_infinite() == 1
        assert NEGATIVE_INFINITY.is_infinite() == -1
        assert D("1").is_infinite() is None
        assert D("1").is_finite()
        assert not NAN.is_finite()
        assert NEGATIVE_ZERO.is_zero()
        assert D("0.1").is_nonzero()
        assert NAN.is_nonzero()

    def test_bool(self):
        assert not ZERO
        assert not NEGATIVE_ZERO
        assert NAN
        assert D("0.1")


# =============================================================================
# ТЕСТЫ: Конверсии
# =============================================================================


class TestConversions:
    """Тесты int / float / as_integer_ratio."""

    def test_to_int_truncates(self):
        assert int(D("-12.9")) == -12
        assert D("1e30").to_int() == 10**30
        assert D("0.999").to_int() == 0
        assert D("1.23E-5").to_int() == 0

    def test_to_int_specials(self):
        with pytest.raises(DomainError, match="cannot be converted to an integer"):
            int(NAN)
        with pytest.raises(DomainError):
            INFINITY.to_int()

    def test_float(self):
        assert float(D("0.1")) == 0.1
        assert float(INFINITY) == float("inf")
        assert float(NEGATIVE_INFINITY) == float("-inf")
        assert math.isnan(float(NAN))
        assert math.copysign(1.0, float(NEGATIVE_ZERO)) == -1.0

    def test_integer_ratio(self):
        assert D("-0.75").as_integer_ratio() == (-3, 4)
        assert D("1200").as_integer_ratio() == (1200, 1)
        assert D("-0.75").to_fraction() == Fraction(-3, 4)

        with pytest.raises(DomainError):
            INFINITY.as_integer_ratio()
