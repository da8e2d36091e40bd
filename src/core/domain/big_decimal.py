"""
BigDecimal — неизменяемое десятичное число произвольной точности

Представление: value = sign × 0.digits × 10^exponent, где
- sign ∈ {-1, +1} для конечных значений и Infinity, 0 для NaN
- digits — значащие цифры без ведущих и хвостовых нулей ("" для нуля)
- kind ∈ {FINITE, NAN, INFINITY}

Арифметика точная: add/sub/mult без digits возвращают точный результат;
quo без digits возвращает частное с точностью по умолчанию
max(2 × max(len(a.digits), len(b.digits)), 2 × DOUBLE_FIG).
Лимит DecimalConfig.precision_limit (если не 0) дополнительно ограничивает
количество значащих цифр результата.

Исключительные условия (NaN, Infinity, деление на ноль, выход экспоненты
за диапазон) управляются флагами DecimalConfig.exception_flags:
- флаг включён → исключение из src.core.errors
- флаг выключен → sentinel (NaN, ±Infinity, ±0)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Экземпляры неизменяемы и безопасны для разделения между потоками
2. Каноническая форма: одинаковые значения имеют одинаковые (sign, digits, exponent)
3. NaN не равен ничему, включая себя; -0 == +0
4. Для конечных a и b ≠ 0: q, m = divmod(a, b) → q × b + m == a точно
"""

import logging
import math
import re
import sys
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Final, Union

from src.core.contracts.validators import validate_big_decimal
from src.core.domain.formatting import format_decimal, parse_format
from src.core.domain.literals import (
    ParsedNumber,
    interpret_loosely as _interpret_loosely,
    parse_float,
    parse_literal,
)
from src.core.errors import (
    DecimalOverflowError,
    DecimalUnderflowError,
    DomainError,
    ParseError,
    ZeroDivideError,
)
from src.core.math.digits import (
    BASE_FIG,
    DOUBLE_FIG,
    EXPONENT_MAX,
    EXPONENT_MIN,
    canonicalize,
    digit_count,
    isqrt_newton,
    to_coefficient,
    validate_digits,
)
from src.core.math.rounding import (
    RoundingMode,
    divide_to_precision,
    round_coefficient,
)
from src.modes.config import ExceptionFlag, get_config

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS И КОНСТАНТЫ
# =============================================================================


class Kind(str, Enum):
    """Вид значения."""

    FINITE = "finite"
    NAN = "nan"
    INFINITY = "infinity"


# Коды знака (sign_code)
SIGN_NAN: Final[int] = 0
SIGN_POSITIVE_ZERO: Final[int] = 1
SIGN_NEGATIVE_ZERO: Final[int] = -1
SIGN_POSITIVE_FINITE: Final[int] = 2
SIGN_NEGATIVE_FINITE: Final[int] = -2
SIGN_POSITIVE_INFINITE: Final[int] = 3
SIGN_NEGATIVE_INFINITE: Final[int] = -3

# Guard-цифры промежуточных результатов power при заданной точности
POWER_GUARD_DIGITS: Final[int] = 2

_CANONICAL_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"[1-9](?:[0-9]*[1-9])?")
_DUMP_PREFIX_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]+")

_HASH_MODULUS: Final[int] = sys.hash_info.modulus
_HASH_INF: Final[int] = sys.hash_info.inf


# =============================================================================
# BIGDECIMAL
# =============================================================================


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class BigDecimal:
    """
    Неизменяемое десятичное число произвольной точности.

    Прямой конструктор принимает только каноническую форму; для
    построения из литералов и чисел используются parse / from_* / to_decimal.
    """

    sign: int
    digits: str = ""
    exponent: int = 0
    kind: Kind = Kind.FINITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", Kind(self.kind))

        if self.kind == Kind.NAN:
            if self.sign != 0 or self.digits or self.exponent != 0:
                raise ValueError("NaN carries no sign, digits or exponent")
            return

        if self.sign not in (-1, 1):
            raise ValueError(f"sign must be -1 or 1, got {self.sign!r}")

        if self.kind == Kind.INFINITY:
            if self.digits or self.exponent != 0:
                raise ValueError("Infinity carries no digits or exponent")
            return

        if not self.digits:
            if self.exponent != 0:
                raise ValueError(f"zero must have exponent 0, got {self.exponent}")
            return

        if not _CANONICAL_DIGITS_RE.fullmatch(self.digits):
            raise ValueError(f"digits are not canonical: {self.digits!r}")

        if not EXPONENT_MIN <= self.exponent <= EXPONENT_MAX:
            raise ValueError(f"exponent out of range: {self.exponent}")

    # -------------------------------------------------------------------------
    # Построение
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "BigDecimal":
        """
        Строгий разбор десятичного литерала.

        Raises:
            ParseError: Если строка не является валидным литералом

        Examples:
            >>> BigDecimal.parse("12.50")
            BigDecimal('0.125E2')
            >>> BigDecimal.parse("-Infinity")
            BigDecimal('-Infinity')
        """
        return _from_parsed(parse_literal(text))

    @classmethod
    def interpret_loosely(cls, text: str) -> "BigDecimal":
        """Самый длинный валидный числовой префикс строки; ноль если его нет."""
        return _from_parsed(_interpret_loosely(text))

    @classmethod
    def from_int(cls, value: int) -> "BigDecimal":
        """Точная конверсия целого."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return _finish(value < 0, abs(value), 0, apply_limit=False)

    @classmethod
    def from_float(cls, value: float, digits: int | None = None) -> "BigDecimal":
        """
        Конверсия float (с потерей точности).

        Args:
            value: Исходное значение
            digits: Количество значащих цифр (1..17); None — кратчайшее
                представление, однозначно восстанавливающее float

        Examples:
            >>> BigDecimal.from_float(0.1)
            BigDecimal('0.1E0')
            >>> BigDecimal.from_float(0.1, 17)
            BigDecimal('0.10000000000000001E0')
        """
        if not isinstance(value, float):
            raise TypeError(f"expected float, got {type(value).__name__}")
        precision = validate_digits(digits)
        return _from_parsed(parse_float(value, precision, get_config().rounding_mode))

    @classmethod
    def from_ratio(
        cls, numerator: int, denominator: int, digits: int | None = None
    ) -> "BigDecimal":
        """
        Частное двух целых.

        Без digits используется точность деления по умолчанию.
        """
        return cls.from_int(numerator).quo(cls.from_int(denominator), digits)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "BigDecimal":
        """Точная конверсия decimal.Decimal (sNaN и NaN → NaN)."""
        if value.is_nan():
            return NAN
        return cls.parse(str(value))

    # -------------------------------------------------------------------------
    # Внутренние представления
    # -------------------------------------------------------------------------

    def _parts(self) -> tuple[int, int]:
        """(coefficient, scale): |value| = coefficient × 10^scale."""
        return to_coefficient(self.digits, self.exponent)

    @property
    def _negative(self) -> bool:
        return self.sign < 0

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_nan(self) -> bool:
        return self.kind == Kind.NAN

    def is_finite(self) -> bool:
        return self.kind == Kind.FINITE

    def is_infinite(self) -> int | None:
        """+1 для +Infinity, -1 для -Infinity, None для остальных."""
        if self.kind == Kind.INFINITY:
            return self.sign
        return None

    def is_zero(self) -> bool:
        """True для +0 и -0."""
        return self.kind == Kind.FINITE and not self.digits

    def is_nonzero(self) -> bool:
        return not self.is_zero()

    def __bool__(self) -> bool:
        return not self.is_zero()

    @property
    def sign_code(self) -> int:
        """
        Код знака:
        NaN → 0, ±0 → ±1, конечное ≠ 0 → ±2, ±Infinity → ±3.
        """
        if self.kind == Kind.NAN:
            return SIGN_NAN
        if self.kind == Kind.INFINITY:
            return SIGN_POSITIVE_INFINITE if self.sign > 0 else SIGN_NEGATIVE_INFINITE
        if not self.digits:
            return SIGN_POSITIVE_ZERO if self.sign > 0 else SIGN_NEGATIVE_ZERO
        return SIGN_POSITIVE_FINITE if self.sign > 0 else SIGN_NEGATIVE_FINITE

    # -------------------------------------------------------------------------
    # Интроспекция
    # -------------------------------------------------------------------------

    def split(self) -> tuple[int, str, int, int]:
        """
        Разложение (sign, digits, base, exponent).

        NaN → (0, "NaN", 10, 0); ±Infinity → (±1, "Infinity", 10, 0);
        ±0 → (±1, "0", 10, 0).

        Examples:
            >>> BigDecimal.parse("-123.45").split()
            (-1, '12345', 10, 3)
        """
        if self.kind == Kind.NAN:
            return 0, "NaN", 10, 0
        if self.kind == Kind.INFINITY:
            return self.sign, "Infinity", 10, 0
        return self.sign, self.digits or "0", 10, self.exponent

    def n_significant_digits(self) -> int:
        """Количество значащих цифр (0 для нуля и специальных значений)."""
        return len(self.digits)

    def scale(self) -> int:
        """Количество цифр после десятичной точки."""
        if not self.digits:
            return 0
        return max(0, len(self.digits) - self.exponent)

    def precision(self) -> int:
        """
        Количество десятичных цифр, необходимых для записи значения
        без экспоненты (ведущие нули дробной части учитываются).

        Examples:
            >>> BigDecimal.parse("1e20").precision()
            21
            >>> BigDecimal.parse("1e-20").precision()
            20
        """
        if not self.digits:
            return 0
        if self.exponent >= len(self.digits):
            return self.exponent
        if self.exponent <= 0:
            return len(self.digits) - self.exponent
        return len(self.digits)

    def precision_scale(self) -> tuple[int, int]:
        return self.precision(), self.scale()

    # -------------------------------------------------------------------------
    # Унарные операции
    # -------------------------------------------------------------------------

    def negate(self) -> "BigDecimal":
        if self.kind == Kind.NAN:
            return self
        return replace(self, sign=-self.sign)

    def __neg__(self) -> "BigDecimal":
        return self.negate()

    def __pos__(self) -> "BigDecimal":
        return self

    def __abs__(self) -> "BigDecimal":
        if self.sign < 0:
            return replace(self, sign=1)
        return self

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "DecimalLike", digits: int | None = None) -> "BigDecimal":
        """
        Сумма; при digits > 0 округляется до digits значащих цифр.

        Examples:
            >>> BigDecimal.parse("1.1").add("2.2")
            BigDecimal('0.33E1')
        """
        other = to_decimal(other)
        precision = validate_digits(digits)

        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            return _nan_result("NaN operand")

        if self.kind == Kind.INFINITY or other.kind == Kind.INFINITY:
            if self.kind == other.kind and self.sign != other.sign:
                return _nan_result("Infinity - Infinity")
            infinite = self if self.kind == Kind.INFINITY else other
            return _infinity_result(infinite._negative, "Infinity operand")

        left, left_scale = self._parts()
        right, right_scale = other._parts()

        if left == 0 and right == 0:
            return _signed_zero(self._negative and other._negative)
        if left == 0:
            return _finish(other._negative, right, right_scale, precision)
        if right == 0:
            return _finish(self._negative, left, left_scale, precision)

        scale = min(left_scale, right_scale)
        total = self.sign * left * 10 ** (left_scale - scale) + other.sign * right * 10 ** (
            right_scale - scale
        )
        if total == 0:
            # Точное сокращение: -0 только при округлении к -∞
            return _signed_zero(get_config().rounding_mode == RoundingMode.FLOOR)
        return _finish(total < 0, abs(total), scale, precision)

    def sub(self, other: "DecimalLike", digits: int | None = None) -> "BigDecimal":
        """Разность; при digits > 0 округляется до digits значащих цифр."""
        return self.add(to_decimal(other).negate(), digits)

    def mult(self, other: "DecimalLike", digits: int | None = None) -> "BigDecimal":
        """Произведение; при digits > 0 округляется до digits значащих цифр."""
        other = to_decimal(other)
        precision = validate_digits(digits)

        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            return _nan_result("NaN operand")

        negative = self.sign * other.sign < 0
        if self.kind == Kind.INFINITY or other.kind == Kind.INFINITY:
            if self.is_zero() or other.is_zero():
                return _nan_result("0 * Infinity")
            return _infinity_result(negative, "Infinity operand")

        left, left_scale = self._parts()
        right, right_scale = other._parts()
        if left == 0 or right == 0:
            return _signed_zero(negative)
        return _finish(negative, left * right, left_scale + right_scale, precision)

    def quo(self, other: "DecimalLike", digits: int | None = None) -> "BigDecimal":
        """
        Частное.

        Без digits (или digits == 0) — точность по умолчанию
        max(2 × max(len(a.digits), len(b.digits)), 2 × DOUBLE_FIG);
        завершающиеся частные возвращаются точно.

        Examples:
            >>> BigDecimal.from_int(4).quo(3, 3)
            BigDecimal('0.133E1')
            >>> BigDecimal.from_int(1).quo(4)
            BigDecimal('0.25E0')
        """
        other = to_decimal(other)
        precision = validate_digits(digits)

        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            return _nan_result("NaN operand")

        negative = self.sign * other.sign < 0
        if self.kind == Kind.INFINITY:
            if other.kind == Kind.INFINITY:
                return _nan_result("Infinity / Infinity")
            return _infinity_result(negative, "Infinity dividend")
        if other.kind == Kind.INFINITY:
            return _signed_zero(negative)

        if other.is_zero():
            return _zero_division(self, other._negative)
        if self.is_zero():
            return _signed_zero(negative)

        if not precision:
            precision = _default_division_precision(self, other)
        precision = _effective_precision(precision)

        left, left_scale = self._parts()
        right, right_scale = other._parts()
        coefficient, scale = divide_to_precision(
            left, right, precision, get_config().rounding_mode, negative
        )
        return _finish(negative, coefficient, scale + left_scale - right_scale, precision)

    def div(self, other: "DecimalLike", digits: int) -> "BigDecimal":
        """
        Частное с явной точностью: digits == 0 эквивалентно quo без digits.

        Для целочисленного частного используйте idiv.
        """
        precision = validate_digits(digits)
        return self.quo(other, precision or None)

    def idiv(self, other: "DecimalLike") -> int:
        """
        Целая часть частного с округлением к −∞ (floor division).

        Raises:
            DomainError: Если операнд NaN или делимое бесконечно
            ZeroDivideError: Если делитель равен нулю
        """
        other = to_decimal(other)
        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            raise DomainError("NaN has no integer quotient")
        if other.is_zero():
            raise ZeroDivideError("integer division by zero")
        if self.kind == Kind.INFINITY:
            raise DomainError("Infinity has no integer quotient")
        if other.kind == Kind.INFINITY:
            if self.is_zero() or self.sign == other.sign:
                return 0
            return -1

        quotient, _ = _floor_divmod(self, other)
        return quotient

    def divmod(self, other: "DecimalLike") -> tuple["BigDecimal", "BigDecimal"]:
        """
        (floor(a / b), a - floor(a / b) × b), вычисленные точно.

        Не подчиняется precision_limit: инвариант q × b + m == a точный.

        Examples:
            >>> BigDecimal.parse("-7").divmod(2)
            (BigDecimal('-0.4E1'), BigDecimal('0.1E1'))
        """
        other = to_decimal(other)

        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            nan = _nan_result("NaN operand")
            return nan, nan
        if other.is_zero():
            if get_config().is_enabled(ExceptionFlag.ZERO_DIVIDE):
                raise ZeroDivideError("divmod by zero")
            nan = _nan_result("divmod by zero")
            return nan, nan
        if self.kind == Kind.INFINITY:
            nan = _nan_result("divmod of Infinity")
            return nan, nan
        if other.kind == Kind.INFINITY:
            if self.is_zero() or self.sign == other.sign:
                return ZERO, self
            return MINUS_ONE, other

        quotient, modulus = _floor_divmod(self, other)
        return _finish(quotient < 0, abs(quotient), 0, apply_limit=False), modulus

    def modulo(self, other: "DecimalLike") -> "BigDecimal":
        """Остаток floor-деления (знак делителя)."""
        return self.divmod(other)[1]

    def remainder(self, other: "DecimalLike") -> "BigDecimal":
        """
        Остаток усечённого деления (знак делимого).

        Examples:
            >>> BigDecimal.parse("-7").remainder(2)
            BigDecimal('-0.1E1')
        """
        other = to_decimal(other)

        if self.kind == Kind.NAN or other.kind == Kind.NAN:
            return _nan_result("NaN operand")
        if other.is_zero():
            if get_config().is_enabled(ExceptionFlag.ZERO_DIVIDE):
                raise ZeroDivideError("remainder by zero")
            return _nan_result("remainder by zero")
        if self.kind == Kind.INFINITY:
            return _nan_result("remainder of Infinity")
        if other.kind == Kind.INFINITY:
            return self

        dividend, divisor, scale = _aligned(self, other)
        return _finish(self._negative, abs(dividend) % abs(divisor), scale, apply_limit=False)

    def power(self, exponent: "int | BigDecimal", digits: int | None = None) -> "BigDecimal":
        """
        Возведение в целую степень (возведение в квадрат и умножение).

        Для exponent >= 0 без digits результат точный; для exponent < 0
        вычисляется 1 / x^|exponent| с точностью деления по умолчанию.

        Raises:
            TypeError: Если exponent не целый

        Examples:
            >>> BigDecimal.from_int(2).power(10)
            BigDecimal('0.1024E4')
        """
        n = _integral_exponent(exponent)
        precision = validate_digits(digits)

        if self.kind == Kind.NAN:
            return _nan_result("NaN base")
        if n == 0:
            return ONE

        negative = self._negative and n % 2 == 1
        if self.kind == Kind.INFINITY:
            if n > 0:
                return _infinity_result(negative, "Infinity base")
            return _signed_zero(negative)
        if self.is_zero():
            if n > 0:
                return _signed_zero(negative)
            return _zero_division(ONE, divisor_negative=negative)

        # Ранняя проверка диапазона: 10^((e-1)·n) <= |x|^n < 10^(e·n)
        magnitude = abs(n)
        low, high = (self.exponent - 1) * magnitude, self.exponent * magnitude
        if n < 0:
            low, high = -high, -low
        if low >= EXPONENT_MAX:
            return _overflow(negative)
        if high < EXPONENT_MIN:
            return _underflow(negative)

        if n > 0:
            working = _effective_precision(precision)
            coefficient, scale = self._power_parts(magnitude, working)
            return _finish(negative, coefficient, scale, precision)

        target = _effective_precision(precision or _default_division_precision(self, self))
        coefficient, scale = self._power_parts(magnitude, target + digit_count(magnitude) + POWER_GUARD_DIGITS)
        denominator = _finish(negative, coefficient, scale, apply_limit=False)
        return ONE.quo(denominator, target)

    def _power_parts(self, n: int, precision: int) -> tuple[int, int]:
        """|x|^n как (coefficient, scale); при precision > 0 с guard-цифрами."""
        guard = precision + digit_count(n) + POWER_GUARD_DIGITS if precision else 0

        def trim(coefficient: int, scale: int) -> tuple[int, int]:
            if guard:
                drop = digit_count(coefficient) - guard
                if drop > 0:
                    coefficient = round_coefficient(coefficient, drop, RoundingMode.HALF_EVEN)
                    scale += drop
            return coefficient, scale

        base, base_scale = self._parts()
        result, result_scale = 1, 0

        # Итераций ровно n.bit_length()
        remaining = n
        while remaining:
            if remaining & 1:
                result, result_scale = trim(result * base, result_scale + base_scale)
            remaining >>= 1
            if remaining:
                base, base_scale = trim(base * base, base_scale * 2)

        return result, result_scale

    def sqrt(self, digits: int | None = None) -> "BigDecimal":
        """
        Квадратный корень с не менее чем digits значащими цифрами.

        Без digits — точность деления по умолчанию. Результат корректно
        округлён по текущему правилу округления.

        Raises:
            DomainError: Для отрицательного операнда при включённом флаге nan
            ConvergenceError: Если метод Ньютона не сошёлся

        Examples:
            >>> BigDecimal.from_int(2).sqrt(5)
            BigDecimal('0.14142E1')
        """
        precision = validate_digits(digits)

        if self.kind == Kind.NAN:
            return _nan_result("NaN operand")
        if self.kind == Kind.INFINITY:
            if self.sign > 0:
                return _infinity_result(False, "sqrt(Infinity)")
            return _nan_result("sqrt(-Infinity)")
        if self.is_zero():
            return self
        if self.sign < 0:
            return _nan_result("sqrt of negative number")

        target = _effective_precision(precision or _default_division_precision(self, self))

        coefficient, scale = self._parts()
        if scale % 2:
            coefficient *= 10
            scale -= 1

        # корень должен иметь не менее target + 1 цифр
        shift = target + 1 - (digit_count(coefficient) + 1) // 2
        if shift > 0:
            coefficient *= 100**shift
            scale -= 2 * shift

        root = isqrt_newton(coefficient)
        if root * root != coefficient and root % 5 == 0:
            # неточный корень не должен выглядеть как точная середина
            root += 1

        return _finish(False, root, scale // 2, target)

    # -------------------------------------------------------------------------
    # Округление
    # -------------------------------------------------------------------------

    def _round_at(self, places: int, mode: RoundingMode) -> "BigDecimal":
        """Округление до places цифр после точки (places < 0 — целые разряды)."""
        if self.kind != Kind.FINITE or not self.digits:
            return self

        coefficient, scale = self._parts()
        target = -places
        if scale >= target:
            return self

        rounded = round_coefficient(coefficient, target - scale, mode, self._negative)
        return _finish(self._negative, rounded, target, apply_limit=False)

    def _to_integer(self, mode: RoundingMode) -> int:
        if self.kind != Kind.FINITE:
            raise DomainError(f"{self.to_s()} cannot be converted to an integer")
        return self._round_at(0, mode).to_int()

    def round_to_integer(self, mode: RoundingMode | str | None = None) -> int:
        """
        Округление до целого по mode (по умолчанию — текущее правило).

        Raises:
            DomainError: Для NaN и Infinity
        """
        return self._to_integer(_resolve_mode(mode))

    def round_to_places(self, places: int, mode: RoundingMode | str | None = None) -> "BigDecimal":
        """
        Округление до places цифр после точки.

        places < 0 обнуляет |places| младших целых разрядов.

        Examples:
            >>> BigDecimal.parse("1.5").round_to_places(0, "half_even")
            BigDecimal('0.2E1')
            >>> BigDecimal.parse("1234").round_to_places(-2)
            BigDecimal('0.12E4')
        """
        return self._round_at(_validate_places(places), _resolve_mode(mode))

    def ceil_to_integer(self) -> int:
        return self._to_integer(RoundingMode.CEILING)

    def ceil_to_places(self, places: int) -> "BigDecimal":
        return self._round_at(_validate_places(places), RoundingMode.CEILING)

    def floor_to_integer(self) -> int:
        return self._to_integer(RoundingMode.FLOOR)

    def floor_to_places(self, places: int) -> "BigDecimal":
        return self._round_at(_validate_places(places), RoundingMode.FLOOR)

    def truncate_to_integer(self) -> int:
        return self._to_integer(RoundingMode.DOWN)

    def truncate_to_places(self, places: int) -> "BigDecimal":
        return self._round_at(_validate_places(places), RoundingMode.DOWN)

    def fix(self) -> "BigDecimal":
        """Целая часть (со знаком)."""
        return self._round_at(0, RoundingMode.DOWN)

    def frac(self) -> "BigDecimal":
        """Дробная часть (со знаком)."""
        if self.kind != Kind.FINITE:
            return self

        coefficient, scale = self._parts()
        if scale >= 0:
            return _signed_zero(self._negative)
        return _finish(self._negative, coefficient % 10**-scale, scale, apply_limit=False)

    def __round__(self, ndigits: int | None = None) -> "int | BigDecimal":
        if ndigits is None:
            return self.round_to_integer()
        return self.round_to_places(ndigits)

    def __ceil__(self) -> int:
        return self.ceil_to_integer()

    def __floor__(self) -> int:
        return self.floor_to_integer()

    def __trunc__(self) -> int:
        return self.truncate_to_integer()

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_int(self) -> int:
        """
        Целая часть как int (усечение к нулю).

        Raises:
            DomainError: Для NaN и Infinity
        """
        if self.kind != Kind.FINITE:
            raise DomainError(f"{self.to_s()} cannot be converted to an integer")
        if not self.digits:
            return 0

        coefficient, scale = self._parts()
        if scale >= 0:
            magnitude = coefficient * 10**scale
        elif self.exponent <= 0:
            magnitude = 0
        else:
            magnitude = coefficient // 10**-scale
        return -magnitude if self._negative else magnitude

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        if self.kind == Kind.NAN:
            return float("nan")
        if self.kind == Kind.INFINITY:
            return float("inf") if self.sign > 0 else float("-inf")
        return float(self.to_s())

    def as_integer_ratio(self) -> tuple[int, int]:
        """
        Несократимая дробь (numerator, denominator), denominator > 0.

        Raises:
            DomainError: Для NaN и Infinity
        """
        if self.kind != Kind.FINITE:
            raise DomainError(f"{self.to_s()} cannot be converted to a fraction")

        coefficient, scale = self._parts()
        if scale >= 0:
            ratio = Fraction(coefficient * 10**scale)
        else:
            ratio = Fraction(coefficient, 10**-scale)
        if self._negative:
            ratio = -ratio
        return ratio.numerator, ratio.denominator

    def to_fraction(self) -> Fraction:
        return Fraction(*self.as_integer_ratio())

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "DecimalLike") -> int | None:
        """
        -1 / 0 / +1; None если хотя бы один операнд NaN.

        Examples:
            >>> BigDecimal.parse("-0").compare(0)
            0
            >>> NAN.compare(NAN) is None
            True
        """
        return _compare(self, _comparison_operand(other))

    def __eq__(self, other: object) -> bool:
        operand = _coerce_operand(other, exact_float=True)
        if operand is None:
            return NotImplemented
        return _compare(self, operand) == 0

    def __lt__(self, other: object) -> bool:
        operand = _coerce_operand(other, exact_float=True)
        if operand is None:
            return NotImplemented
        result = _compare(self, operand)
        return result is not None and result < 0

    def __le__(self, other: object) -> bool:
        operand = _coerce_operand(other, exact_float=True)
        if operand is None:
            return NotImplemented
        result = _compare(self, operand)
        return result is not None and result <= 0

    def __gt__(self, other: object) -> bool:
        operand = _coerce_operand(other, exact_float=True)
        if operand is None:
            return NotImplemented
        result = _compare(self, operand)
        return result is not None and result > 0

    def __ge__(self, other: object) -> bool:
        operand = _coerce_operand(other, exact_float=True)
        if operand is None:
            return NotImplemented
        result = _compare(self, operand)
        return result is not None and result >= 0

    def __hash__(self) -> int:
        # Совместим с hash(int) и hash(Fraction) для равных значений
        if self.kind == Kind.NAN:
            return object.__hash__(self)
        if self.kind == Kind.INFINITY:
            return _HASH_INF if self.sign > 0 else -_HASH_INF
        if not self.digits:
            return 0

        coefficient, scale = self._parts()
        result = coefficient % _HASH_MODULUS * pow(10, scale, _HASH_MODULUS) % _HASH_MODULUS
        if self._negative:
            result = -result
        return -2 if result == -1 else result

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.add(operand)

    def __radd__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.add(self)

    def __sub__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.sub(operand)

    def __rsub__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.sub(self)

    def __mul__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.mult(operand)

    def __rmul__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.mult(self)

    def __truediv__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.quo(operand)

    def __rtruediv__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.quo(self)

    def __floordiv__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.divmod(operand)[0]

    def __rfloordiv__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.divmod(self)[0]

    def __mod__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.modulo(operand)

    def __rmod__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.modulo(self)

    def __divmod__(self, other: object) -> tuple["BigDecimal", "BigDecimal"]:
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else self.divmod(operand)

    def __rdivmod__(self, other: object) -> tuple["BigDecimal", "BigDecimal"]:
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.divmod(self)

    def __pow__(self, other: object, modulo: object = None) -> "BigDecimal":
        if modulo is not None:
            raise TypeError("three-argument pow() is not supported for BigDecimal")
        if isinstance(other, bool) or not isinstance(other, (int, BigDecimal)):
            return NotImplemented
        return self.power(other)

    def __rpow__(self, other: object) -> "BigDecimal":
        operand = _coerce_operand(other)
        return NotImplemented if operand is None else operand.power(self)

    # -------------------------------------------------------------------------
    # Текстовое представление и сериализация
    # -------------------------------------------------------------------------

    def to_s(self, fmt: str | int = "") -> str:
        """
        Текстовое представление (см. src.core.domain.formatting).

        Examples:
            >>> BigDecimal.parse("-1234.5").to_s()
            '-0.12345E4'
            >>> BigDecimal.parse("1234.5").to_s("+F")
            '+1234.5'
        """
        special = None if self.kind == Kind.FINITE else self.kind.value
        return format_decimal(self._negative, self.digits, self.exponent, special, parse_format(fmt))

    def __str__(self) -> str:
        return self.to_s()

    def __repr__(self) -> str:
        return f"BigDecimal('{self.to_s()}')"

    def dump(self) -> str:
        """
        Компактная сериализация "<maxprec>:<to_s()>".

        maxprec — ёмкость коэффициента в цифрах (кратна BASE_FIG).

        Examples:
            >>> BigDecimal.parse("1.5").dump()
            '18:0.15E1'
        """
        words = (len(self.digits) + BASE_FIG - 1) // BASE_FIG
        return f"{(words + 1) * BASE_FIG}:{self.to_s()}"

    @classmethod
    def load(cls, text: str) -> "BigDecimal":
        """
        Восстановление из dump().

        Raises:
            ParseError: Если строка не является результатом dump()
        """
        if not isinstance(text, str):
            raise TypeError(f"dump must be str, got {type(text).__name__}")
        prefix, separator, body = text.partition(":")
        if not separator or not _DUMP_PREFIX_RE.fullmatch(prefix):
            raise ParseError(text, "invalid dump format")
        return cls.parse(body)

    def __reduce__(self) -> tuple[Any, ...]:
        return BigDecimal.load, (self.dump(),)

    def __copy__(self) -> "BigDecimal":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "BigDecimal":
        return self

    def to_dict(self) -> dict[str, Any]:
        """Словарная форма (контракт big_decimal)."""
        return {
            "kind": self.kind.value,
            "sign": self.sign,
            "digits": self.digits,
            "exponent": self.exponent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BigDecimal":
        """
        Восстановление из словарной формы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют контракту
        """
        validate_big_decimal(data)
        return cls(data["sign"], data["digits"], data["exponent"], Kind(data["kind"]))


DecimalLike = Union[BigDecimal, int, float, str, Fraction, Decimal]


# =============================================================================
# КОНСТАНТЫ ЗНАЧЕНИЙ
# =============================================================================

NAN: Final[BigDecimal] = BigDecimal(0, kind=Kind.NAN)
INFINITY: Final[BigDecimal] = BigDecimal(1, kind=Kind.INFINITY)
NEGATIVE_INFINITY: Final[BigDecimal] = BigDecimal(-1, kind=Kind.INFINITY)
ZERO: Final[BigDecimal] = BigDecimal(1)
NEGATIVE_ZERO: Final[BigDecimal] = BigDecimal(-1)
ONE: Final[BigDecimal] = BigDecimal(1, "1", 1)
MINUS_ONE: Final[BigDecimal] = BigDecimal(-1, "1", 1)


# =============================================================================
# КОНВЕРСИЯ НА ГРАНИЦЕ API
# =============================================================================


def to_decimal(value: DecimalLike, digits: int | None = None) -> BigDecimal:
    """
    Явная конверсия поддерживаемых числовых типов в BigDecimal.

    Args:
        value: BigDecimal, int, float, str, Fraction или decimal.Decimal
        digits: Количество значащих цифр результата (None — точно;
            для float — кратчайшее представление)

    Raises:
        TypeError: Для неподдерживаемых типов (включая bool)
        ParseError: Для невалидных строк

    Examples:
        >>> to_decimal("1.50")
        BigDecimal('0.15E1')
        >>> to_decimal(Fraction(1, 3), 5)
        BigDecimal('0.33333E0')
    """
    precision = validate_digits(digits)

    if isinstance(value, BigDecimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError("bool is not a decimal number")
    elif isinstance(value, int):
        result = BigDecimal.from_int(value)
    elif isinstance(value, float):
        return BigDecimal.from_float(value, digits)
    elif isinstance(value, str):
        result = BigDecimal.parse(value)
    elif isinstance(value, Fraction):
        return BigDecimal.from_ratio(value.numerator, value.denominator, digits)
    elif isinstance(value, Decimal):
        result = BigDecimal.from_decimal(value)
    else:
        raise TypeError(f"cannot convert {type(value).__name__} to BigDecimal")

    if precision and len(result.digits) > precision:
        coefficient, scale = result._parts()
        return _finish(result._negative, coefficient, scale, precision, apply_limit=False)
    return result


def _coerce_operand(value: object, exact_float: bool = False) -> BigDecimal | None:
    """
    Операнд оператора или None (→ NotImplemented).

    Args:
        value: Правый операнд
        exact_float: float берётся по точному двоичному значению, а не по
            кратчайшему repr (нужно сравнениям, чтобы == согласовывался с hash)
    """
    if isinstance(value, BigDecimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, Fraction, Decimal)):
        return None
    if exact_float and isinstance(value, float):
        return _exact_float(value)
    return to_decimal(value)


def _comparison_operand(value: "DecimalLike") -> BigDecimal:
    if isinstance(value, float):
        return _exact_float(value)
    return to_decimal(value)


def _exact_float(value: float) -> BigDecimal:
    """
    Точное десятичное значение float.

    Знаменатель as_integer_ratio равен 2^k, поэтому n / 2^k = n × 5^k × 10^-k.

    Examples:
        >>> _exact_float(0.5)
        BigDecimal('0.5E0')
        >>> _exact_float(0.1) == BigDecimal.from_float(0.1)
        False
    """
    if value == 0.0 or not math.isfinite(value):
        return BigDecimal.from_float(value)
    numerator, denominator = abs(value).as_integer_ratio()
    power = denominator.bit_length() - 1
    return _finish(value < 0, numerator * 5**power, -power, apply_limit=False)


# =============================================================================
# ВНУТРЕННИЕ ПОМОЩНИКИ
# =============================================================================


def _from_parsed(parsed: ParsedNumber) -> BigDecimal:
    if parsed.special == "nan":
        return NAN
    if parsed.special == "infinity":
        return NEGATIVE_INFINITY if parsed.negative else INFINITY
    return _finish(parsed.negative, parsed.coefficient, parsed.scale, apply_limit=False)


def _signed_zero(negative: bool) -> BigDecimal:
    return NEGATIVE_ZERO if negative else ZERO


def _effective_precision(digits: int = 0, apply_limit: bool = True) -> int:
    """Меньшее из digits и precision_limit (0 = без ограничения)."""
    limit = get_config().precision_limit if apply_limit else 0
    if digits and limit:
        return min(digits, limit)
    return digits or limit


def _default_division_precision(left: BigDecimal, right: BigDecimal) -> int:
    return max(2 * max(len(left.digits), len(right.digits)), 2 * DOUBLE_FIG)


def _finish(
    negative: bool,
    coefficient: int,
    scale: int,
    digits: int = 0,
    apply_limit: bool = True,
) -> BigDecimal:
    """
    Сборка результата: округление до точности и проверка диапазона экспоненты.
    """
    precision = _effective_precision(digits, apply_limit)
    if coefficient and precision:
        drop = digit_count(coefficient) - precision
        if drop > 0:
            coefficient = round_coefficient(
                coefficient, drop, get_config().rounding_mode, negative
            )
            scale += drop

    canonical, exponent = canonicalize(coefficient, scale)
    if canonical and exponent > EXPONENT_MAX:
        return _overflow(negative)
    if canonical and exponent < EXPONENT_MIN:
        return _underflow(negative)
    return BigDecimal(-1 if negative else 1, canonical, exponent)


def _nan_result(reason: str) -> BigDecimal:
    if get_config().is_enabled(ExceptionFlag.NAN):
        raise DomainError(f"computation results in NaN ({reason})")
    logger.debug("NaN sentinel returned: %s", reason)
    return NAN


def _infinity_result(negative: bool, reason: str) -> BigDecimal:
    if get_config().is_enabled(ExceptionFlag.INFINITY):
        sign = "-" if negative else ""
        raise DomainError(f"computation results in {sign}Infinity ({reason})")
    logger.debug("Infinity sentinel returned: %s", reason)
    return NEGATIVE_INFINITY if negative else INFINITY


def _zero_division(dividend: BigDecimal, divisor_negative: bool | None = None) -> BigDecimal:
    """Деление конечного dividend на точный ноль."""
    if get_config().is_enabled(ExceptionFlag.ZERO_DIVIDE):
        raise ZeroDivideError("division by zero")
    if dividend.is_zero():
        return _nan_result("0 / 0")
    negative = dividend._negative != bool(divisor_negative)
    return _infinity_result(negative, "division by zero")


def _overflow(negative: bool) -> BigDecimal:
    if get_config().is_enabled(ExceptionFlag.OVERFLOW):
        raise DecimalOverflowError(f"exponent overflow (> {EXPONENT_MAX})")
    return _infinity_result(negative, "exponent overflow")


def _underflow(negative: bool) -> BigDecimal:
    if get_config().is_enabled(ExceptionFlag.UNDERFLOW):
        raise DecimalUnderflowError(f"exponent underflow (< {EXPONENT_MIN})")
    logger.debug("signed zero returned on exponent underflow")
    return _signed_zero(negative)


def _aligned(left: BigDecimal, right: BigDecimal) -> tuple[int, int, int]:
    """Знаковые коэффициенты конечных значений, приведённые к общему scale."""
    left_coefficient, left_scale = left._parts()
    right_coefficient, right_scale = right._parts()
    if not left_coefficient:
        left_scale = right_scale
    scale = min(left_scale, right_scale)
    return (
        left.sign * left_coefficient * 10 ** (left_scale - scale),
        right.sign * right_coefficient * 10 ** (right_scale - scale),
        scale,
    )


def _floor_divmod(left: BigDecimal, right: BigDecimal) -> tuple[int, BigDecimal]:
    """Точное floor-деление конечных значений (right ≠ 0)."""
    dividend, divisor, scale = _aligned(left, right)
    quotient, modulus = divmod(dividend, divisor)
    return quotient, _finish(modulus < 0, abs(modulus), scale, apply_limit=False)


def _compare(left: BigDecimal, right: BigDecimal) -> int | None:
    if left.kind == Kind.NAN or right.kind == Kind.NAN:
        return None

    if left.kind == Kind.INFINITY or right.kind == Kind.INFINITY:
        left_rank = left.sign if left.kind == Kind.INFINITY else 0
        right_rank = right.sign if right.kind == Kind.INFINITY else 0
        if left_rank == right_rank and left_rank == 0:
            # конечное против конечного сюда не попадает
            return 0
        return (left_rank > right_rank) - (left_rank < right_rank)

    left_sign = left.sign if left.digits else 0
    right_sign = right.sign if right.digits else 0
    if left_sign != right_sign:
        return (left_sign > right_sign) - (left_sign < right_sign)
    if left_sign == 0:
        return 0

    if left.exponent != right.exponent:
        magnitude = 1 if left.exponent > right.exponent else -1
    else:
        width = max(len(left.digits), len(right.digits))
        left_digits = left.digits.ljust(width, "0")
        right_digits = right.digits.ljust(width, "0")
        magnitude = (left_digits > right_digits) - (left_digits < right_digits)
    return magnitude * left_sign


def _resolve_mode(mode: RoundingMode | str | None) -> RoundingMode:
    if mode is None:
        return get_config().rounding_mode
    return RoundingMode.parse(mode)


def _validate_places(places: int) -> int:
    if isinstance(places, bool) or not isinstance(places, int):
        raise TypeError(f"places must be an integer, got {type(places).__name__}")
    return places


def _integral_exponent(exponent: object) -> int:
    if isinstance(exponent, bool):
        raise TypeError("only integer exponents are supported")
    if isinstance(exponent, int):
        return exponent
    if isinstance(exponent, BigDecimal) and exponent.is_finite():
        if exponent.scale() == 0:
            return exponent.to_int()
    raise TypeError(f"only integer exponents are supported, got {exponent!r}")
