"""Runtime value model for YOLOL.

YOLOL has exactly two runtime value types: numbers and strings. Strings
are plain Python `str`. Numbers are fixed-point decimals with four
fractional digits, stored as a scaled integer so that `0.1 + 0.2` is
exactly `0.3`. The scaled integer saturates at the signed 64-bit range
instead of wrapping around.

The arithmetic helpers here raise plain Python exceptions
(ZeroDivisionError, ValueError) rather than YOLOL errors; the
interpreter catches them and raises `YololRuntimeError` as appropriate.
"""

from __future__ import annotations

import math
from typing import Any, Union

SCALE = 10000
FRACTION_DIGITS = 4
RAW_MAX = 2 ** 63 - 1
RAW_MIN = -(2 ** 63)


def saturate(raw: int) -> int:
    """Clamp a scaled value into the representable range."""
    if raw > RAW_MAX:
        return RAW_MAX
    if raw < RAW_MIN:
        return RAW_MIN
    return raw


def div_toward_zero(a: int, b: int) -> int:
    """Integer division truncating toward zero, like C and Rust."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def round_to_int_away_from_zero(x: float) -> int:
    """Round a floating point number to the nearest integer away from zero.

    Python's built-in round uses bankers rounding, so halves are handled
    explicitly.
    """
    return math.floor(x + 0.5) if x >= 0 else math.ceil(x - 0.5)


class YololNumber:
    """A saturating fixed-point decimal number."""

    __slots__ = ('raw',)

    def __init__(self, raw: int = 0):
        self.raw = saturate(int(raw))

    # Construction
    @classmethod
    def from_int(cls, value: int) -> 'YololNumber':
        return cls(value * SCALE)

    @classmethod
    def from_bool(cls, value: bool) -> 'YololNumber':
        return cls(SCALE if value else 0)

    @classmethod
    def parse(cls, text: str) -> 'YololNumber':
        """Parse a decimal literal such as `12`, `-3.5` or `0.00012`.

        Digits beyond the fourth fractional place are truncated.
        """
        digits = text.strip()
        negative = digits.startswith('-')
        digits = digits.lstrip('+-')
        whole, _, frac = digits.partition('.')
        if not whole.isdigit() or (frac and not frac.isdigit()):
            raise ValueError(f"invalid number literal {text!r}")
        frac = (frac + '0' * FRACTION_DIGITS)[:FRACTION_DIGITS]
        raw = int(whole) * SCALE + int(frac)
        return cls(-raw if negative else raw)

    @classmethod
    def from_float(cls, value: float) -> 'YololNumber':
        if math.isnan(value):
            raise ValueError('result is not a number')
        if math.isinf(value) or abs(value) >= RAW_MAX / SCALE:
            return cls(RAW_MAX if value > 0 else RAW_MIN)
        return cls(round_to_int_away_from_zero(value * SCALE))

    # Conversion
    def to_float(self) -> float:
        return self.raw / SCALE

    def truncate(self) -> int:
        """The integral part, truncated toward zero."""
        return div_toward_zero(self.raw, SCALE)

    def is_integral(self) -> bool:
        return self.raw % SCALE == 0

    # Arithmetic
    def __add__(self, other: 'YololNumber') -> 'YololNumber':
        return YololNumber(self.raw + other.raw)

    def __sub__(self, other: 'YololNumber') -> 'YololNumber':
        return YololNumber(self.raw - other.raw)

    def __mul__(self, other: 'YololNumber') -> 'YololNumber':
        return YololNumber(div_toward_zero(self.raw * other.raw, SCALE))

    def __truediv__(self, other: 'YololNumber') -> 'YololNumber':
        if other.raw == 0:
            raise ZeroDivisionError('division by zero')
        return YololNumber(div_toward_zero(self.raw * SCALE, other.raw))

    def __mod__(self, other: 'YololNumber') -> 'YololNumber':
        if other.raw == 0:
            raise ZeroDivisionError('modulo by zero')
        # remainder takes the sign of the dividend
        return YololNumber(self.raw - other.raw * div_toward_zero(self.raw, other.raw))

    def __pow__(self, other: 'YololNumber') -> 'YololNumber':
        base = self.to_float()
        exponent = other.to_float()
        try:
            return YololNumber.from_float(math.pow(base, exponent))
        except OverflowError:
            negative = base < 0 and other.is_integral() and other.truncate() % 2 == 1
            return YololNumber(RAW_MIN if negative else RAW_MAX)

    def __neg__(self) -> 'YololNumber':
        return YololNumber(-self.raw)

    def __abs__(self) -> 'YololNumber':
        return YololNumber(abs(self.raw))

    def factorial(self) -> 'YololNumber':
        # a saturated operand stays saturated
        if self.raw == RAW_MAX:
            return self
        if self.raw < 0 or not self.is_integral():
            raise ValueError(f'factorial needs a non-negative integer, got {self}')
        result = 1
        for i in range(2, self.truncate() + 1):
            result *= i
            if result * SCALE > RAW_MAX:
                return YololNumber(RAW_MAX)
        return YololNumber.from_int(result)

    # Comparison
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, YololNumber) and self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __lt__(self, other: 'YololNumber') -> bool:
        return self.raw < other.raw

    def __le__(self, other: 'YololNumber') -> bool:
        return self.raw <= other.raw

    def __gt__(self, other: 'YololNumber') -> bool:
        return self.raw > other.raw

    def __ge__(self, other: 'YololNumber') -> bool:
        return self.raw >= other.raw

    def __bool__(self) -> bool:
        return self.raw != 0

    def __str__(self) -> str:
        sign = '-' if self.raw < 0 else ''
        whole, frac = divmod(abs(self.raw), SCALE)
        if frac == 0:
            return f"{sign}{whole}"
        return f"{sign}{whole}.{frac:0{FRACTION_DIGITS}d}".rstrip('0')

    def __repr__(self) -> str:
        return f"YololNumber({str(self)!r})"


Value = Union[YololNumber, str]

ZERO = YololNumber(0)
ONE = YololNumber.from_int(1)


def type_name(value: Any) -> str:
    """Return the YOLOL type name of a runtime value."""
    if isinstance(value, YololNumber):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__


def is_truthy(value: Value) -> bool:
    # Numbers are true when non-zero; every string is true
    if isinstance(value, YololNumber):
        return bool(value)
    return True


def to_string(value: Value) -> str:
    """Render a runtime value the way it would be written in source."""
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)
