"""Bounded-precision floating values with an epsilon-tolerant order."""
from __future__ import annotations

import math
import numbers
from fractions import Fraction
from typing import Any, Optional

from .base import FractionBase, to_float
from .config import APPROX_DIGITS, EPSILON
from .exceptions import DivisionByZero, NonRepresentable, NumericOverflow, ParseError


def _checked(value: float) -> float:
    """Refuse NaN and infinities as stored values."""
    if math.isnan(value):
        raise NonRepresentable("operation produced NaN")
    if math.isinf(value):
        raise NumericOverflow("operation left the finite floating range")
    return value


def _parse_float(text: str) -> float:
    stripped = text.strip()
    try:
        return float(stripped)
    except ValueError:
        pass
    try:
        return to_float(Fraction(stripped))
    except (ValueError, ZeroDivisionError) as exc:
        raise ParseError(f"{text!r} is not an approximate fraction") from exc


def _as_rational(value: numbers.Rational) -> Fraction:
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    return Fraction(int(value.numerator), int(value.denominator))


def _to_float(value: Any) -> float:
    if isinstance(value, ApproximateValue):
        return value._value
    if isinstance(value, (FractionBase, numbers.Real)):
        return to_float(value)
    if isinstance(value, str):
        return _parse_float(value)
    raise TypeError(f"Cannot interpret {type(value)!r} as an approximate value")


class ApproximateValue(FractionBase):
    """Finite float compared with the global tolerance ``EPSILON``.

    Two values within ``EPSILON`` of each other are equal. This relation is
    not transitive near the tolerance boundary, which is accepted. Results
    carry the usual floating-point rounding error; no correction is tried.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = 0, denominator: Any = None) -> None:
        if denominator is None:
            number = _to_float(value)
        elif isinstance(value, numbers.Rational) and isinstance(denominator, numbers.Rational):
            if denominator == 0:
                raise DivisionByZero("denominator must be non-zero")
            # Correctly rounded quotient of an integer pair.
            number = to_float(_as_rational(value) / _as_rational(denominator))
        else:
            divisor = _to_float(denominator)
            if abs(divisor) < EPSILON:
                raise DivisionByZero("denominator must be non-zero")
            number = _to_float(value) / divisor
        self._value = _checked(number)

    @classmethod
    def _from_float(cls, value: float) -> "ApproximateValue":
        result = object.__new__(cls)
        result._value = _checked(value)
        return result

    def _float_operand(self, other: Any) -> float:
        if isinstance(other, ApproximateValue):
            return other._value
        if isinstance(other, (FractionBase, numbers.Real)):
            return to_float(other)
        raise TypeError(f"Cannot interpret {type(other)!r} as a Fraction")

    def coerce(self, value: Any) -> FractionBase:
        if isinstance(value, FractionBase):
            return value
        return ApproximateValue._from_float(self._float_operand(value))

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, other: Any) -> "ApproximateValue":
        return ApproximateValue._from_float(self._value + self._float_operand(other))

    def sub(self, other: Any) -> "ApproximateValue":
        return ApproximateValue._from_float(self._value - self._float_operand(other))

    def mul(self, other: Any) -> "ApproximateValue":
        return ApproximateValue._from_float(self._value * self._float_operand(other))

    def div(self, other: Any) -> "ApproximateValue":
        divisor = self._float_operand(other)
        if abs(divisor) < EPSILON:
            raise DivisionByZero("division by a value below the comparison tolerance")
        return ApproximateValue._from_float(self._value / divisor)

    def pow(self, exponent: Any) -> "ApproximateValue":
        power = self._float_operand(exponent)
        base = self._value
        if abs(base) < EPSILON and power < 0:
            raise DivisionByZero("zero cannot be raised to a negative power")
        if base < 0 and not power.is_integer():
            raise NonRepresentable("negative values have no real non-integer powers")
        try:
            result = base ** power
        except OverflowError as exc:
            raise NumericOverflow(f"{base!r} ** {power!r} is too large") from exc
        except ZeroDivisionError as exc:
            raise DivisionByZero("zero cannot be raised to a negative power") from exc
        return ApproximateValue._from_float(result)

    def neg(self) -> "ApproximateValue":
        return ApproximateValue._from_float(-self._value)

    def abs(self) -> "ApproximateValue":
        return ApproximateValue._from_float(abs(self._value))

    def sqrt(self) -> "ApproximateValue":
        if self._value < 0:
            if self._value > -EPSILON:
                return ApproximateValue._from_float(0.0)
            raise NonRepresentable("cannot calculate the square root of negative values")
        return ApproximateValue._from_float(math.sqrt(self._value))

    def approx_sqrt(self, precision_decimals: int = APPROX_DIGITS) -> "ApproximateValue":
        return self.sqrt()

    def floor(self) -> "ApproximateValue":
        return ApproximateValue._from_float(float(math.floor(self._value)))

    def ceil(self) -> "ApproximateValue":
        return ApproximateValue._from_float(float(math.ceil(self._value)))

    # ------------------------------------------------------------------
    # Comparison and predicates
    def compare(self, other: Any) -> int:
        value = self._float_operand(other)
        if self._value - EPSILON <= value <= self._value + EPSILON:
            return 0
        return -1 if self._value < value else 1

    def is_exact(self) -> bool:
        return False

    def is_zero(self) -> bool:
        return abs(self._value) < EPSILON

    def is_one(self) -> bool:
        return abs(self._value - 1.0) < EPSILON

    def is_positive(self) -> bool:
        return self._value > EPSILON

    def is_negative(self) -> bool:
        return self._value < -EPSILON

    # ------------------------------------------------------------------
    # Conversion
    def to_approximate(self) -> "ApproximateValue":
        return self

    def to_exact(self, max_denominator: Optional[int] = None) -> FractionBase:
        """Rebuild an exact value; see :func:`dualfraction.exact.rationalize`.

        The result is the rational the float was most likely written as, not
        necessarily the value an exact computation would have produced.
        """
        from .exact import ExactValue, rationalize

        return ExactValue._from_fraction(rationalize(self._value, max_denominator=max_denominator))

    def as_fraction(self) -> Fraction:
        return self.to_exact().as_fraction()

    def __float__(self) -> float:
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"ApproximateValue({self._value!r})"

    def __str__(self) -> str:
        return str(self._value)


__all__ = ["ApproximateValue"]
