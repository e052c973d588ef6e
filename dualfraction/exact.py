"""Arbitrary-precision rational values."""
from __future__ import annotations

import math
import numbers
from fractions import Fraction
from typing import Any, Optional

from .base import FractionBase, to_float
from .config import APPROX_DIGITS, DEFAULT_MAX_DENOMINATOR, EPSILON
from .exceptions import DivisionByZero, NonRepresentable, NumericOverflow, ParseError


def rationalize(value: float, *, max_denominator: Optional[int] = None) -> Fraction:
    """Return the rational a float stands for.

    The preferred candidate is the best approximation of *value* with a
    denominator of at most *max_denominator*, accepted when it lies within
    ``EPSILON`` of *value*. Otherwise the shortest decimal that rounds to
    *value* is used, so every finite float converts. NaN raises
    :class:`NonRepresentable` and infinities raise :class:`NumericOverflow`.
    """
    if math.isnan(value):
        raise NonRepresentable("NaN has no exact value")
    if math.isinf(value):
        raise NumericOverflow("infinity has no exact value")
    if max_denominator is None:
        max_denominator = DEFAULT_MAX_DENOMINATOR
    if max_denominator < 1:
        raise ValueError("max_denominator must be >= 1")
    binary = Fraction(value)
    candidate = binary.limit_denominator(max_denominator)
    if abs(candidate - binary) <= Fraction(EPSILON):
        return candidate
    # repr() gives the shortest decimal string that round-trips.
    return Fraction(repr(float(value)))


def _parse_fraction(text: str) -> Fraction:
    try:
        return Fraction(text.strip())
    except (ValueError, ZeroDivisionError) as exc:
        raise ParseError(f"{text!r} is not an exact fraction") from exc


def _to_fraction(value: Any) -> Fraction:
    if isinstance(value, ExactValue):
        return value._value
    if isinstance(value, FractionBase):
        return value.to_exact().as_fraction()
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, numbers.Rational):
        return Fraction(int(value.numerator), int(value.denominator))
    if isinstance(value, numbers.Real):
        return rationalize(float(value))
    if isinstance(value, str):
        return _parse_fraction(value)
    raise TypeError(f"Cannot interpret {type(value)!r} as an exact value")


def _integer_root(value: int, degree: int) -> int:
    """Return the largest integer whose *degree*-th power is at most *value*."""
    if value < 2:
        return value
    if degree == 2:
        return math.isqrt(value)
    x = 1 << -(-value.bit_length() // degree)
    while True:
        y = ((degree - 1) * x + value // x ** (degree - 1)) // degree
        if y >= x:
            return x
        x = y


def _exact_root(value: Fraction, degree: int) -> Fraction:
    if value < 0:
        if degree % 2 == 0:
            raise NonRepresentable(f"even root of the negative value {value}")
        return -_exact_root(-value, degree)
    numerator = _integer_root(value.numerator, degree)
    denominator = _integer_root(value.denominator, degree)
    # Both parts of a reduced fraction must be perfect powers.
    if numerator ** degree != value.numerator or denominator ** degree != value.denominator:
        raise NonRepresentable(f"root of degree {degree} of {value} is not rational")
    return Fraction(numerator, denominator)


class ExactValue(FractionBase):
    """Rational number kept in lowest terms with a positive denominator.

    Wraps :class:`fractions.Fraction`. Values never lose precision; their
    numerators and denominators may grow without bound. An operation with an
    approximate operand demotes this value to its float first and returns an
    approximate result.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = 0, denominator: Any = None) -> None:
        number = _to_fraction(value)
        if denominator is not None:
            divisor = _to_fraction(denominator)
            if divisor == 0:
                raise DivisionByZero("denominator must be non-zero")
            number = number / divisor
        self._value = number

    @classmethod
    def _from_fraction(cls, value: Fraction) -> "ExactValue":
        result = object.__new__(cls)
        result._value = value
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    def _exact_operand(self, other: Any) -> Optional[Fraction]:
        """Return *other* as a Fraction, or None when it forces demotion."""
        if isinstance(other, ExactValue):
            return other._value
        if isinstance(other, FractionBase):
            return other.as_fraction() if other.is_exact() else None
        if isinstance(other, numbers.Integral):
            return Fraction(int(other))
        if isinstance(other, numbers.Rational):
            return Fraction(int(other.numerator), int(other.denominator))
        if isinstance(other, numbers.Real):
            return None
        raise TypeError(f"Cannot interpret {type(other)!r} as a Fraction")

    def coerce(self, value: Any) -> FractionBase:
        if isinstance(value, FractionBase):
            return value
        exact = self._exact_operand(value)
        if exact is None:
            return self.to_approximate().coerce(value)
        return ExactValue._from_fraction(exact)

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, other: Any) -> FractionBase:
        value = self._exact_operand(other)
        if value is None:
            return self.to_approximate().add(other)
        return ExactValue._from_fraction(self._value + value)

    def sub(self, other: Any) -> FractionBase:
        value = self._exact_operand(other)
        if value is None:
            return self.to_approximate().sub(other)
        return ExactValue._from_fraction(self._value - value)

    def mul(self, other: Any) -> FractionBase:
        value = self._exact_operand(other)
        if value is None:
            return self.to_approximate().mul(other)
        return ExactValue._from_fraction(self._value * value)

    def div(self, other: Any) -> FractionBase:
        value = self._exact_operand(other)
        if value is None:
            return self.to_approximate().div(other)
        if value == 0:
            raise DivisionByZero("division by zero")
        return ExactValue._from_fraction(self._value / value)

    def pow(self, exponent: Any) -> FractionBase:
        """Raise to a rational power.

        Integer exponents are always exact. An exponent ``p/q`` succeeds only
        when the ``q``-th root of the ``p``-th power is rational.
        """
        power = self._exact_operand(exponent)
        if power is None:
            return self.to_approximate().pow(exponent)
        if self._value == 0:
            if power < 0:
                raise DivisionByZero("zero cannot be raised to a negative power")
            if power == 0:
                return ExactValue._from_fraction(Fraction(1))
            return ExactValue._from_fraction(Fraction(0))
        raised = self._value ** power.numerator
        if power.denominator == 1:
            return ExactValue._from_fraction(raised)
        return ExactValue._from_fraction(_exact_root(raised, power.denominator))

    def neg(self) -> "ExactValue":
        return ExactValue._from_fraction(-self._value)

    def abs(self) -> "ExactValue":
        return ExactValue._from_fraction(abs(self._value))

    def sqrt(self) -> "ExactValue":
        if self._value < 0:
            raise NonRepresentable("cannot calculate the square root of negative values")
        return ExactValue._from_fraction(_exact_root(self._value, 2))

    def approx_sqrt(self, precision_decimals: int = APPROX_DIGITS) -> "ExactValue":
        """Square root, exact when rational, else within ``10**-precision_decimals``.

        Uses the Babylonian iteration on rationals, so the result stays exact
        arithmetic even when it is an approximation of the root.
        """
        value = self._value
        if value < 0:
            raise NonRepresentable("cannot calculate the square root of negative values")
        if precision_decimals < 0:
            raise ValueError("precision_decimals must be >= 0")
        try:
            return ExactValue._from_fraction(_exact_root(value, 2))
        except NonRepresentable:
            pass

        def seed(number: Fraction) -> Fraction:
            half_bits = math.ceil(number).bit_length() // 2
            return Fraction(1 << half_bits)

        x = seed(value) if value >= 1 else 1 / seed(1 / value)
        epsilon = Fraction(1, 10**precision_decimals)
        while abs((value - x * x) / (2 * x)) > epsilon:
            x = (x + value / x) / 2
        return ExactValue._from_fraction(x)

    def floor(self) -> "ExactValue":
        return ExactValue._from_fraction(Fraction(math.floor(self._value)))

    def ceil(self) -> "ExactValue":
        return ExactValue._from_fraction(Fraction(math.ceil(self._value)))

    # ------------------------------------------------------------------
    # Comparison and predicates
    def compare(self, other: Any) -> int:
        value = self._exact_operand(other)
        if value is None:
            return self.to_approximate().compare(other)
        return (self._value > value) - (self._value < value)

    def is_exact(self) -> bool:
        return True

    def is_zero(self) -> bool:
        return self._value == 0

    def is_one(self) -> bool:
        return self._value == 1

    def is_positive(self) -> bool:
        return self._value > 0

    def is_negative(self) -> bool:
        return self._value < 0

    # ------------------------------------------------------------------
    # Conversion
    def to_approximate(self) -> FractionBase:
        from .approximate import ApproximateValue

        return ApproximateValue(to_float(self._value))

    def to_exact(self, max_denominator: Optional[int] = None) -> "ExactValue":
        return self

    def as_fraction(self) -> Fraction:
        return self._value

    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    def __float__(self) -> float:
        return to_float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"ExactValue({self._value.numerator}, {self._value.denominator})"

    def __str__(self) -> str:
        if self._value.denominator == 1:
            return str(self._value.numerator)
        return f"{self._value.numerator}/{self._value.denominator}"


__all__ = ["ExactValue", "rationalize"]
