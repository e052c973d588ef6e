"""The ``Fraction`` type used by host algorithms.

``Fraction`` is bound at import time from ``DUALFRACTION_ARITHMETIC``:

* ``exact``: ``Fraction`` is :class:`ExactValue`,
* ``approximate``: ``Fraction`` is :class:`ApproximateValue`,
* ``switchable`` (default): ``Fraction`` is :class:`FractionEnum`, a tagged
  value whose representation is picked by the mode selector when it is
  constructed.

Operations between an exact and an approximate operand always demote the
exact one to its float and produce an approximate result. Exact values
can only be recovered from approximate results on a best-effort basis
(see :meth:`ApproximateValue.to_exact`).
"""
from __future__ import annotations

import numbers
from typing import Any, Optional, Type, Union

from .approximate import ApproximateValue
from .base import FractionBase
from .config import ACTIVE_CONFIGURATION, APPROX_DIGITS, Configuration
from .exact import ExactValue
from .mode import is_exact_globally

Representation = Union[ExactValue, ApproximateValue]


class FractionEnum(FractionBase):
    """Either an :class:`ExactValue` or an :class:`ApproximateValue`.

    Fresh constructions (``FractionEnum(3, 4)``, ``zero()``, ``one()``)
    consult the global mode. Operations on existing values never do; their
    result is exact only when every operand is exact.
    """

    __slots__ = ("_value",)
    _rank = 1

    def __init__(self, value: Any = 0, denominator: Any = None) -> None:
        if denominator is None and isinstance(value, FractionEnum):
            inner = value._value
        elif denominator is None and isinstance(value, (ExactValue, ApproximateValue)):
            inner = value
        elif is_exact_globally():
            inner = ExactValue(value, denominator)
        else:
            inner = ApproximateValue(value, denominator)
        self._value = inner

    @classmethod
    def _wrap(cls, value: FractionBase) -> "FractionEnum":
        if isinstance(value, FractionEnum):
            return value
        result = object.__new__(cls)
        result._value = value
        return result

    @property
    def value(self) -> Representation:
        """The wrapped representation."""
        return self._value

    @staticmethod
    def _unwrap(other: Any) -> Any:
        if isinstance(other, FractionEnum):
            return other._value
        return other

    def coerce(self, value: Any) -> "FractionEnum":
        if isinstance(value, FractionEnum):
            return value
        if isinstance(value, (ExactValue, ApproximateValue)):
            return FractionEnum._wrap(value)
        if isinstance(value, numbers.Rational):
            return FractionEnum._wrap(type(self._value)(value))
        if isinstance(value, numbers.Real):
            return FractionEnum._wrap(ApproximateValue(value))
        raise TypeError(f"Cannot interpret {type(value)!r} as a Fraction")

    # ------------------------------------------------------------------
    # Dispatch: the wrapped representations apply the demotion rule.
    def add(self, other: Any) -> "FractionEnum":
        return FractionEnum._wrap(self._value.add(self._unwrap(other)))

    def sub(self, other: Any) -> "FractionEnum":
        return FractionEnum._wrap(self._value.sub(self._unwrap(other)))

    def mul(self, other: Any) -> "FractionEnum":
        return FractionEnum._wrap(self._value.mul(self._unwrap(other)))

    def div(self, other: Any) -> "FractionEnum":
        return FractionEnum._wrap(self._value.div(self._unwrap(other)))

    def pow(self, exponent: Any) -> "FractionEnum":
        return FractionEnum._wrap(self._value.pow(self._unwrap(exponent)))

    def compare(self, other: Any) -> int:
        return self._value.compare(self._unwrap(other))

    def neg(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.neg())

    def abs(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.abs())

    def sqrt(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.sqrt())

    def approx_sqrt(self, precision_decimals: int = APPROX_DIGITS) -> "FractionEnum":
        return FractionEnum._wrap(self._value.approx_sqrt(precision_decimals))

    def floor(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.floor())

    def ceil(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.ceil())

    def is_exact(self) -> bool:
        return isinstance(self._value, ExactValue)

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def is_one(self) -> bool:
        return self._value.is_one()

    def is_positive(self) -> bool:
        return self._value.is_positive()

    def is_negative(self) -> bool:
        return self._value.is_negative()

    def to_approximate(self) -> "FractionEnum":
        return FractionEnum._wrap(self._value.to_approximate())

    def to_exact(self, max_denominator: Optional[int] = None) -> "FractionEnum":
        return FractionEnum._wrap(self._value.to_exact(max_denominator))

    def as_fraction(self):
        return self._value.as_fraction()

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"FractionEnum({self._value!r})"

    def __str__(self) -> str:
        return str(self._value)


_FRACTION_TYPES = {
    Configuration.EXACT: ExactValue,
    Configuration.APPROXIMATE: ApproximateValue,
    Configuration.SWITCHABLE: FractionEnum,
}


def fraction_type(configuration: Configuration = ACTIVE_CONFIGURATION) -> Type[FractionBase]:
    """Return the class that backs ``Fraction`` in *configuration*."""
    return _FRACTION_TYPES[Configuration(configuration)]


Fraction = fraction_type(ACTIVE_CONFIGURATION)


# Short-hands for constants.
def f(value: Any, denominator: Any = None) -> FractionBase:
    return Fraction(value, denominator)


def f0() -> FractionBase:
    return Fraction.zero()


def f1() -> FractionBase:
    return Fraction.one()


__all__ = ["FractionEnum", "Fraction", "fraction_type", "f", "f0", "f1"]
