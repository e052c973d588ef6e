"""Numeric interface shared by the exact and approximate representations.

Concrete classes implement the named operations (``add``, ``compare``,
``to_approximate`` ...). This module maps Python's operator protocol and
NumPy's ufunc protocol onto them, so every representation behaves the same
in expressions.
"""
from __future__ import annotations

import abc
import numbers
from typing import Any, Iterable, Optional, TextIO

import numpy as np

from .config import APPROX_DIGITS, EPSILON
from .exceptions import NumericOverflow


def is_operand(value: Any) -> bool:
    """Return whether *value* can take part in Fraction arithmetic."""
    return isinstance(value, (FractionBase, numbers.Real))


def to_float(value: Any) -> float:
    """Convert a Fraction or real number to ``float``."""
    try:
        return float(value)
    except OverflowError as exc:
        raise NumericOverflow(f"{value!s} is too large for approximate arithmetic") from exc


class FractionBase(abc.ABC):
    """Common behaviour of ``ExactValue``, ``ApproximateValue`` and ``FractionEnum``."""

    __slots__ = ()
    __array_priority__ = 1000.0  # Prefer Fraction semantics in NumPy expressions.

    # Operators defer to operands of a higher rank, so a tagged value
    # combined with a bare representation stays tagged.
    _rank = 0

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def zero(cls) -> "FractionBase":
        return cls(0)

    @classmethod
    def one(cls) -> "FractionBase":
        return cls(1)

    @classmethod
    def parse(cls, text: str) -> "FractionBase":
        """Read ``"3/4"``, ``"0.25"`` or ``"-1e-3"``."""
        if not isinstance(text, str):
            raise TypeError(f"parse expects a string, got {type(text)!r}")
        return cls(text)

    @classmethod
    def sum(cls, values: Iterable[Any]) -> "FractionBase":
        """Add *values* from left to right; an empty iterable sums to ``zero()``."""
        iterator = iter(values)
        try:
            total = next(iterator)
        except StopIteration:
            return cls.zero()
        if not isinstance(total, FractionBase):
            total = cls(total)
        for value in iterator:
            total = total.add(value)
        return total

    # ------------------------------------------------------------------
    # Representation-specific operations
    @abc.abstractmethod
    def is_exact(self) -> bool:
        ...

    @abc.abstractmethod
    def coerce(self, value: Any) -> "FractionBase":
        """Return *value* in the representation of this Fraction.

        Integers and rationals keep the representation of ``self``; floats
        are approximate by nature and always become approximate.
        """

    @abc.abstractmethod
    def add(self, other: Any) -> "FractionBase":
        ...

    @abc.abstractmethod
    def sub(self, other: Any) -> "FractionBase":
        ...

    @abc.abstractmethod
    def mul(self, other: Any) -> "FractionBase":
        ...

    @abc.abstractmethod
    def div(self, other: Any) -> "FractionBase":
        ...

    @abc.abstractmethod
    def pow(self, exponent: Any) -> "FractionBase":
        ...

    @abc.abstractmethod
    def neg(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def abs(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def sqrt(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def approx_sqrt(self, precision_decimals: int = APPROX_DIGITS) -> "FractionBase":
        ...

    @abc.abstractmethod
    def floor(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def ceil(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def compare(self, other: Any) -> int:
        """Return -1, 0 or 1 as ``self`` is below, equal to or above *other*."""

    @abc.abstractmethod
    def is_zero(self) -> bool:
        ...

    @abc.abstractmethod
    def is_positive(self) -> bool:
        ...

    @abc.abstractmethod
    def is_negative(self) -> bool:
        ...

    @abc.abstractmethod
    def to_approximate(self) -> "FractionBase":
        ...

    @abc.abstractmethod
    def to_exact(self, max_denominator: Optional[int] = None) -> "FractionBase":
        ...

    @abc.abstractmethod
    def as_fraction(self):
        """Return the value as :class:`fractions.Fraction`."""

    @abc.abstractmethod
    def __float__(self) -> float:
        ...

    @abc.abstractmethod
    def __int__(self) -> int:
        ...

    @abc.abstractmethod
    def __hash__(self) -> int:
        ...

    # ------------------------------------------------------------------
    # Derived operations
    @property
    def numerator(self) -> int:
        return self.as_fraction().numerator

    @property
    def denominator(self) -> int:
        return self.as_fraction().denominator

    def recip(self) -> "FractionBase":
        return self.coerce(1).div(self)

    def one_minus(self) -> "FractionBase":
        return self.coerce(1).sub(self)

    def is_one(self) -> bool:
        return self.compare(1) == 0

    def is_not_negative(self) -> bool:
        return not self.is_negative()

    def is_not_positive(self) -> bool:
        return not self.is_positive()

    def approx_eq(self, other: Any, epsilon: float = EPSILON) -> bool:
        """Compare as floats within *epsilon*, whatever the representations."""
        return abs(to_float(self) - to_float(other)) <= epsilon

    def export(self, stream: TextIO) -> None:
        if self.is_exact():
            stream.write(f"{self}\n")
            stream.write(f"Approximately {to_float(self):.4f}\n")
        else:
            stream.write(f"Approximately {self}\n")

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Operator protocol
    def _binary_operation(self, other: Any, name: str):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(lambda x: getattr(self, name)(x), otypes=[object])
            return vectorised(other)
        if not is_operand(other):
            return NotImplemented
        if isinstance(other, FractionBase) and other._rank > self._rank:
            return NotImplemented
        return getattr(self, name)(other)

    def _reflected_operation(self, other: Any, name: str):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: getattr(self.coerce(x), name)(self),
                otypes=[object],
            )
            return vectorised(other)
        if not is_operand(other):
            return NotImplemented
        return getattr(self.coerce(other), name)(self)

    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, "add")

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, "add")

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, "sub")

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, "sub")

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, "mul")

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, "mul")

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, "div")

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, "div")

    def __pow__(self, exponent: Any, modulo: Any = None) -> Any:
        if modulo is not None:
            return NotImplemented
        return self._binary_operation(exponent, "pow")

    def __rpow__(self, base: Any) -> Any:
        return self._reflected_operation(base, "pow")

    def __neg__(self) -> "FractionBase":
        return self.neg()

    def __pos__(self) -> "FractionBase":
        return self

    def __abs__(self) -> "FractionBase":
        return self.abs()

    # ------------------------------------------------------------------
    # Comparisons
    def _compare_operand(self, other: Any) -> Optional[int]:
        if not is_operand(other):
            return None
        return self.compare(other)

    def __eq__(self, other: Any) -> bool:
        result = self._compare_operand(other)
        if result is None:
            return NotImplemented
        return result == 0

    def __lt__(self, other: Any) -> bool:
        result = self._compare_operand(other)
        if result is None:
            return NotImplemented
        return result < 0

    def __le__(self, other: Any) -> bool:
        result = self._compare_operand(other)
        if result is None:
            return NotImplemented
        return result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._compare_operand(other)
        if result is None:
            return NotImplemented
        return result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._compare_operand(other)
        if result is None:
            return NotImplemented
        return result >= 0

    # ------------------------------------------------------------------
    # NumPy interoperability
    # ufunc -> name of the Fraction method that computes it element-wise
    _UFUNC_METHODS = {
        np.add: "add",
        np.subtract: "sub",
        np.multiply: "mul",
        np.true_divide: "div",
        np.power: "pow",
        np.negative: "neg",
        np.positive: "__pos__",
        np.absolute: "abs",
        np.sqrt: "sqrt",
        np.reciprocal: "recip",
        np.floor: "floor",
        np.ceil: "ceil",
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        name = self._UFUNC_METHODS.get(ufunc)
        if method != "__call__" or name is None:
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Fraction ufuncs")

        def lift(item):
            return item if isinstance(item, FractionBase) else self.coerce(item)

        def apply(*operands):
            first, *rest = [lift(item) for item in operands]
            return getattr(first, name)(*rest)

        # Object arrays keep NumPy from dispatching back to this method.
        kernel = np.frompyfunc(apply, ufunc.nin, 1)
        return kernel(*(np.asarray(value, dtype=object) for value in inputs))


__all__ = ["FractionBase", "is_operand", "to_float"]
