"""Two-dimensional matrices of Fractions.

Every entry keeps its own representation and every operation is composed
from Fraction arithmetic, so an all-exact matrix stays exact and any
approximate entry demotes the results it takes part in.
"""
from __future__ import annotations

import logging
import numbers
import operator
from typing import Any, Callable, List, Optional, Sequence, Tuple, Type

import numpy as np

from .arrays import as_fraction_array
from .base import FractionBase, to_float
from .exceptions import IndexOutOfRange, ShapeMismatch, SingularMatrixError
from .fraction import Fraction

logger = logging.getLogger(__name__)


def _dot(left: Sequence[FractionBase], right: Sequence[FractionBase], zero: FractionBase) -> FractionBase:
    """Sum of products, accumulated from left to right; *zero* when empty."""
    if len(left) == 0:
        return zero
    total = left[0] * right[0]
    for a, b in zip(left[1:], right[1:]):
        total = total + a * b
    return total


def _pivot_row(values: np.ndarray, column: int, start: int, exact: bool) -> Optional[int]:
    """Pick the pivot for *column* among rows ``start..``.

    Exact matrices take the first non-zero entry. Matrices with approximate
    entries take the entry of largest magnitude (partial pivoting).
    """
    candidates = [row for row in range(start, values.shape[0]) if not values[row, column].is_zero()]
    if not candidates:
        return None
    if exact:
        return candidates[0]
    return max(candidates, key=lambda row: abs(to_float(values[row, column])))


def _swap_rows(values: np.ndarray, a: int, b: int) -> None:
    if a != b:
        values[[a, b]] = values[[b, a]]


def _zero_of(values: np.ndarray, fraction_type: Optional[Type[FractionBase]]) -> FractionBase:
    """Zero in the representation of the first entry, or of *fraction_type*."""
    if values.size:
        return values.flat[0].coerce(0)
    return (Fraction if fraction_type is None else fraction_type).zero()


class FractionMatrix:
    """Rectangular matrix of Fractions backed by a NumPy object array.

    The shape is fixed at construction. Entries are owned by the matrix;
    since Fractions are immutable, copies share them freely.

    Every matrix also carries a zero of its entry type. Products with an
    empty inner dimension sum to that zero, so they keep the representation
    of their operands even when there are no entries to take it from.
    """

    __slots__ = ("_values", "_zero")
    __array_ufunc__ = None  # Let NumPy defer to the reflected operators.

    def __init__(
        self,
        rows: Any = (),
        *,
        fraction_type: Optional[Type[FractionBase]] = None,
    ) -> None:
        zero = None
        if isinstance(rows, FractionMatrix):
            values = rows._values.copy()
            zero = rows._zero
        elif isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise ShapeMismatch(
                    f"a matrix needs a two-dimensional array, got {rows.ndim} dimensions",
                    actual=rows.shape,
                )
            values = as_fraction_array(rows, fraction_type=fraction_type)
        else:
            rows = [list(row) for row in rows]
            width = len(rows[0]) if rows else 0
            for index, row in enumerate(rows):
                if len(row) != width:
                    raise ShapeMismatch(
                        f"row {index} has {len(row)} entries, expected {width}",
                        expected=(width,),
                        actual=(len(row),),
                    )
            values = np.empty((len(rows), width), dtype=object)
            for i, row in enumerate(rows):
                for j, item in enumerate(row):
                    values[i, j] = item
            values = as_fraction_array(values, fraction_type=fraction_type, copy=False)
        if zero is None:
            zero = _zero_of(values, fraction_type)
        self._values = values
        self._zero = zero

    @classmethod
    def _from_array(cls, values: np.ndarray, zero: FractionBase) -> "FractionMatrix":
        result = object.__new__(cls)
        result._values = values
        result._zero = zero
        return result

    @classmethod
    def zeros(
        cls,
        number_of_rows: int,
        number_of_columns: int,
        *,
        fraction_type: Optional[Type[FractionBase]] = None,
    ) -> "FractionMatrix":
        kind = Fraction if fraction_type is None else fraction_type
        if number_of_rows < 0 or number_of_columns < 0:
            raise ShapeMismatch("dimensions must be non-negative", actual=(number_of_rows, number_of_columns))
        zero = kind.zero()
        values = np.empty((number_of_rows, number_of_columns), dtype=object)
        for index in np.ndindex(number_of_rows, number_of_columns):
            values[index] = zero
        return cls._from_array(values, zero)

    @classmethod
    def identity(
        cls,
        size: int,
        *,
        fraction_type: Optional[Type[FractionBase]] = None,
    ) -> "FractionMatrix":
        kind = Fraction if fraction_type is None else fraction_type
        if size < 0:
            raise ShapeMismatch("dimensions must be non-negative", actual=(size, size))
        zero = kind.zero()
        return cls._from_array(cls._identity_values(size, zero, zero.coerce(1)), zero)

    @staticmethod
    def _identity_values(size: int, zero: FractionBase, one: FractionBase) -> np.ndarray:
        values = np.empty((size, size), dtype=object)
        for i in range(size):
            for j in range(size):
                values[i, j] = one if i == j else zero
        return values

    # ------------------------------------------------------------------
    # Shape and access
    @property
    def shape(self) -> Tuple[int, int]:
        return (self._values.shape[0], self._values.shape[1])

    @property
    def number_of_rows(self) -> int:
        return self._values.shape[0]

    @property
    def number_of_columns(self) -> int:
        return self._values.shape[1]

    def _check_row(self, row: int) -> None:
        if not isinstance(row, numbers.Integral) or not 0 <= row < self.number_of_rows:
            raise IndexOutOfRange(f"row {row!r} is outside a {self.shape} matrix", index=row, shape=self.shape)

    def _check_column(self, column: int) -> None:
        if not isinstance(column, numbers.Integral) or not 0 <= column < self.number_of_columns:
            raise IndexOutOfRange(
                f"column {column!r} is outside a {self.shape} matrix", index=column, shape=self.shape
            )

    def _check_index(self, row: int, column: int) -> None:
        for index, size in zip((row, column), self.shape):
            if not isinstance(index, numbers.Integral) or not 0 <= index < size:
                raise IndexOutOfRange(
                    f"index {(row, column)!r} is outside a {self.shape} matrix",
                    index=(row, column),
                    shape=self.shape,
                )

    def get(self, row: int, column: int) -> FractionBase:
        self._check_index(row, column)
        return self._values[row, column]

    def set(self, row: int, column: int, value: Any) -> None:
        self._check_index(row, column)
        if not isinstance(value, FractionBase):
            value = self._zero.coerce(value)
        self._values[row, column] = value

    def __getitem__(self, key: Tuple[int, int]) -> FractionBase:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("matrix entries are addressed as m[row, column]")
        return self.get(*key)

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("matrix entries are addressed as m[row, column]")
        self.set(key[0], key[1], value)

    def row(self, index: int) -> List[FractionBase]:
        self._check_row(index)
        return list(self._values[index, :])

    def column(self, index: int) -> List[FractionBase]:
        self._check_column(index)
        return list(self._values[:, index])

    # ------------------------------------------------------------------
    # Element-wise operations
    def _map(self, func: Callable[[FractionBase], FractionBase]) -> "FractionMatrix":
        zero = func(self._zero)
        if self._values.size == 0:
            return FractionMatrix._from_array(self._values.copy(), zero)
        vectorised = np.vectorize(func, otypes=[object])
        return FractionMatrix._from_array(vectorised(self._values), zero)

    def _zip(self, other: "FractionMatrix", func, verb: str) -> "FractionMatrix":
        if self.shape != other.shape:
            raise ShapeMismatch(
                f"cannot {verb} a {self.shape} matrix and a {other.shape} matrix",
                expected=self.shape,
                actual=other.shape,
            )
        zero = func(self._zero, other._zero)
        if self._values.size == 0:
            return FractionMatrix._from_array(self._values.copy(), zero)
        vectorised = np.vectorize(func, otypes=[object])
        return FractionMatrix._from_array(vectorised(self._values, other._values), zero)

    def scale(self, scalar: Any) -> "FractionMatrix":
        return self._map(lambda entry: entry * scalar)

    def add(self, other: "FractionMatrix") -> "FractionMatrix":
        return self._zip(other, operator.add, "add")

    def sub(self, other: "FractionMatrix") -> "FractionMatrix":
        return self._zip(other, operator.sub, "subtract")

    def neg(self) -> "FractionMatrix":
        return self._map(operator.neg)

    def transpose(self) -> "FractionMatrix":
        return FractionMatrix._from_array(self._values.T.copy(), self._zero)

    @property
    def T(self) -> "FractionMatrix":
        return self.transpose()

    # ------------------------------------------------------------------
    # Products
    def multiply(self, other: "FractionMatrix") -> "FractionMatrix":
        """Matrix product ``self @ other``."""
        rows, inner = self.shape
        other_inner, columns = other.shape
        if inner != other_inner:
            raise ShapeMismatch(
                f"cannot multiply a {rows}x{inner} matrix by a {other_inner}x{columns} matrix",
                expected=(inner, columns),
                actual=other.shape,
            )
        zero = self._zero * other._zero
        values = np.empty((rows, columns), dtype=object)
        for i in range(rows):
            left = self._values[i, :]
            for j in range(columns):
                values[i, j] = _dot(left, other._values[:, j], zero)
        return FractionMatrix._from_array(values, zero)

    def multiply_vector(self, vector: Sequence[Any]) -> List[FractionBase]:
        """Matrix-vector product ``self @ vector``."""
        entries = as_fraction_array(vector)
        if entries.ndim != 1 or len(entries) != self.number_of_columns:
            raise ShapeMismatch(
                f"cannot multiply a {self.shape} matrix by a vector of length {len(entries)}",
                expected=(self.number_of_columns,),
                actual=entries.shape,
            )
        return [_dot(self._values[i, :], entries, self._zero) for i in range(self.number_of_rows)]

    def vector_multiply(self, vector: Sequence[Any]) -> List[FractionBase]:
        """Vector-matrix product ``vector @ self``."""
        entries = as_fraction_array(vector)
        if entries.ndim != 1 or len(entries) != self.number_of_rows:
            raise ShapeMismatch(
                f"cannot multiply a vector of length {len(entries)} by a {self.shape} matrix",
                expected=(self.number_of_rows,),
                actual=entries.shape,
            )
        return [_dot(entries, self._values[:, j], self._zero) for j in range(self.number_of_columns)]

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, FractionMatrix):
            return self.multiply(other)
        if isinstance(other, np.ndarray) and other.ndim == 2:
            return self.multiply(FractionMatrix(other))
        if isinstance(other, (list, tuple, np.ndarray)):
            return self.multiply_vector(other)
        return NotImplemented

    def __rmatmul__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray) and other.ndim == 2:
            return FractionMatrix(other).multiply(self)
        if isinstance(other, (list, tuple, np.ndarray)):
            return self.vector_multiply(other)
        return NotImplemented

    def __mul__(self, scalar: Any) -> Any:
        if not isinstance(scalar, (FractionBase, numbers.Real)):
            return NotImplemented
        return self.scale(scalar)

    def __rmul__(self, scalar: Any) -> Any:
        if not isinstance(scalar, (FractionBase, numbers.Real)):
            return NotImplemented
        return self._map(lambda entry: scalar * entry)

    def __add__(self, other: Any) -> Any:
        if not isinstance(other, FractionMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Any:
        if not isinstance(other, FractionMatrix):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> "FractionMatrix":
        return self.neg()

    # ------------------------------------------------------------------
    # Elimination
    def identity_minus(self) -> "FractionMatrix":
        """Return ``I - M``, keeping the representation of every entry."""
        if self.number_of_rows != self.number_of_columns:
            raise ShapeMismatch(
                f"cannot take identity-minus of a non-square {self.shape} matrix", actual=self.shape
            )
        values = self._values.copy()
        for i in range(self.number_of_rows):
            for j in range(self.number_of_columns):
                values[i, j] = values[i, j].one_minus() if i == j else -values[i, j]
        return FractionMatrix._from_array(values, self._zero)

    def gauss_jordan(self) -> "FractionMatrix":
        """Row echelon form by Gaussian elimination."""
        values = self._values.copy()
        rows, columns = self.shape
        exact = self.is_exact()
        pivot_row = 0
        for column in range(columns):
            if pivot_row >= rows:
                break
            pivot = _pivot_row(values, column, pivot_row, exact)
            if pivot is None:
                continue
            _swap_rows(values, pivot_row, pivot)
            for row in range(pivot_row + 1, rows):
                entry = values[row, column]
                if entry.is_zero():
                    continue
                factor = entry / values[pivot_row, column]
                for c in range(column, columns):
                    values[row, c] = values[row, c] - factor * values[pivot_row, c]
            pivot_row += 1
        return FractionMatrix._from_array(values, self._zero)

    def gauss_jordan_reduced(self) -> "FractionMatrix":
        """Reduced row echelon form by Gauss-Jordan elimination."""
        values = self._values.copy()
        _reduce(values, range(self.number_of_columns), self.is_exact())
        return FractionMatrix._from_array(values, self._zero)

    def invert(self) -> "FractionMatrix":
        """Inverse by Gauss-Jordan elimination on ``[M | I]``.

        All-exact matrices are inverted exactly. With approximate entries the
        elimination uses partial pivoting and inherits the usual floating-point
        stability limits.
        """
        size = self.number_of_rows
        if size != self.number_of_columns:
            raise ShapeMismatch(f"can only invert a square matrix, got {self.shape}", actual=self.shape)
        if size == 0:
            return FractionMatrix._from_array(self._values.copy(), self._zero)
        logger.debug("inverting a %dx%d matrix (exact=%s)", size, size, self.is_exact())

        identity = self._identity_values(size, self._zero, self._zero.coerce(1))
        values = np.hstack([self._values, identity])
        missing = _reduce(values, range(size), self.is_exact())
        if missing is not None:
            raise SingularMatrixError("matrix is not invertible", shape=self.shape, column=missing)
        return FractionMatrix._from_array(values[:, size:].copy(), self._zero)

    # ------------------------------------------------------------------
    # Conversion
    def is_exact(self) -> bool:
        return all(entry.is_exact() for entry in self._values.flat)

    def to_approximate(self) -> "FractionMatrix":
        return self._map(lambda entry: entry.to_approximate())

    def to_exact(self, max_denominator: Optional[int] = None) -> "FractionMatrix":
        return self._map(lambda entry: entry.to_exact(max_denominator))

    def to_list(self) -> List[List[FractionBase]]:
        return self._values.tolist()

    def to_numpy(self) -> np.ndarray:
        """Float copy of the matrix."""
        result = np.empty(self.shape, dtype=float)
        for index, entry in np.ndenumerate(self._values):
            result[index] = to_float(entry)
        return result

    # ------------------------------------------------------------------
    # Comparison
    def equals(self, other: "FractionMatrix") -> bool:
        """Entry-wise Fraction equality; epsilon-tolerant for approximate entries."""
        if self.shape != other.shape:
            raise ShapeMismatch(
                f"cannot compare a {self.shape} matrix with a {other.shape} matrix",
                expected=self.shape,
                actual=other.shape,
            )
        return all(a == b for a, b in zip(self._values.flat, other._values.flat))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FractionMatrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(repr(entry) for entry in row) + "]" for row in self._values)
        return f"FractionMatrix([{rows}])"

    def __str__(self) -> str:
        return "\n".join("[" + ", ".join(str(entry) for entry in row) + "]" for row in self._values)


def _reduce(values: np.ndarray, pivot_columns, exact: bool) -> Optional[int]:
    """Bring *values* to reduced row echelon form in place.

    Returns the first column of *pivot_columns* without a pivot, or None.
    """
    rows, columns = values.shape
    pivot_row = 0
    missing = None
    for column in pivot_columns:
        if pivot_row >= rows:
            break
        pivot = _pivot_row(values, column, pivot_row, exact)
        if pivot is None:
            if missing is None:
                missing = column
            continue
        _swap_rows(values, pivot_row, pivot)
        pivot_value = values[pivot_row, column]
        for c in range(column, columns):
            values[pivot_row, c] = values[pivot_row, c] / pivot_value
        for row in range(rows):
            if row == pivot_row:
                continue
            entry = values[row, column]
            if entry.is_zero():
                continue
            for c in range(column, columns):
                values[row, c] = values[row, c] - entry * values[pivot_row, c]
        pivot_row += 1
    return missing


__all__ = ["FractionMatrix"]
