"""
Exception hierarchy for dualfraction.

All exceptions inherit from FractionError so host code can catch every
library failure at once. Each kind also derives from the closest builtin
exception, so ``except ZeroDivisionError`` and friends keep working.
"""
from __future__ import annotations

from typing import Optional, Tuple


class FractionError(Exception):
    """Base exception for all dualfraction errors."""
    pass


class DivisionByZero(FractionError, ZeroDivisionError):
    """
    Division by a zero value.

    For exact values the divisor is exactly zero. For approximate values
    the divisor magnitude is below the comparison tolerance.
    """
    pass


class NonRepresentable(FractionError, ValueError):
    """
    The requested result has no representation in the operand's mode.

    Raised for exact roots and powers without an exact result, square
    roots of negative values, and reconstruction of exact values from
    floats that are not close to a small rational.
    """
    pass


class NumericOverflow(FractionError, OverflowError):
    """A floating result would leave the finite range."""
    pass


class ParseError(FractionError, ValueError):
    """A string could not be read as a number."""
    pass


class SelectionError(FractionError, ValueError):
    """Random selection over weights that do not form a distribution."""
    pass


class ConfigurationError(FractionError, RuntimeError):
    """
    Invalid arithmetic configuration.

    Raised for an unknown build configuration and for requests to switch
    the mode of a build whose mode is fixed.
    """
    pass


class ShapeMismatch(FractionError, ValueError):
    """
    Matrix dimensions are inconsistent.

    Attributes:
        expected: Shape (or row length) that was required, if known
        actual: Shape (or row length) that was found, if known
    """

    def __init__(
        self,
        message: str,
        expected: Optional[Tuple[int, ...]] = None,
        actual: Optional[Tuple[int, ...]] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRange(FractionError, IndexError):
    """
    Matrix access outside its shape.

    Attributes:
        index: The offending (row, column) or single index
        shape: Shape of the matrix that was accessed
    """

    def __init__(self, message: str, index=None, shape: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.index = index
        self.shape = shape


class SingularMatrixError(NonRepresentable):
    """
    Matrix has no inverse.

    Attributes:
        shape: Shape of the matrix
        column: Column in which elimination found no usable pivot
    """

    def __init__(self, message: str, shape: Optional[Tuple[int, int]] = None, column: Optional[int] = None):
        super().__init__(message)
        self.shape = shape
        self.column = column


__all__ = [
    "FractionError",
    "DivisionByZero",
    "NonRepresentable",
    "NumericOverflow",
    "ParseError",
    "SelectionError",
    "ConfigurationError",
    "ShapeMismatch",
    "IndexOutOfRange",
    "SingularMatrixError",
]
