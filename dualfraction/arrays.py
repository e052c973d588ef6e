"""NumPy object arrays holding Fractions."""
from __future__ import annotations

from typing import Any, Optional, Tuple, Type, Union

import numpy as np

from .base import FractionBase
from .fraction import Fraction


def _converter(fraction_type: Optional[Type[FractionBase]]):
    cls = Fraction if fraction_type is None else fraction_type

    def convert(item: Any) -> FractionBase:
        if isinstance(item, FractionBase):
            return item
        return cls(item)

    return convert


def as_fraction_array(
    values: Any,
    *,
    fraction_type: Optional[Type[FractionBase]] = None,
    copy: bool = True,
) -> np.ndarray:
    """Return a ``numpy.ndarray`` of Fraction values.

    ``values`` can be any iterable containing numeric-like entries or an existing
    NumPy array. Entries that already are Fractions are kept as they are; the
    rest are converted with *fraction_type* (``Fraction`` by default). When
    ``copy`` is ``False`` and ``values`` is already an object array of
    Fractions, it is returned as is.
    """
    convert = _converter(fraction_type)

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype != object:
            array = array.astype(object)
        if all(isinstance(item, FractionBase) for item in array.flat):
            return array
        vectorised = np.vectorize(convert, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        array = np.empty(len(values), dtype=object)
        for index, item in enumerate(values):
            array[index] = convert(item)
        return array

    return as_fraction_array(list(values), fraction_type=fraction_type, copy=copy)


def zeros(
    shape: Union[int, Tuple[int, ...]],
    *,
    fraction_type: Optional[Type[FractionBase]] = None,
) -> np.ndarray:
    """Return an array of the given shape filled with zeros."""
    cls = Fraction if fraction_type is None else fraction_type
    if isinstance(shape, int):
        shape = (shape,)
    if any(length < 0 for length in shape):
        raise ValueError("dimensions must be non-negative")
    array = np.empty(shape, dtype=object)
    for index in np.ndindex(*shape):
        array[index] = cls.zero()
    return array


def zeros_like(
    values: Any,
    *,
    fraction_type: Optional[Type[FractionBase]] = None,
) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""
    shape = np.shape(values) if isinstance(values, np.ndarray) else (len(values),)
    return zeros(shape, fraction_type=fraction_type)


__all__ = ["as_fraction_array", "zeros", "zeros_like"]
