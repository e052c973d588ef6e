"""Weighted random selection over Fractions."""
from __future__ import annotations

import bisect
import logging
import math
from functools import reduce
from typing import Any, Iterable, List, Union

import numpy as np

from .base import FractionBase, to_float
from .exceptions import SelectionError
from .fraction import Fraction

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]

# np.random.Generator.integers draws 64-bit integers.
_INT64_LIMIT = 2**62


def _random_below(rng: np.random.Generator, upper: int) -> int:
    """Uniform integer in ``[0, upper)`` for arbitrarily large *upper*."""
    if upper <= _INT64_LIMIT:
        return int(rng.integers(0, upper))
    bits = upper.bit_length()
    size = (bits + 7) // 8
    while True:
        candidate = int.from_bytes(rng.bytes(size), "big") >> (size * 8 - bits)
        if candidate < upper:
            return candidate


class FractionRandomCache:
    """Cumulative distribution of a list of weights, for repeated draws.

    When every weight is exact, the distribution is sampled exactly: the
    normalised probabilities are scaled to integers over the least common
    multiple of their denominators and an integer is drawn uniformly below
    it. Otherwise a uniform float in ``[0, 1)`` is drawn.
    """

    __slots__ = ("_cumulative", "_exact", "_scale")

    def __init__(self, weights: Iterable[Any]) -> None:
        values = [w if isinstance(w, FractionBase) else Fraction(w) for w in weights]
        if not values:
            raise SelectionError("cannot take an element of an empty list")
        if any(value.is_negative() for value in values):
            raise SelectionError("weights must not be negative")
        total = reduce(lambda a, b: a + b, values)
        if total.is_zero():
            raise SelectionError("sum of weights is zero")

        self._exact = total.is_exact()
        if self._exact:
            exact_total = total.as_fraction()
            probabilities = [value.as_fraction() / exact_total for value in values]
            self._scale = reduce(lambda a, b: a * b // math.gcd(a, b), (p.denominator for p in probabilities))
            running = 0
            cumulative: List[Any] = []
            for probability in probabilities:
                running += probability.numerator * (self._scale // probability.denominator)
                cumulative.append(running)
        else:
            float_total = to_float(total)
            self._scale = 1
            running = 0.0
            cumulative = []
            for value in values:
                running += to_float(value) / float_total
                cumulative.append(running)
        self._cumulative = cumulative
        logger.debug("random cache over %d weights (exact=%s)", len(values), self._exact)

    def __len__(self) -> int:
        return len(self._cumulative)

    @property
    def exact(self) -> bool:
        return self._exact

    def choose(self, rng: RandomSource = None) -> int:
        """Draw an index with probability proportional to its weight."""
        generator = np.random.default_rng(rng)
        if self._exact:
            value = _random_below(generator, self._scale)
        else:
            value = generator.random()
        return min(bisect.bisect_right(self._cumulative, value), len(self._cumulative) - 1)


def choose_randomly(weights: Iterable[Any], rng: RandomSource = None) -> int:
    """Return a random index of *weights*, chosen proportionally to the weights."""
    return FractionRandomCache(weights).choose(rng)


__all__ = ["FractionRandomCache", "choose_randomly", "RandomSource"]
