"""Dual-mode fractions: exact rationals or tolerant floats behind one type.

Usage:
    from dualfraction import Fraction, FractionMatrix, set_exact_globally

    half = Fraction(1, 2)
    m = FractionMatrix([[half, 0], [0, half]])

Configuration:
    DUALFRACTION_ARITHMETIC=exact|approximate|switchable (read at import)

Logging:
    import logging
    logging.getLogger('dualfraction').setLevel(logging.DEBUG)
"""
import logging

from .approximate import ApproximateValue
from .arrays import as_fraction_array, zeros, zeros_like
from .base import FractionBase
from .config import (
    ACTIVE_CONFIGURATION,
    APPROX_DIGITS,
    DEFAULT_MAX_DENOMINATOR,
    EPSILON,
    Configuration,
)
from .exact import ExactValue, rationalize
from .exceptions import (
    ConfigurationError,
    DivisionByZero,
    FractionError,
    IndexOutOfRange,
    NonRepresentable,
    NumericOverflow,
    ParseError,
    SelectionError,
    ShapeMismatch,
    SingularMatrixError,
)
from .fraction import Fraction, FractionEnum, f, f0, f1, fraction_type
from .matrix import FractionMatrix
from .mode import Mode, current_mode, is_exact_globally, set_exact_globally, set_mode
from .sampling import FractionRandomCache, choose_randomly

__version__ = "0.1.0"

__all__ = [
    "Fraction",
    "FractionBase",
    "FractionEnum",
    "ExactValue",
    "ApproximateValue",
    "FractionMatrix",
    "fraction_type",
    "f",
    "f0",
    "f1",
    "rationalize",
    "as_fraction_array",
    "zeros",
    "zeros_like",
    "choose_randomly",
    "FractionRandomCache",
    "Mode",
    "current_mode",
    "set_mode",
    "is_exact_globally",
    "set_exact_globally",
    "Configuration",
    "ACTIVE_CONFIGURATION",
    "EPSILON",
    "APPROX_DIGITS",
    "DEFAULT_MAX_DENOMINATOR",
    "FractionError",
    "DivisionByZero",
    "NonRepresentable",
    "NumericOverflow",
    "ParseError",
    "SelectionError",
    "ShapeMismatch",
    "IndexOutOfRange",
    "SingularMatrixError",
    "ConfigurationError",
]

# No handlers; the host decides where records go.
logging.getLogger(__name__).addHandler(logging.NullHandler())
