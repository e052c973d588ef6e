"""Arithmetic configuration: tolerances and the import-time build selection."""
from __future__ import annotations

import enum
import logging
import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

#: Two approximate values closer than this compare equal.
EPSILON = 1e-13

#: Decimal digits used by ``approx_sqrt`` when no precision is given.
APPROX_DIGITS = 5

#: Largest denominator tried when rebuilding an exact value from a float.
DEFAULT_MAX_DENOMINATOR = 10**6

#: Environment variable selecting the build configuration.
ARITHMETIC_ENV_VAR = "DUALFRACTION_ARITHMETIC"


class Configuration(str, enum.Enum):
    """Which representation backs ``Fraction``."""

    EXACT = "exact"
    APPROXIMATE = "approximate"
    SWITCHABLE = "switchable"

    @property
    def is_fixed(self) -> bool:
        return self is not Configuration.SWITCHABLE


def configuration_from_environment(environ: Optional[Mapping[str, str]] = None) -> Configuration:
    """Read the build configuration from ``DUALFRACTION_ARITHMETIC``.

    An unset or empty variable selects the switchable configuration.
    """
    if environ is None:
        environ = os.environ
    raw = environ.get(ARITHMETIC_ENV_VAR, "").strip().lower()
    if not raw:
        return Configuration.SWITCHABLE
    try:
        return Configuration(raw)
    except ValueError:
        allowed = ", ".join(c.value for c in Configuration)
        raise ConfigurationError(
            f"{ARITHMETIC_ENV_VAR}={raw!r} is not a configuration; expected one of {allowed}"
        ) from None


ACTIVE_CONFIGURATION = configuration_from_environment()
logger.debug("arithmetic configuration: %s", ACTIVE_CONFIGURATION.value)


__all__ = [
    "EPSILON",
    "APPROX_DIGITS",
    "DEFAULT_MAX_DENOMINATOR",
    "ARITHMETIC_ENV_VAR",
    "Configuration",
    "configuration_from_environment",
    "ACTIVE_CONFIGURATION",
]
