"""Process-wide choice between exact and approximate construction.

The selector is consulted only when a Fraction is built from scratch
(``zero``, ``one``, conversions). Values that already exist keep their
representation when the mode changes, so a computation spanning a mode
change mixes exact and approximate operands and follows the demotion
rule of the arithmetic.
"""
from __future__ import annotations

import enum
import logging

from .config import ACTIVE_CONFIGURATION, Configuration
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    EXACT = "exact"
    APPROXIMATE = "approximate"


class ModeSelector:
    """Holds the mode for one build configuration.

    In a fixed configuration the mode is a constant. In the switchable
    configuration it is a single attribute: reads and writes are plain
    reference loads and stores, so no reader observes a partial update.
    There is no locking beyond that and no way to roll back a change.
    """

    __slots__ = ("_configuration", "_mode")

    def __init__(self, configuration: Configuration, default: Mode = Mode.EXACT) -> None:
        self._configuration = configuration
        if configuration is Configuration.EXACT:
            default = Mode.EXACT
        elif configuration is Configuration.APPROXIMATE:
            default = Mode.APPROXIMATE
        self._mode = default

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def get(self) -> Mode:
        return self._mode

    def set(self, mode: Mode) -> None:
        if not isinstance(mode, Mode):
            raise TypeError(f"mode must be a Mode, got {type(mode)!r}")
        if self._configuration.is_fixed:
            if mode is not self._mode:
                raise ConfigurationError(
                    f"the {self._configuration.value} configuration cannot switch to {mode.value} arithmetic"
                )
            return
        if mode is not self._mode:
            logger.debug("arithmetic mode changed from %s to %s", self._mode.value, mode.value)
        self._mode = mode


_selector = ModeSelector(ACTIVE_CONFIGURATION)


def selector() -> ModeSelector:
    """Return the process-wide selector."""
    return _selector


def current_mode() -> Mode:
    return _selector.get()


def set_mode(mode: Mode) -> None:
    _selector.set(mode)


def is_exact_globally() -> bool:
    return _selector.get() is Mode.EXACT


def set_exact_globally(exact: bool) -> None:
    """Enable or disable exact construction of new Fractions."""
    _selector.set(Mode.EXACT if exact else Mode.APPROXIMATE)


__all__ = [
    "Mode",
    "ModeSelector",
    "selector",
    "current_mode",
    "set_mode",
    "is_exact_globally",
    "set_exact_globally",
]
