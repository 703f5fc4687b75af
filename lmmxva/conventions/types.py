"""
Basic types and enums used across the simulation stack.
"""

from enum import Enum


class ShortPeriodLocation(Enum):
    """Where a time discretization places its short (stub) period."""

    SHORT_PERIOD_AT_START = "SHORT_PERIOD_AT_START"
    SHORT_PERIOD_AT_END = "SHORT_PERIOD_AT_END"


class TimeSteppingScheme(Enum):
    """Discretization scheme for the forward rate SDE."""

    EULER = "EULER"
    PREDICTOR_CORRECTOR = "PREDICTOR_CORRECTOR"


class StateSpace(Enum):
    """State variable evolved by the scheme.

    LOGNORMAL evolves log L (rates stay positive), NORMAL evolves L itself.
    """

    LOGNORMAL = "LOGNORMAL"
    NORMAL = "NORMAL"


class Measure(Enum):
    """Pricing measure of the LIBOR market model."""

    SPOT = "SPOT"
    TERMINAL = "TERMINAL"
