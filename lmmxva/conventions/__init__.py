from .types import Measure, ShortPeriodLocation, StateSpace, TimeSteppingScheme

__all__ = [
    "Measure",
    "ShortPeriodLocation",
    "StateSpace",
    "TimeSteppingScheme",
]
