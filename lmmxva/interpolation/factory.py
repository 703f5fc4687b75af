"""
Interpolator lookup by name and discount factor / zero rate conversions.
"""
import math
from typing import Dict, Sequence, Type

from lmmxva.exceptions import ConfigurationError

from .base import Interpolator
from .linear import (
    LinearInterpolator,
    LogLinearZeroInterpolator,
    PiecewiseConstantInterpolator,
)

INTERPOLATORS: Dict[str, Type[Interpolator]] = {
    "LINEAR": LinearInterpolator,
    "LOGLINEAR_ZERO": LogLinearZeroInterpolator,
    "PIECEWISE_CONSTANT": PiecewiseConstantInterpolator,
}


def create_interpolator(method: str,
                        pillars: Sequence[float],
                        values: Sequence[float]) -> Interpolator:
    """
    Build the interpolator registered under ``method`` (case-insensitive).

    Raises:
        ConfigurationError: If the method is unknown or the pillars invalid
    """
    try:
        interpolator_class = INTERPOLATORS[method.upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown interpolation method: {method}. "
            f"Available: {', '.join(sorted(INTERPOLATORS))}"
        ) from None
    return interpolator_class(pillars, values)


def discount_factor_to_zero_rate(df: float, time: float) -> float:
    """Continuously compounded zero rate of a discount factor."""
    if not (df > 0.0 and time > 0.0):
        raise ValueError(f"Need a positive discount factor and time, got {df} at {time}")
    return -math.log(df) / time


def zero_rate_to_discount_factor(rate: float, time: float) -> float:
    return math.exp(-rate * time)
