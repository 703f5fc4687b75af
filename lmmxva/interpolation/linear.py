"""
Linear interpolation rules on curve pillars.

All rules hold the value flat outside the pillar range; for zero rates this
means a flat zero rate, not a flat discount factor.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear in the values. The default rule for forward curves."""

    def interpolate(self, t: float) -> float:
        # np.interp clamps to the end values outside the pillars
        return float(np.interp(t, self.pillars, self.values))


class LogLinearZeroInterpolator(Interpolator):
    """Zero rates interpolated so that log discount factors are linear in time.

    Below the first pillar and beyond the last the zero rate is held flat.
    """

    def __init__(self, pillars: Sequence[float], zero_rates: Sequence[float]):
        """
        Args:
            pillars: Times in years
            zero_rates: Continuously compounded zero rates at the pillars
        """
        super().__init__(pillars, zero_rates)
        self.log_dfs = -self.values * self.pillars

    def interpolate(self, t: float) -> float:
        """Zero rate at time t."""
        if t <= 0:
            return float(self.values[0])
        return -self._log_discount_factor(t) / t

    def interpolate_discount_factor(self, t: float) -> float:
        return math.exp(self._log_discount_factor(t))

    def _log_discount_factor(self, t: float) -> float:
        if t <= self.pillars[0]:
            return -float(self.values[0]) * t
        if t >= self.pillars[-1]:
            return -float(self.values[-1]) * t
        return float(np.interp(t, self.pillars, self.log_dfs))


class PiecewiseConstantInterpolator(Interpolator):
    """Right-continuous step function: a pillar value holds until the next pillar."""

    def interpolate(self, t: float) -> float:
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        return float(self.values[min(max(i, 0), self.values.size - 1)])
