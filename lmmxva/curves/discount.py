"""
Discount curve implementation with interpolation support.
"""
import logging
import math
from typing import List, Sequence

from lmmxva.exceptions import ConfigurationError
from lmmxva.interpolation import (
    create_interpolator,
    discount_factor_to_zero_rate,
    zero_rate_to_discount_factor,
)

from .base import BaseCurve

logger = logging.getLogger(__name__)


class DiscountCurve(BaseCurve):
    """
    Initial discount curve.

    A discount factor of 1.0 at t=0 is implied. The curve interpolates zero
    rates log-linearly (linear in log discount factors) and holds the zero
    rate flat beyond the last pillar.
    """

    def __init__(self,
                 name: str,
                 pillar_times: Sequence[float],
                 discount_factors: Sequence[float],
                 interpolation_method: str = "LOGLINEAR_ZERO"):
        """
        Initialize discount curve.

        Args:
            name: Curve name
            pillar_times: Pillar times in years (positive, strictly increasing)
            discount_factors: Discount factors at pillar times
            interpolation_method: Interpolation rule on zero rates
        """
        super().__init__(name, pillar_times, discount_factors)

        # Validate discount factors
        for i, df in enumerate(self.values):
            if not (df > 0 and math.isfinite(df)):
                raise ConfigurationError(
                    f"Discount factor at pillar {i} must be positive: {df}"
                )
        if self.pillar_times[0] < 0.0:
            raise ConfigurationError(
                f"Pillar times must be non-negative: {self.pillar_times[0]}"
            )

        # Check monotonicity (discount factors should be decreasing)
        for i in range(1, len(self.values)):
            increase = self.values[i] - self.values[i - 1]
            # Allow small increases for numerical stability, but warn about large ones
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at pillar %s (increase = %.8f)",
                    i,
                    increase,
                )

        times = list(self.pillar_times)
        zero_rates = [
            discount_factor_to_zero_rate(df, t) if t > 0 else 0.0
            for t, df in zip(times, self.values)
        ]
        if times[0] > 0.0:
            # Implied pillar P(0) = 1
            times.insert(0, 0.0)
            zero_rates.insert(0, zero_rates[0])

        self.interpolation_method = interpolation_method
        self.interpolator = create_interpolator(interpolation_method, times, zero_rates)

    @property
    def discount_factors(self) -> List[float]:
        return list(self.values)

    def get_discount_factor(self, time: float) -> float:
        """Get discount factor at time t."""
        if time <= 0:
            return 1.0

        if hasattr(self.interpolator, 'interpolate_discount_factor'):
            return self.interpolator.interpolate_discount_factor(time)
        return zero_rate_to_discount_factor(self.interpolator.interpolate(time), time)

    def get_zero_rate(self, time: float) -> float:
        """Get continuously compounded zero rate at time t."""
        if time <= 0:
            return 0.0
        return discount_factor_to_zero_rate(self.get_discount_factor(time), time)

    def get_forward(self, start: float, end: float) -> float:
        """Simply compounded forward rate between two times."""
        if end <= start:
            raise ValueError("Forward period must be positive")
        return (self.get_discount_factor(start) / self.get_discount_factor(end) - 1.0) / (end - start)

    def __repr__(self) -> str:
        return (f"DiscountCurve(name='{self.name}', "
                f"pillar_times={self.pillar_times}, "
                f"discount_factors={self.values}, "
                f"interpolation_method='{self.interpolation_method}')")


def create_discount_curve_from_discount_factors(name: str,
                                                times: Sequence[float],
                                                discount_factors: Sequence[float],
                                                interpolation_method: str = "LOGLINEAR_ZERO") -> DiscountCurve:
    """
    Create a discount curve from pillar times and discount factors.

    Args:
        name: Curve label
        times: Pillar times (strictly increasing, non-negative)
        discount_factors: Discount factors at the pillars
        interpolation_method: Interpolation rule on zero rates

    Returns:
        Discount curve with P(0) = 1 implied

    Raises:
        ConfigurationError: On empty, mismatching, non-monotonic or
            non-positive input
    """
    return DiscountCurve(
        name=name,
        pillar_times=list(times),
        discount_factors=list(discount_factors),
        interpolation_method=interpolation_method,
    )


def create_flat_discount_curve(flat_rate: float,
                               max_time: float = 30.0,
                               num_pillars: int = 10,
                               name: str = "FLAT") -> DiscountCurve:
    """
    Create a flat discount curve for testing purposes.

    Args:
        flat_rate: Flat continuously compounded zero rate
        max_time: Maximum time in years
        num_pillars: Number of pillar points
        name: Curve name

    Returns:
        Flat discount curve
    """
    times = [(i + 1) * max_time / num_pillars for i in range(num_pillars)]
    discount_factors = [math.exp(-flat_rate * t) for t in times]

    return DiscountCurve(
        name=name,
        pillar_times=times,
        discount_factors=discount_factors,
    )
