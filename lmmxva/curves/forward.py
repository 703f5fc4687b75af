"""
Forward curve giving the initial simple forward rate per fixing time.
"""
from typing import Sequence

from lmmxva.exceptions import ConfigurationError
from lmmxva.interpolation import create_interpolator

from .base import BaseCurve


class ForwardCurve(BaseCurve):
    """
    Initial forward curve.

    At each pillar time the stated simple forward rate applies over
    ``period_length``. Between pillars the rates are interpolated, outside
    the pillars they are held flat.
    """

    def __init__(self,
                 name: str,
                 pillar_times: Sequence[float],
                 forward_rates: Sequence[float],
                 period_length: float,
                 interpolation_method: str = "LINEAR"):
        """
        Initialize forward curve.

        Args:
            name: Curve name
            pillar_times: Fixing times of the given forwards (in years)
            forward_rates: Simple forward rates at the pillar times
            period_length: Accrual period the forwards refer to
            interpolation_method: Interpolation rule on the forward values
        """
        super().__init__(name, pillar_times, forward_rates)

        if not period_length > 0.0:
            raise ConfigurationError(
                f"Forward curve '{name}': period length must be positive: {period_length}"
            )

        self.period_length = float(period_length)
        self.interpolation_method = interpolation_method
        self.interpolator = create_interpolator(
            interpolation_method, self.pillar_times, self.values
        )

    @property
    def forward_rates(self) -> Sequence[float]:
        return list(self.values)

    def get_forward(self, time: float) -> float:
        """Get the simple forward rate fixing at the given time."""
        return self.interpolator.interpolate(time)

    def __repr__(self) -> str:
        return (f"ForwardCurve(name='{self.name}', "
                f"pillar_times={self.pillar_times}, "
                f"forward_rates={self.values}, "
                f"period_length={self.period_length}, "
                f"interpolation_method='{self.interpolation_method}')")


def create_forward_curve_from_forwards(name: str,
                                       times: Sequence[float],
                                       forwards: Sequence[float],
                                       period_length: float,
                                       interpolation_method: str = "LINEAR") -> ForwardCurve:
    """
    Create a forward curve from fixing times and simple forward rates.

    Args:
        name: Curve label
        times: Fixing times (strictly increasing)
        forwards: Forward rates at the fixing times
        period_length: Accrual period of the forwards
        interpolation_method: Interpolation rule (default linear on rates)

    Returns:
        Forward curve

    Raises:
        ConfigurationError: On empty, mismatching or non-monotonic input
    """
    return ForwardCurve(
        name=name,
        pillar_times=list(times),
        forward_rates=list(forwards),
        period_length=period_length,
        interpolation_method=interpolation_method,
    )
