"""Par swap rate observed in the simulated model.

The par rate at time t is the fixed rate that gives the remaining swap zero
value at t:

    S(t) = sum_i L_i(t) * delta_i * P(E_i; t) / sum_j delta_j * P(E_j; t)

where the floating sum runs over the floating periods and the annuity over
the fixed periods starting at or after t. Forwards come from the model's
own bonds, discounting uses the bonds consistent with the discount curve.
"""

import logging
from typing import List, Tuple

import numpy as np

from lmmxva.exceptions import ComputationError, DomainError
from lmmxva.montecarlo import LMMSimulationEngine, RandomVariable
from lmmxva.time import TimeGrid

from .base import MonteCarloProduct

logger = logging.getLogger(__name__)


def remaining_periods(tenor: TimeGrid, evaluation_time: float) -> List[Tuple[float, float]]:
    """(start, end) pairs of the periods starting at or after ``evaluation_time``."""
    times = tenor.times
    return [
        (float(start), float(end))
        for start, end in zip(times[:-1], times[1:])
        if start >= evaluation_time - TimeGrid.TOLERANCE
    ]


def swap_annuity(evaluation_time: float,
                 tenor: TimeGrid,
                 model: LMMSimulationEngine) -> RandomVariable:
    """
    Annuity of the periods of ``tenor`` starting at or after evaluation time.

    This is the sum of (period length x discount bond to the period end).

    Args:
        evaluation_time: Observation time t
        tenor: Period schedule
        model: Simulated model

    Returns:
        Annuity per path (zero if no period remains)
    """
    annuity = np.zeros(model.number_of_paths)
    for start, end in remaining_periods(tenor, evaluation_time):
        bond = model.get_bond(evaluation_time, end)
        # Accumulate: delta_i x P(E_i; t)
        annuity = annuity + (end - start) * bond.to_numpy(model.number_of_paths)
    return RandomVariable(annuity, evaluation_time)


class SwapMarketRateProduct(MonteCarloProduct):
    """Par swap rate of a floating and a fixed schedule."""

    def __init__(self, floating_tenor: TimeGrid, fixed_tenor: TimeGrid):
        """
        Args:
            floating_tenor: Floating leg period schedule
            fixed_tenor: Fixed leg period schedule
        """
        self.floating_tenor = floating_tenor
        self.fixed_tenor = fixed_tenor

    def get_value(self, evaluation_time: float, model: LMMSimulationEngine) -> RandomVariable:
        """
        Par swap rate at ``evaluation_time`` per path.

        Args:
            evaluation_time: Observation time t
            model: Simulated model

        Returns:
            Par rate per path

        Raises:
            DomainError: If no fixed period starts at or after t
            ComputationError: If the rate is not finite on some path
        """
        if not remaining_periods(self.fixed_tenor, evaluation_time):
            raise DomainError(
                f"No fixed period remains at time {evaluation_time} "
                f"(fixed schedule ends at {self.fixed_tenor.last_time})"
            )

        annuity = swap_annuity(evaluation_time, self.fixed_tenor, model)
        floating_leg = self._floating_leg_value(evaluation_time, model)

        # Par rate: floating leg value divided by the annuity
        with np.errstate(divide="ignore", invalid="ignore"):
            rate = floating_leg / annuity

        if not rate.is_finite():
            values = rate.to_numpy(model.number_of_paths)
            path_index = int(np.flatnonzero(~np.isfinite(values))[0])
            raise ComputationError(
                f"Par swap rate is not finite at time {evaluation_time}",
                time_index=model.get_time_index(evaluation_time),
                path_index=path_index,
            )
        return rate

    def _floating_leg_value(self, evaluation_time: float, model: LMMSimulationEngine) -> RandomVariable:
        """Sum of L_i(t) * delta_i * P(E_i; t) over the remaining floating periods."""
        periods = remaining_periods(self.floating_tenor, evaluation_time)
        if not periods:
            logger.debug("No floating period remains at time %s", evaluation_time)

        value = np.zeros(model.number_of_paths)
        for start, end in periods:
            forward = model.get_forward_rate(evaluation_time, start, end)
            bond = model.get_bond(evaluation_time, end)
            # Accumulate: L_i x delta_i x P(E_i; t)
            value = value + (forward * bond).to_numpy(model.number_of_paths) * (end - start)
        return RandomVariable(value, evaluation_time)

    def __repr__(self) -> str:
        return (f"SwapMarketRateProduct(floating_tenor={self.floating_tenor}, "
                f"fixed_tenor={self.fixed_tenor})")
