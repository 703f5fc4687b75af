"""Simple swap receiving the simulated forward and paying a fixed rate."""

from typing import Optional, Sequence

import numpy as np

from lmmxva.exceptions import ConfigurationError
from lmmxva.montecarlo import LMMSimulationEngine, RandomVariable

from .base import MonteCarloProduct


class SimpleSwap(MonteCarloProduct):
    """
    Swap with one fixing and one payment per period.

    Period i fixes at ``fixing_dates[i]`` and pays

        notional_i * (L(fixing_i, payment_i) - K_i) * (payment_i - fixing_i)

    at ``payment_dates[i]``. The value at t is the numeraire-relative sum of
    the payments after t, multiplied by the numeraire at t.
    """

    def __init__(self,
                 fixing_dates: Sequence[float],
                 payment_dates: Sequence[float],
                 swap_rates: Sequence[float],
                 notionals: Optional[Sequence[float]] = None):
        """
        Args:
            fixing_dates: Fixing (period start) times
            payment_dates: Payment (period end) times
            swap_rates: Fixed rate per period
            notionals: Notional per period (default 1.0)

        Raises:
            ConfigurationError: On mismatching lengths or a payment not
                after its fixing
        """
        self.fixing_dates = [float(t) for t in fixing_dates]
        self.payment_dates = [float(t) for t in payment_dates]
        self.swap_rates = [float(k) for k in swap_rates]
        if notionals is None:
            notionals = [1.0] * len(self.fixing_dates)
        self.notionals = [float(n) for n in notionals]

        lengths = {len(self.fixing_dates), len(self.payment_dates),
                   len(self.swap_rates), len(self.notionals)}
        if len(lengths) != 1:
            raise ConfigurationError(
                "Fixing dates, payment dates, swap rates and notionals must have equal lengths"
            )
        if not self.fixing_dates:
            raise ConfigurationError("Swap needs at least one period")
        for fixing, payment in zip(self.fixing_dates, self.payment_dates):
            if payment <= fixing:
                raise ConfigurationError(f"Payment {payment} must be after fixing {fixing}")

    def get_value(self, evaluation_time: float, model: LMMSimulationEngine) -> RandomVariable:
        values = np.zeros(model.number_of_paths)
        for fixing, payment, rate, notional in zip(
            self.fixing_dates, self.payment_dates, self.swap_rates, self.notionals
        ):
            if payment <= evaluation_time:
                continue

            libor = model.get_forward_rate(fixing, fixing, payment)
            cashflow = (libor - rate) * ((payment - fixing) * notional)
            values = values + (cashflow / model.get_numeraire(payment)).to_numpy(
                model.number_of_paths
            )

        numeraire = model.get_numeraire(evaluation_time)
        return RandomVariable(values, evaluation_time) * numeraire

    def __repr__(self) -> str:
        return (f"SimpleSwap(fixing_dates={self.fixing_dates}, "
                f"payment_dates={self.payment_dates}, swap_rates={self.swap_rates})")
