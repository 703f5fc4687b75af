"""
Market quantities modelled by products on the simulated LIBOR market model.

A modelled market quantity pairs a risk coordinate with the product that
delivers the quantity. The product is built per evaluation time because its
schedule can depend on it: a 10y swap rate observed at t=2 runs from 2 to 12.
"""

import logging
from typing import Protocol, runtime_checkable

from lmmxva.conventions.types import ShortPeriodLocation
from lmmxva.exceptions import ConfigurationError
from lmmxva.products import MonteCarloProduct, SwapMarketRateProduct
from lmmxva.time import TimeGrid

from .simm import SimmCoordinate

logger = logging.getLogger(__name__)


@runtime_checkable
class ModelledMarketQuantity(Protocol):
    """Risk coordinate bundled with the product delivering its market rate."""

    def get_coordinate(self) -> SimmCoordinate:
        """Coordinate the sensitivities to this quantity are reported under."""
        ...

    def get_product(self, evaluation_time: float) -> MonteCarloProduct:
        """Product delivering the quantity when observed at evaluation_time."""
        ...


class SwapRateMarketQuantity:
    """Par rate of a spot starting swap of fixed tenor length."""

    def __init__(self,
                 coordinate: SimmCoordinate,
                 swap_tenor_length: float,
                 floating_period_length: float,
                 fixed_period_length: float,
                 short_period_location: ShortPeriodLocation = ShortPeriodLocation.SHORT_PERIOD_AT_END):
        """
        Args:
            coordinate: Risk coordinate of the rate
            swap_tenor_length: Swap length in years
            floating_period_length: Floating leg period length
            fixed_period_length: Fixed leg period length
            short_period_location: Stub placement if a period length does not
                divide the tenor length
        """
        for label, value in (("Swap tenor length", swap_tenor_length),
                             ("Floating period length", floating_period_length),
                             ("Fixed period length", fixed_period_length)):
            if not value > 0.0:
                raise ConfigurationError(f"{label} must be positive: {value}")

        self.coordinate = coordinate
        self.swap_tenor_length = float(swap_tenor_length)
        self.floating_period_length = float(floating_period_length)
        self.fixed_period_length = float(fixed_period_length)
        self.short_period_location = short_period_location

    def get_coordinate(self) -> SimmCoordinate:
        return self.coordinate

    def get_product(self, evaluation_time: float) -> SwapMarketRateProduct:
        """Swap rate product with both schedules starting at evaluation_time."""
        end = evaluation_time + self.swap_tenor_length
        floating_tenor = TimeGrid.from_period_length(
            evaluation_time, end, self.floating_period_length, self.short_period_location
        )
        fixed_tenor = TimeGrid.from_period_length(
            evaluation_time, end, self.fixed_period_length, self.short_period_location
        )
        logger.debug(
            "Swap rate product for %s at time %s: %s floating, %s fixed periods",
            self.coordinate,
            evaluation_time,
            floating_tenor.number_of_time_steps,
            fixed_tenor.number_of_time_steps,
        )
        return SwapMarketRateProduct(floating_tenor, fixed_tenor)

    def __repr__(self) -> str:
        return (f"SwapRateMarketQuantity(coordinate={self.coordinate}, "
                f"swap_tenor_length={self.swap_tenor_length})")
