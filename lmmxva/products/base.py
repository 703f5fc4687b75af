"""Base class of path-wise Monte Carlo products."""

from abc import ABC, abstractmethod

from lmmxva.montecarlo import LMMSimulationEngine, RandomVariable


class MonteCarloProduct(ABC):
    """A product valued path-wise on a simulated LIBOR market model.

    ``get_value`` returns either a value expressed in units of the currency
    at ``evaluation_time`` or, for market rate products, the rate itself.
    """

    @abstractmethod
    def get_value(self, evaluation_time: float, model: LMMSimulationEngine) -> RandomVariable:
        """Path-wise value (or rate) observed at ``evaluation_time``."""

    def get_price(self, model: LMMSimulationEngine) -> float:
        """Monte Carlo average of the value at time 0."""
        return self.get_value(0.0, model).average()
