"""
Base class of the curve interpolation rules.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from lmmxva.exceptions import ConfigurationError


class Interpolator(ABC):
    """Maps a time to a value given values at strictly increasing pillars."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Args:
            pillars: Strictly increasing, finite times in years
            values: Finite values at the pillars

        Raises:
            ConfigurationError: On empty or mismatching input, non-finite
                entries or pillars out of order
        """
        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)

        if self.pillars.shape != self.values.shape or self.pillars.ndim != 1:
            raise ConfigurationError(
                f"Pillars {self.pillars.shape} and values {self.values.shape} must be "
                f"one-dimensional with equal length"
            )
        if self.pillars.size == 0:
            raise ConfigurationError("Interpolation needs at least one pillar")
        if not (np.all(np.isfinite(self.pillars)) and np.all(np.isfinite(self.values))):
            raise ConfigurationError("Pillars and values must be finite")
        if np.any(np.diff(self.pillars) <= 0.0):
            raise ConfigurationError(
                f"Pillars must be strictly increasing: {self.pillars.tolist()}"
            )

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Value at time t."""

    def interpolate_many(self, times: Sequence[float]) -> List[float]:
        return [self.interpolate(t) for t in times]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pillars={self.pillars.tolist()})"
