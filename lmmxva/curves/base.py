"""
Base curve classes and protocols for the initial term structure.
"""

from abc import ABC
from typing import Protocol, Sequence, runtime_checkable

from lmmxva.exceptions import ConfigurationError


@runtime_checkable
class Curve(Protocol):
    """Protocol defining the interface shared by all curves."""

    name: str

    def get_pillar_times(self) -> Sequence[float]:
        """Times of the curve's pillar points."""
        ...


class BaseCurve(ABC):
    """Base implementation for pillar-based curves."""

    def __init__(self, name: str, pillar_times: Sequence[float], values: Sequence[float]):
        """
        Initialize base curve.

        Args:
            name: Curve label for identification (may be empty)
            pillar_times: Pillar times in years
            values: Curve values at the pillars
        """
        if len(pillar_times) != len(values):
            raise ConfigurationError(
                f"Curve '{name}': pillar times ({len(pillar_times)}) and values "
                f"({len(values)}) must have same length"
            )
        if len(pillar_times) == 0:
            raise ConfigurationError(f"Curve '{name}': need at least 1 pillar point")

        self.name = name
        self.pillar_times = [float(t) for t in pillar_times]
        self.values = [float(v) for v in values]

    def get_pillar_times(self) -> Sequence[float]:
        return list(self.pillar_times)

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
