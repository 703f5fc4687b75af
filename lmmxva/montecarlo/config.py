"""Configuration of the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass

from lmmxva.conventions.types import TimeSteppingScheme
from lmmxva.exceptions import ConfigurationError


@dataclass
class SimulationConfig:
    """Configuration knobs for the LMM simulation engine."""

    scheme: TimeSteppingScheme = TimeSteppingScheme.EULER
    # Path blocks are stepped on a thread pool when this exceeds 1. Results
    # do not depend on the value.
    max_workers: int = 1
    # Paths per unit of stepping work. Results do not depend on the value.
    block_size: int = 1024

    def __post_init__(self):
        if not isinstance(self.scheme, TimeSteppingScheme):
            raise ConfigurationError(f"Unsupported time stepping scheme: {self.scheme}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be positive: {self.max_workers}")
        if self.block_size < 1:
            raise ConfigurationError(f"block_size must be positive: {self.block_size}")
