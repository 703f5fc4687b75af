"""Seeded Brownian increments for the driving factors."""

import logging
import threading
from typing import Optional

import numpy as np

from lmmxva.exceptions import ConfigurationError
from lmmxva.time import TimeGrid

logger = logging.getLogger(__name__)


class BrownianMotion:
    """Independent Brownian increments for a number of factors and paths.

    Paths are partitioned into blocks of ``block_size``. Each block draws
    from its own generator spawned from ``SeedSequence(seed)``, so the
    increments of a path depend only on the seed and the path index, not on
    how the simulation is scheduled.
    """

    DEFAULT_BLOCK_SIZE = 1024

    def __init__(
        self,
        time_discretization: TimeGrid,
        number_of_factors: int,
        number_of_paths: int,
        seed: int,
        block_size: int = DEFAULT_BLOCK_SIZE,
    ):
        """
        Args:
            time_discretization: Simulation times; one increment per step
            number_of_factors: Number of independent factors
            number_of_paths: Number of simulated paths
            seed: Seed of the root SeedSequence
            block_size: Number of paths sharing one spawned generator
        """
        if number_of_factors < 1:
            raise ConfigurationError(f"Number of factors must be positive: {number_of_factors}")
        if number_of_paths < 1:
            raise ConfigurationError(f"Number of paths must be positive: {number_of_paths}")
        if block_size < 1:
            raise ConfigurationError(f"Block size must be positive: {block_size}")
        if time_discretization.number_of_time_steps < 1:
            raise ConfigurationError("Time discretization needs at least one time step")

        self.time_discretization = time_discretization
        self.number_of_factors = int(number_of_factors)
        self.number_of_paths = int(number_of_paths)
        self.seed = seed
        self.block_size = int(block_size)

        self._increments: Optional[np.ndarray] = None
        self._lock = threading.Lock()

    @property
    def number_of_blocks(self) -> int:
        return -(-self.number_of_paths // self.block_size)

    def block_slices(self):
        """Path slices of the random number blocks."""
        return [
            slice(b * self.block_size, min((b + 1) * self.block_size, self.number_of_paths))
            for b in range(self.number_of_blocks)
        ]

    def get_increment(self, time_index: int) -> np.ndarray:
        """Increments over step ``time_index``, shape (paths, factors)."""
        if not 0 <= time_index < self.time_discretization.number_of_time_steps:
            raise IndexError(f"Time step index {time_index} out of range")
        return self._get_increments()[time_index]

    def get_increments(self, time_index: int, paths: slice) -> np.ndarray:
        """Increments over step ``time_index`` for a slice of paths."""
        return self.get_increment(time_index)[paths]

    def _get_increments(self) -> np.ndarray:
        if self._increments is None:
            with self._lock:
                if self._increments is None:
                    self._increments = self._generate()
        return self._increments

    def _generate(self) -> np.ndarray:
        number_of_steps = self.time_discretization.number_of_time_steps
        sqrt_dt = np.sqrt(self.time_discretization.time_steps())

        increments = np.empty((number_of_steps, self.number_of_paths, self.number_of_factors))
        children = np.random.SeedSequence(self.seed).spawn(self.number_of_blocks)
        for child, paths in zip(children, self.block_slices()):
            rng = np.random.default_rng(child)
            normals = rng.standard_normal(
                (number_of_steps, paths.stop - paths.start, self.number_of_factors)
            )
            increments[:, paths, :] = normals * sqrt_dt[:, None, None]

        increments.setflags(write=False)
        logger.debug(
            "Generated Brownian increments: %s steps, %s paths, %s factors, seed %s",
            number_of_steps,
            self.number_of_paths,
            self.number_of_factors,
            self.seed,
        )
        return increments

    def __repr__(self) -> str:
        return (
            f"BrownianMotion(steps={self.time_discretization.number_of_time_steps}, "
            f"factors={self.number_of_factors}, paths={self.number_of_paths}, seed={self.seed})"
        )
