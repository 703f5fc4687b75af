"""
Monte Carlo simulation of the LIBOR market model.

The engine evolves the forward rate vector on the process discretization
lazily: a time step is simulated the first time any state at or after it is
requested, and is kept for the lifetime of the engine.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import numpy as np

from lmmxva.conventions.types import Measure, StateSpace, TimeSteppingScheme
from lmmxva.curves import DiscountCurve, ForwardCurve
from lmmxva.exceptions import ComputationError, ConfigurationError, DomainError
from lmmxva.time import TimeGrid

from .brownian import BrownianMotion
from .config import SimulationConfig
from .covariance import CovarianceModel
from .lmm import LIBORMarketModel
from .random_variable import RandomVariable

logger = logging.getLogger(__name__)


class LMMSimulationEngine:
    """
    Path-wise simulation of forward rates, bonds and numeraire.

    States are (paths, components) arrays of forward rates, one per process
    time index. A finalised state is read-only and shared without locking;
    only extending the cache takes the lock.
    """

    def __init__(self,
                 model: LIBORMarketModel,
                 brownian_motion: BrownianMotion,
                 config: Optional[SimulationConfig] = None):
        """
        Initialize the engine. No simulation is performed here.

        Args:
            model: LIBOR market model
            brownian_motion: Driving increments on the process discretization
            config: Scheme and parallelism settings

        Raises:
            ConfigurationError: If model, covariance model and Brownian
                motion disagree on factors or grids, or the process grid
                does not start at 0
        """
        self.config = config or SimulationConfig()
        covariance_model = model.covariance_model
        process_discretization = brownian_motion.time_discretization

        if brownian_motion.number_of_factors != covariance_model.number_of_factors:
            raise ConfigurationError(
                f"Brownian motion has {brownian_motion.number_of_factors} factors, "
                f"covariance model has {covariance_model.number_of_factors}"
            )
        if covariance_model.time_discretization != process_discretization:
            raise ConfigurationError(
                "Covariance model time discretization differs from the process discretization"
            )
        if abs(process_discretization.first_time) > TimeGrid.TOLERANCE:
            raise ConfigurationError(
                f"Process discretization must start at 0, got {process_discretization.first_time}"
            )
        covariance_model.validate()

        self.model = model
        self.brownian_motion = brownian_motion

        initial = np.broadcast_to(
            model.initial_libors, (brownian_motion.number_of_paths, model.number_of_components)
        )
        self._libors: List[np.ndarray] = [initial]
        self._lock = threading.Lock()

        logger.info(
            "LMM simulation: %s paths, %s factors, %s time steps, %s periods, scheme %s",
            self.number_of_paths,
            self.number_of_factors,
            process_discretization.number_of_time_steps,
            model.number_of_components,
            self.config.scheme.value,
        )

    @classmethod
    def from_curves(cls,
                    libor_period_discretization: TimeGrid,
                    process_discretization: TimeGrid,
                    forward_curve: ForwardCurve,
                    discount_curve: DiscountCurve,
                    covariance_model: CovarianceModel,
                    number_of_factors: int,
                    number_of_paths: int,
                    seed: int,
                    config: Optional[SimulationConfig] = None,
                    measure: Measure = Measure.SPOT,
                    state_space: StateSpace = StateSpace.LOGNORMAL) -> LMMSimulationEngine:
        """
        Build model, Brownian motion and engine in one go.

        Args:
            libor_period_discretization: Period tenor of the forward rates
            process_discretization: Simulation times, starting at 0
            forward_curve: Initial forwards
            discount_curve: Initial discount curve
            covariance_model: Factor loadings on the process discretization
            number_of_factors: Number of Brownian factors
            number_of_paths: Number of paths
            seed: Random seed
            config: Scheme and parallelism settings
            measure: Pricing measure
            state_space: Lognormal or normal state variable

        Returns:
            Engine ready for lazy simulation

        Raises:
            ConfigurationError: On any inconsistent input
        """
        config = config or SimulationConfig()
        if number_of_factors != covariance_model.number_of_factors:
            raise ConfigurationError(
                f"Requested {number_of_factors} factors, covariance model has "
                f"{covariance_model.number_of_factors}"
            )
        if covariance_model.libor_period_discretization != libor_period_discretization:
            raise ConfigurationError(
                "Covariance model period discretization differs from the LIBOR period discretization"
            )

        model = LIBORMarketModel(
            libor_period_discretization,
            forward_curve,
            discount_curve,
            covariance_model,
            measure=measure,
            state_space=state_space,
        )
        # Random blocks stay fixed; config.block_size only splits the stepping work
        brownian_motion = BrownianMotion(
            process_discretization,
            number_of_factors,
            number_of_paths,
            seed,
            block_size=BrownianMotion.DEFAULT_BLOCK_SIZE,
        )
        return cls(model, brownian_motion, config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def time_discretization(self) -> TimeGrid:
        return self.brownian_motion.time_discretization

    @property
    def libor_period_discretization(self) -> TimeGrid:
        return self.model.libor_period_discretization

    @property
    def number_of_paths(self) -> int:
        return self.brownian_motion.number_of_paths

    @property
    def number_of_factors(self) -> int:
        return self.brownian_motion.number_of_factors

    @property
    def number_of_components(self) -> int:
        return self.model.number_of_components

    @property
    def number_of_simulated_times(self) -> int:
        """Number of process times whose state is already in the cache."""
        return len(self._libors)

    def get_time(self, time_index: int) -> float:
        return self.time_discretization.time(time_index)

    def get_time_index(self, time: float) -> int:
        """
        Index of the last process time not after ``time``.

        Raises:
            DomainError: If ``time`` is before 0 or after the last process time
        """
        last_time = self.time_discretization.last_time
        if time > last_time + TimeGrid.TOLERANCE:
            raise DomainError(f"Time {time} is after the simulation horizon {last_time}")
        time_index = self.time_discretization.time_index_nearest_less_or_equal(time)
        if time_index < 0:
            raise DomainError(f"Time {time} is before the start of the simulation")
        return time_index

    # ------------------------------------------------------------------
    # Simulated state
    # ------------------------------------------------------------------
    def get_libors(self, time_index: int) -> np.ndarray:
        """
        Forward rates at a process time index, shape (paths, components).

        Simulates all missing steps up to ``time_index`` on first access.

        Raises:
            IndexError: If the index is outside the process discretization
            ComputationError: If the simulation breaks down
        """
        if not 0 <= time_index < self.time_discretization.number_of_times:
            raise IndexError(f"Time index {time_index} out of range")
        if time_index >= len(self._libors):
            self._simulate_until(time_index)
        return self._libors[time_index]

    def get_libor(self, time_index: int, component: int) -> RandomVariable:
        """Forward rate of one component at a process time index."""
        libors = self.get_libors(time_index)
        return RandomVariable(libors[:, component], self.get_time(time_index))

    def get_forward_rate(self, time: float, start: float, end: float) -> RandomVariable:
        """
        Simple forward rate for [start, end] observed at ``time``.

        A rate whose period has started is taken as fixed at ``start``.
        """
        observation = min(time, start)
        libors = self.get_libors(self.get_time_index(observation))
        rate = self.model.get_forward_rate(libors, start, end)
        return RandomVariable(rate, observation)

    def get_bond(self, time: float, maturity: float) -> RandomVariable:
        """Zero bond P(maturity; time), consistent with the discount curve."""
        if maturity < time - TimeGrid.TOLERANCE:
            raise DomainError(f"Bond maturity {maturity} is before the observation time {time}")
        libors = self.get_libors(self.get_time_index(time))
        return RandomVariable(self.model.get_adjusted_bond(libors, time, maturity), time)

    def get_numeraire(self, time: float) -> RandomVariable:
        """Numeraire at ``time``, consistent with the discount curve."""
        time_index = self.get_time_index(time)
        numeraire = self.model.get_adjusted_numeraire(self.get_libors(time_index), time)
        if not np.all(np.isfinite(numeraire)):
            path_index = int(np.flatnonzero(~np.isfinite(numeraire))[0])
            raise ComputationError(
                f"Non-finite numeraire at time {time}",
                time_index=time_index,
                path_index=path_index,
            )
        return RandomVariable(numeraire, time)

    def get_random_variable_for_constant(self, value: float) -> RandomVariable:
        return RandomVariable.constant(value)

    # ------------------------------------------------------------------
    # Time stepping
    # ------------------------------------------------------------------
    def _simulate_until(self, time_index: int) -> None:
        with self._lock:
            first = len(self._libors)
            if first > time_index:
                return

            blocks = self._path_blocks()
            executor = None
            if self.config.max_workers > 1 and len(blocks) > 1:
                executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
            try:
                for step in range(first - 1, time_index):
                    self._libors.append(self._step(step, blocks, executor))
            finally:
                if executor is not None:
                    executor.shutdown()

            logger.debug("Simulated time indices %s to %s", first, time_index)

    def _path_blocks(self) -> List[slice]:
        size = self.config.block_size
        return [
            slice(start, min(start + size, self.number_of_paths))
            for start in range(0, self.number_of_paths, size)
        ]

    def _step(self, time_index: int, blocks: List[slice], executor) -> np.ndarray:
        previous = self._libors[time_index]
        libors = np.empty(previous.shape)

        def run(paths: slice) -> None:
            libors[paths] = self._step_block(time_index, previous[paths], paths)

        if executor is None:
            for paths in blocks:
                run(paths)
        else:
            # Consuming the iterator re-raises worker exceptions
            list(executor.map(run, blocks))

        libors.setflags(write=False)
        return libors

    def _step_block(self, time_index: int, libors: np.ndarray, paths: slice) -> np.ndarray:
        model = self.model
        dt = self.time_discretization.time_step(time_index)
        time = self.get_time(time_index)
        alive = self.libor_period_discretization.times[:-1] > time + TimeGrid.TOLERANCE

        increments = self.brownian_motion.get_increments(time_index, paths)
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            state = model.to_state(libors)
            drift = model.get_drift(time_index, libors)
            diffusion = model.get_diffusion(time_index, increments)
            next_state = state + drift * dt + diffusion

            if self.config.scheme == TimeSteppingScheme.PREDICTOR_CORRECTOR:
                predicted = np.where(alive, model.from_state(next_state), libors)
                self._check_libors(predicted, time_index + 1, paths)
                corrected_drift = model.get_drift(time_index, predicted)
                next_state = state + 0.5 * (drift + corrected_drift) * dt + diffusion

            # Fixed rates keep their exact value
            next_libors = np.where(alive, model.from_state(next_state), libors)

        self._check_libors(next_libors, time_index + 1, paths)
        return next_libors

    def _check_libors(self, libors: np.ndarray, time_index: int, paths: slice) -> None:
        period_lengths = self.model.period_lengths
        with np.errstate(invalid="ignore"):
            failed = ~np.isfinite(libors) | (1.0 + period_lengths * libors <= 0.0)
        if np.any(failed):
            path_index = paths.start + int(np.flatnonzero(failed.any(axis=1))[0])
            raise ComputationError(
                "Forward rate is non-finite or implies a non-positive bond",
                time_index=time_index,
                path_index=path_index,
            )

    def __repr__(self) -> str:
        return (f"LMMSimulationEngine(paths={self.number_of_paths}, "
                f"factors={self.number_of_factors}, "
                f"steps={self.time_discretization.number_of_time_steps}, "
                f"periods={self.number_of_components})")
