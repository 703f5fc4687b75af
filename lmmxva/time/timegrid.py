"""
Time discretizations used as product tenors and simulation grids.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Optional, Sequence

import numpy as np

from lmmxva.conventions.types import ShortPeriodLocation
from lmmxva.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class TimeGrid:
    """Strictly increasing, immutable sequence of times (in years).

    The same type serves as a product's fixing/payment schedule and as the
    discretization of a simulation.
    """

    # Points closer than this are considered identical
    TOLERANCE = 1e-10

    def __init__(self, times: Sequence[float]):
        """
        Initialize a time grid from explicit points.

        Args:
            times: Strictly increasing, finite times

        Raises:
            ConfigurationError: If the points are empty, non-finite or not
                strictly increasing
        """
        points = np.array(times, dtype=float).ravel()

        if points.size == 0:
            raise ConfigurationError("Time grid needs at least one point")
        if not np.all(np.isfinite(points)):
            raise ConfigurationError(f"Time grid points must be finite: {points}")
        if np.any(np.diff(points) <= 0.0):
            raise ConfigurationError(
                f"Time grid points must be strictly increasing: {points}"
            )

        points.setflags(write=False)
        self._times = points

    @classmethod
    def from_period_length(
        cls,
        start: float,
        end: float,
        period_length: float,
        short_period_location: ShortPeriodLocation = ShortPeriodLocation.SHORT_PERIOD_AT_END,
    ) -> TimeGrid:
        """
        Generate equal periods between start and end with at most one stub.

        Points are computed as start + k * period_length (or end - k *
        period_length for a stub at the start) so no rounding error builds up.

        Args:
            start: First time
            end: Last time
            period_length: Length of the regular periods
            short_period_location: Whether the stub goes first or last

        Returns:
            New time grid

        Raises:
            ConfigurationError: If end <= start or period_length <= 0
        """
        if not (math.isfinite(start) and math.isfinite(end) and math.isfinite(period_length)):
            raise ConfigurationError("Start, end and period length must be finite")
        if end <= start:
            raise ConfigurationError(f"End {end} must be after start {start}")
        if period_length <= 0.0:
            raise ConfigurationError(f"Period length must be positive: {period_length}")

        span = end - start
        number_of_periods = int(math.floor(span / period_length + 1e-9))
        remainder = span - number_of_periods * period_length
        # Stubs shorter than the floor guard above are rounding noise
        absorbed = max(1e-9 * period_length, cls.TOLERANCE * max(1.0, abs(end)))
        if number_of_periods > 0 and remainder <= absorbed:
            remainder = 0.0

        if short_period_location == ShortPeriodLocation.SHORT_PERIOD_AT_END:
            points = [start + k * period_length for k in range(number_of_periods + 1)]
            if remainder > 0.0:
                points.append(end)
            else:
                points[-1] = end
        elif short_period_location == ShortPeriodLocation.SHORT_PERIOD_AT_START:
            points = [end - k * period_length for k in range(number_of_periods + 1)]
            points.reverse()
            if remainder > 0.0:
                points.insert(0, start)
            else:
                points[0] = start
        else:
            raise ConfigurationError(
                f"Unsupported short period location: {short_period_location}"
            )

        if remainder > 0.0:
            logger.debug(
                "Stub period of length %s placed %s", remainder, short_period_location.value
            )

        return cls(points)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def times(self) -> np.ndarray:
        """Copy of the grid points."""
        return self._times.copy()

    @property
    def number_of_times(self) -> int:
        return int(self._times.size)

    @property
    def number_of_time_steps(self) -> int:
        return int(self._times.size) - 1

    @property
    def first_time(self) -> float:
        return float(self._times[0])

    @property
    def last_time(self) -> float:
        return float(self._times[-1])

    def time(self, index: int) -> float:
        """Time of the grid point with the given index."""
        return float(self._times[index])

    def time_step(self, index: int) -> float:
        """Length of the period starting at the given index."""
        if not 0 <= index < self.number_of_time_steps:
            raise IndexError(f"Time step index {index} out of range")
        return float(self._times[index + 1] - self._times[index])

    def time_steps(self) -> np.ndarray:
        return np.diff(self._times)

    def time_index(self, time: float) -> Optional[int]:
        """Index of a grid point equal to time (within tolerance), else None."""
        index = int(np.searchsorted(self._times, time - self.TOLERANCE, side="left"))
        if index < self._times.size and abs(self._times[index] - time) <= self.TOLERANCE:
            return index
        return None

    def time_index_nearest_less_or_equal(self, time: float) -> int:
        """Index of the last grid point not after time (-1 if none)."""
        return int(np.searchsorted(self._times, time + self.TOLERANCE, side="right")) - 1

    def time_index_nearest_greater_or_equal(self, time: float) -> int:
        """Index of the first grid point not before time (len if none)."""
        return int(np.searchsorted(self._times, time - self.TOLERANCE, side="left"))

    # ------------------------------------------------------------------
    # Derived grids
    # ------------------------------------------------------------------
    def union(self, other: TimeGrid) -> TimeGrid:
        """Sorted, deduplicated merge of both point sets."""
        merged = np.sort(np.concatenate([self._times, other._times]))
        keep = np.concatenate([[True], np.diff(merged) > self.TOLERANCE])
        return TimeGrid(merged[keep])

    def shifted(self, offset: float) -> TimeGrid:
        return TimeGrid(self._times + offset)

    def subset(self, start: float, end: float) -> TimeGrid:
        """Grid points within [start, end]."""
        mask = (self._times >= start - self.TOLERANCE) & (self._times <= end + self.TOLERANCE)
        return TimeGrid(self._times[mask])

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return int(self._times.size)

    def __iter__(self) -> Iterator[float]:
        return iter(float(t) for t in self._times)

    def __getitem__(self, index: int) -> float:
        return float(self._times[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return self._times.size == other._times.size and bool(
            np.allclose(self._times, other._times, rtol=0.0, atol=self.TOLERANCE)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"TimeGrid({self._times.tolist()})"
