"""Path-indexed random variables returned by the simulation and products."""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

Operand = Union["RandomVariable", float, int, np.ndarray]


class RandomVariable:
    """One scalar per simulated path, observed at a given filtration time.

    A deterministic random variable stores a single value that applies to
    every path.
    """

    __slots__ = ("_values", "filtration_time")

    def __init__(self, values, filtration_time: float = 0.0):
        array = np.asarray(values, dtype=float)
        if array.ndim > 1:
            raise ValueError(f"Random variable values must be scalar or 1-D, got shape {array.shape}")
        array = array.copy()
        array.setflags(write=False)
        self._values = array
        self.filtration_time = float(filtration_time)

    @classmethod
    def constant(cls, value: float, filtration_time: float = 0.0) -> RandomVariable:
        return cls(float(value), filtration_time)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    @property
    def is_deterministic(self) -> bool:
        return self._values.ndim == 0

    @property
    def size(self) -> int:
        return 1 if self.is_deterministic else int(self._values.size)

    def average(self) -> float:
        return float(np.mean(self._values))

    def variance(self) -> float:
        if self.is_deterministic:
            return 0.0
        return float(np.var(self._values))

    def standard_deviation(self) -> float:
        return float(np.sqrt(self.variance()))

    def standard_error(self) -> float:
        return self.standard_deviation() / np.sqrt(self.size)

    def min(self) -> float:
        return float(np.min(self._values))

    def max(self) -> float:
        return float(np.max(self._values))

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self._values)))

    # ------------------------------------------------------------------
    # Path access
    # ------------------------------------------------------------------
    def get(self, path_index: int) -> float:
        """Value on a given path."""
        if self.is_deterministic:
            return float(self._values)
        return float(self._values[path_index])

    def __getitem__(self, path_index: int) -> float:
        return self.get(path_index)

    def __len__(self) -> int:
        return self.size

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the realizations (0-d for deterministic)."""
        return self._values

    def to_numpy(self, number_of_paths: Optional[int] = None) -> np.ndarray:
        """Realizations as a writable array, broadcast if deterministic."""
        if self.is_deterministic and number_of_paths is not None:
            return np.full(number_of_paths, float(self._values))
        return np.array(self._values, dtype=float, ndmin=1)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _combine(self, other: Operand, operation) -> RandomVariable:
        if isinstance(other, RandomVariable):
            time = max(self.filtration_time, other.filtration_time)
            other = other._values
        else:
            time = self.filtration_time
        return RandomVariable(operation(self._values, other), time)

    def __add__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.add)

    def __radd__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.add)

    def __sub__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.subtract)

    def __rsub__(self, other: Operand) -> RandomVariable:
        return self._combine(other, lambda a, b: np.subtract(b, a))

    def __mul__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.multiply)

    def __rmul__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.multiply)

    def __truediv__(self, other: Operand) -> RandomVariable:
        return self._combine(other, np.divide)

    def __rtruediv__(self, other: Operand) -> RandomVariable:
        return self._combine(other, lambda a, b: np.divide(b, a))

    def __neg__(self) -> RandomVariable:
        return RandomVariable(-self._values, self.filtration_time)

    def __repr__(self) -> str:
        if self.is_deterministic:
            return f"RandomVariable({float(self._values)}, t={self.filtration_time})"
        return (
            f"RandomVariable(paths={self.size}, average={self.average():.8f}, "
            f"t={self.filtration_time})"
        )
