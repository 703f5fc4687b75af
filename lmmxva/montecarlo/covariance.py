"""Covariance models supplying factor loadings of the forward rates.

A covariance model maps (time index, component index) to a vector of factor
loadings, one entry per driving Brownian factor. In the lognormal state
space the loadings are the volatilities of log L_i.
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
import scipy.linalg as la

from lmmxva.exceptions import ComputationError, ConfigurationError
from lmmxva.time import TimeGrid

logger = logging.getLogger(__name__)


class CovarianceModel(ABC):
    """Base class for LIBOR covariance models."""

    def __init__(
        self,
        time_discretization: TimeGrid,
        libor_period_discretization: TimeGrid,
        number_of_factors: int,
    ):
        """
        Args:
            time_discretization: Simulation times the loadings are evaluated at
            libor_period_discretization: Period tenor T_0 < ... < T_n
            number_of_factors: Number of driving factors
        """
        if number_of_factors < 1:
            raise ConfigurationError(f"Number of factors must be positive: {number_of_factors}")
        if libor_period_discretization.number_of_time_steps < 1:
            raise ConfigurationError("LIBOR period discretization needs at least one period")

        self.time_discretization = time_discretization
        self.libor_period_discretization = libor_period_discretization
        self.number_of_factors = int(number_of_factors)
        self._factor_loadings = None

    @property
    def number_of_components(self) -> int:
        return self.libor_period_discretization.number_of_time_steps

    @abstractmethod
    def _build_factor_loadings(self) -> np.ndarray:
        """Loadings of shape (times, components, factors) before masking."""

    def _loadings(self) -> np.ndarray:
        if self._factor_loadings is None:
            loadings = np.asarray(self._build_factor_loadings(), dtype=float)
            expected = (
                self.time_discretization.number_of_times,
                self.number_of_components,
                self.number_of_factors,
            )
            if loadings.shape != expected:
                raise ConfigurationError(
                    f"Factor loadings have shape {loadings.shape}, expected {expected}"
                )
            if not np.all(np.isfinite(loadings)):
                raise ComputationError("Factor loadings contain non-finite values")

            # A rate stops evolving once its period has started
            times = self.time_discretization.times
            period_starts = self.libor_period_discretization.times[:-1]
            alive = period_starts[None, :] > times[:, None] + TimeGrid.TOLERANCE
            loadings = loadings * alive[:, :, None]
            loadings.setflags(write=False)
            self._factor_loadings = loadings
        return self._factor_loadings

    def validate(self) -> None:
        """Build and check the loadings, raising on a malformed model."""
        self._loadings()

    def get_factor_loadings(self, time_index: int) -> np.ndarray:
        """All loadings at a time index, shape (components, factors)."""
        return self._loadings()[time_index]

    def get_factor_loading(self, time_index: int, component_index: int) -> np.ndarray:
        """Loading vector of one component, length number_of_factors."""
        return self._loadings()[time_index, component_index]

    def get_covariance(self, time_index: int, component1: int, component2: int) -> float:
        """Instantaneous covariance of two components."""
        loadings = self._loadings()[time_index]
        return float(np.dot(loadings[component1], loadings[component2]))


def factor_reduced_correlation(correlation: np.ndarray, number_of_factors: int) -> np.ndarray:
    """
    Reduce a correlation matrix to its leading factors.

    Keeps the eigenvectors of the largest eigenvalues, scales them by the
    square roots of the eigenvalues and renormalises every row to unit
    length so the reduced matrix still has a unit diagonal.

    Returns:
        Factor matrix of shape (components, number_of_factors)
    """
    if number_of_factors > correlation.shape[0]:
        raise ConfigurationError(
            f"Number of factors {number_of_factors} exceeds number of components "
            f"{correlation.shape[0]}"
        )
    if not np.all(np.isfinite(correlation)):
        raise ComputationError("Correlation matrix contains non-finite values")
    try:
        eigenvalues, eigenvectors = la.eigh(correlation)
    except la.LinAlgError as exc:
        raise ComputationError(f"Correlation factor decomposition failed: {exc}") from exc

    # Sort in descending order (largest eigenvalues first)
    idx = np.argsort(eigenvalues)[::-1][:number_of_factors]
    # Filter out any tiny negative eigenvalues caused by floating point limits
    eigenvalues = np.maximum(eigenvalues[idx], 0.0)
    factors = eigenvectors[:, idx] * np.sqrt(eigenvalues)[None, :]

    norms = np.sqrt(np.sum(factors ** 2, axis=1, keepdims=True))
    if np.any(norms <= 0.0):
        raise ComputationError("Correlation matrix is singular in the retained factors")
    return factors / norms


class ExponentialForm5ParamCovarianceModel(CovarianceModel):
    """Exponential volatility with exponentially decaying correlation.

    Volatility of L_i at time t, with tau = T_i - t:

        sigma_i(t) = (a + b * tau) * exp(-c * tau) + d

    Correlation between L_i and L_j:

        rho_ij = exp(-beta * |T_i - T_j|)

    reduced to ``number_of_factors`` factors.
    """

    def __init__(
        self,
        time_discretization: TimeGrid,
        libor_period_discretization: TimeGrid,
        number_of_factors: int,
        parameters: Sequence[float],
    ):
        """
        Args:
            parameters: (a, b, c, d, beta)
        """
        super().__init__(time_discretization, libor_period_discretization, number_of_factors)

        parameters = [float(p) for p in parameters]
        if len(parameters) != 5:
            raise ConfigurationError(
                f"Exponential form needs 5 parameters (a, b, c, d, beta), got {len(parameters)}"
            )
        self.a, self.b, self.c, self.d, self.beta = parameters

    @property
    def parameters(self) -> tuple:
        return (self.a, self.b, self.c, self.d, self.beta)

    def _build_factor_loadings(self) -> np.ndarray:
        times = self.time_discretization.times
        period_starts = self.libor_period_discretization.times[:-1]

        tau = period_starts[None, :] - times[:, None]
        volatility = (self.a + self.b * tau) * np.exp(-self.c * tau) + self.d

        distance = np.abs(period_starts[:, None] - period_starts[None, :])
        correlation = np.exp(-self.beta * distance)
        factors = factor_reduced_correlation(correlation, self.number_of_factors)

        logger.debug(
            "Exponential covariance: parameters %s, %s components, %s factors",
            self.parameters,
            self.number_of_components,
            self.number_of_factors,
        )
        return volatility[:, :, None] * factors[None, :, :]


class FactorLoadingCovarianceModel(CovarianceModel):
    """Covariance model from explicitly given loadings.

    ``loadings`` is either (components, factors), constant in time, or
    (times, components, factors).
    """

    def __init__(
        self,
        time_discretization: TimeGrid,
        libor_period_discretization: TimeGrid,
        loadings,
    ):
        loadings = np.asarray(loadings, dtype=float)
        if loadings.ndim not in (2, 3):
            raise ConfigurationError(
                f"Loadings must be (components, factors) or (times, components, factors), "
                f"got shape {loadings.shape}"
            )
        super().__init__(time_discretization, libor_period_discretization, loadings.shape[-1])
        self._given_loadings = loadings

    def _build_factor_loadings(self) -> np.ndarray:
        if self._given_loadings.ndim == 2:
            return np.broadcast_to(
                self._given_loadings,
                (self.time_discretization.number_of_times,) + self._given_loadings.shape,
            )
        return self._given_loadings
