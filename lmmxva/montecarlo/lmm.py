"""
LIBOR market model: state dynamics, bonds and numeraire.

The model holds no simulated state. It maps a matrix of forward rates
(paths, components) observed at a time to drifts, bonds and numeraires, and
is driven by ``LMMSimulationEngine``.
"""

import logging

import numpy as np

from lmmxva.conventions.types import Measure, StateSpace
from lmmxva.curves import DiscountCurve, ForwardCurve
from lmmxva.exceptions import ComputationError, ConfigurationError, DomainError
from lmmxva.time import TimeGrid

from .covariance import CovarianceModel

logger = logging.getLogger(__name__)


def _apply_rowwise(rows: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    rows @ matrix.T, summed one column at a time.

    Each path's result is the same whatever number of paths is passed in,
    so the simulated state does not depend on how paths are split for
    stepping.
    """
    result = np.zeros((rows.shape[0], matrix.shape[0]))
    for k in range(matrix.shape[1]):
        result += rows[:, k, None] * matrix[None, :, k]
    return result


class LIBORMarketModel:
    """
    Forward rate dynamics on a period tenor T_0 = 0 < T_1 < ... < T_n.

    Component i is the simple forward L_i for [T_i, T_{i+1}]. The state
    variable is log L_i (lognormal) or L_i (normal). Under the spot measure
    the numeraire is the discretely rolled bank account, under the terminal
    measure the bond maturing at T_n.

    Bonds and the numeraire are corrected by the deterministic factor
    a(T) = P_disc(T) / P_model(T; 0) so that the model reprices the initial
    discount curve exactly.
    """

    def __init__(self,
                 libor_period_discretization: TimeGrid,
                 forward_curve: ForwardCurve,
                 discount_curve: DiscountCurve,
                 covariance_model: CovarianceModel,
                 measure: Measure = Measure.SPOT,
                 state_space: StateSpace = StateSpace.LOGNORMAL):
        """
        Initialize the model.

        Args:
            libor_period_discretization: Period tenor starting at 0
            forward_curve: Initial forwards, L_i(0) = forward_curve.get_forward(T_i)
            discount_curve: Curve used for the numeraire adjustment
            covariance_model: Factor loadings of the components
            measure: Pricing measure
            state_space: Lognormal (log L) or normal (L) state variable

        Raises:
            ConfigurationError: If the tenor does not start at 0, the
                covariance model uses a different tenor, or an initial
                forward is not usable in the chosen state space
        """
        if abs(libor_period_discretization.first_time) > TimeGrid.TOLERANCE:
            raise ConfigurationError(
                f"LIBOR period discretization must start at 0, got "
                f"{libor_period_discretization.first_time}"
            )
        if libor_period_discretization.number_of_time_steps < 1:
            raise ConfigurationError("LIBOR period discretization needs at least one period")
        if covariance_model.libor_period_discretization != libor_period_discretization:
            raise ConfigurationError(
                "Covariance model and LIBOR market model use different period discretizations"
            )

        self.libor_period_discretization = libor_period_discretization
        self.forward_curve = forward_curve
        self.discount_curve = discount_curve
        self.covariance_model = covariance_model
        self.measure = measure
        self.state_space = state_space

        self._tenor = libor_period_discretization.times
        self._period_lengths = libor_period_discretization.time_steps()

        initial = np.array([forward_curve.get_forward(t) for t in self._tenor[:-1]])
        if not np.all(np.isfinite(initial)):
            raise ConfigurationError(f"Initial forwards must be finite: {initial}")
        if state_space == StateSpace.LOGNORMAL and np.any(initial <= 0.0):
            raise ConfigurationError(
                f"Lognormal state space requires positive initial forwards: {initial}"
            )
        if np.any(1.0 + self._period_lengths * initial <= 0.0):
            raise ConfigurationError(f"Initial forwards imply non-positive bonds: {initial}")
        initial.setflags(write=False)
        self._initial_libors = initial

        logger.info(
            "LIBOR market model: %s periods up to %s, measure %s, state space %s",
            self.number_of_components,
            self._tenor[-1],
            measure.value,
            state_space.value,
        )

    # ------------------------------------------------------------------
    # Tenor
    # ------------------------------------------------------------------
    @property
    def number_of_components(self) -> int:
        return int(self._period_lengths.size)

    @property
    def period_lengths(self) -> np.ndarray:
        return self._period_lengths.copy()

    @property
    def initial_libors(self) -> np.ndarray:
        """L_i(0) for every component."""
        return self._initial_libors

    # ------------------------------------------------------------------
    # State space
    # ------------------------------------------------------------------
    def to_state(self, libors: np.ndarray) -> np.ndarray:
        if self.state_space == StateSpace.LOGNORMAL:
            return np.log(libors)
        return np.array(libors, dtype=float)

    def from_state(self, state: np.ndarray) -> np.ndarray:
        if self.state_space == StateSpace.LOGNORMAL:
            return np.exp(state)
        return np.array(state, dtype=float)

    def get_drift(self, time_index: int, libors: np.ndarray) -> np.ndarray:
        """
        Drift of the state variables at a simulation time.

        Under the spot measure the drift of L_i is
        sum_{j <= i} w_j * (f_i . f_j) over the components still alive, under
        the terminal measure -sum_{j > i} w_j * (f_i . f_j). For the lognormal
        state w_j = delta_j L_j / (1 + delta_j L_j) and the Ito term
        -|f_i|^2 / 2 is added, for the normal state w_j = delta_j / (1 +
        delta_j L_j).

        Args:
            time_index: Index into the covariance model's time discretization
            libors: Forward rates, shape (paths, components)

        Returns:
            Drift per path and component, shape (paths, components)
        """
        loadings = self.covariance_model.get_factor_loadings(time_index)
        covariance = loadings @ loadings.T

        one_plus = 1.0 + self._period_lengths * libors
        if self.state_space == StateSpace.LOGNORMAL:
            weights = self._period_lengths * libors / one_plus
        else:
            weights = self._period_lengths / one_plus

        # Loadings of fixed rates are zero, so their covariance rows drop out
        if self.measure == Measure.SPOT:
            drift = _apply_rowwise(weights, np.tril(covariance))
        else:
            drift = -_apply_rowwise(weights, np.triu(covariance, k=1))

        if self.state_space == StateSpace.LOGNORMAL:
            drift = drift - 0.5 * np.diag(covariance)[None, :]
        return drift

    def get_diffusion(self, time_index: int, increments: np.ndarray) -> np.ndarray:
        """Loadings applied to Brownian increments, shape (paths, components)."""
        return _apply_rowwise(increments, self.covariance_model.get_factor_loadings(time_index))

    # ------------------------------------------------------------------
    # Bonds and numeraire
    # ------------------------------------------------------------------
    def get_accrued_bond(self, libors: np.ndarray, maturity: float) -> np.ndarray:
        """
        Discount factor from 0 to ``maturity`` implied by the rates in a state.

        For x in (T_j, T_{j+1}]

            B(x) = prod_{k <= j} (1 + delta_k L_k)^{-1} * (1 + (T_{j+1} - x) L_j)

        with B(x) = 1 for x <= 0 and the last rate extended beyond T_n.

        Args:
            libors: Forward rates, shape (paths, components)
            maturity: Time x

        Returns:
            B(x) per path
        """
        libors = np.atleast_2d(libors)
        if maturity <= 0.0:
            return np.ones(libors.shape[0])

        tenor = self._tenor
        compounded = np.cumprod(1.0 + self._period_lengths * libors, axis=1)
        last = self.number_of_components - 1

        if maturity > tenor[-1]:
            return 1.0 / (compounded[:, last] * (1.0 + (maturity - tenor[-1]) * libors[:, last]))

        j = int(np.searchsorted(tenor, maturity, side="left")) - 1
        j = min(max(j, 0), last)
        remaining = tenor[j + 1] - maturity
        return (1.0 + remaining * libors[:, j]) / compounded[:, j]

    def get_bond(self, libors: np.ndarray, time: float, maturity: float) -> np.ndarray:
        """Unadjusted model bond P(maturity; time) = B(maturity) / B(time)."""
        return self.get_accrued_bond(libors, maturity) / self.get_accrued_bond(libors, time)

    def get_numeraire(self, libors: np.ndarray, time: float) -> np.ndarray:
        """Unadjusted numeraire at ``time``."""
        if self.measure == Measure.SPOT:
            return 1.0 / self.get_accrued_bond(libors, time)
        return self.get_bond(libors, time, float(self._tenor[-1]))

    def get_numeraire_adjustment(self, time: float) -> float:
        """a(t) = P_disc(t) / P_model(t; 0)."""
        if time <= 0.0:
            return 1.0
        model_bond = float(self.get_accrued_bond(self._initial_libors[None, :], time)[0])
        if not (model_bond > 0.0 and np.isfinite(model_bond)):
            raise ComputationError(f"Initial model bond at {time} is not positive: {model_bond}")
        return self.discount_curve.get_discount_factor(time) / model_bond

    def get_adjusted_bond(self, libors: np.ndarray, time: float, maturity: float) -> np.ndarray:
        """Bond consistent with the discount curve: P(T; t) * a(T) / a(t)."""
        adjustment = self.get_numeraire_adjustment(maturity) / self.get_numeraire_adjustment(time)
        return self.get_bond(libors, time, maturity) * adjustment

    def get_adjusted_numeraire(self, libors: np.ndarray, time: float) -> np.ndarray:
        """Numeraire consistent with the discount curve: N(t) / a(t)."""
        return self.get_numeraire(libors, time) / self.get_numeraire_adjustment(time)

    def get_forward_rate(self, libors: np.ndarray, start: float, end: float) -> np.ndarray:
        """Simple forward for [start, end] from the unadjusted model bonds."""
        if end <= start:
            raise DomainError(f"Forward period must be positive: [{start}, {end}]")
        ratio = self.get_accrued_bond(libors, start) / self.get_accrued_bond(libors, end)
        return (ratio - 1.0) / (end - start)

    def __repr__(self) -> str:
        return (f"LIBORMarketModel(periods={self.number_of_components}, "
                f"measure={self.measure.value}, state_space={self.state_space.value})")
