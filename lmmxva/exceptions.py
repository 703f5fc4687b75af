"""Exceptions raised by the simulation and valuation stack."""

from typing import Optional


class ConfigurationError(ValueError):
    """Raised when inputs are inconsistent at construction time.

    Examples are mismatching factor counts, empty grids or non-increasing
    curve pillars. Never raised during evaluation.
    """

    pass


class ComputationError(ArithmeticError):
    """Raised when the simulation or a product hits a numerical breakdown.

    Attributes:
        time_index: Simulation time index at which the failure was detected
        path_index: First failing path, if known
    """

    def __init__(
        self,
        message: str,
        time_index: Optional[int] = None,
        path_index: Optional[int] = None,
    ):
        details = []
        if time_index is not None:
            details.append(f"time index {time_index}")
        if path_index is not None:
            details.append(f"path {path_index}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
        self.time_index = time_index
        self.path_index = path_index


class DomainError(ValueError):
    """Raised when a product is evaluated where its value is undefined."""

    pass
