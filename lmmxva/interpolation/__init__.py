"""
Interpolation methods for initial curves.

Forward curves interpolate their rates linearly; discount curves interpolate
log discount factors (log-linear zero rates).
"""

# Base classes
from .base import Interpolator

# Factory and utilities
from .factory import (
    create_interpolator,
    discount_factor_to_zero_rate,
    zero_rate_to_discount_factor,
)

# Linear interpolation methods
from .linear import (
    LinearInterpolator,
    LogLinearZeroInterpolator,
    PiecewiseConstantInterpolator,
)

__all__ = [
    # Base classes
    'Interpolator',

    # Linear interpolation methods
    'LinearInterpolator',
    'LogLinearZeroInterpolator',
    'PiecewiseConstantInterpolator',

    # Factory and utilities
    'create_interpolator',
    'discount_factor_to_zero_rate',
    'zero_rate_to_discount_factor',
]
