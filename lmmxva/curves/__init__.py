"""
Curves package - initial forward and discount curves.

Main APIs:
---------
    - create_forward_curve_from_forwards: Forward curve from fixing times and rates
    - create_discount_curve_from_discount_factors: Discount curve from pillars
    - ForwardCurve.get_forward / DiscountCurve.get_discount_factor: Lookups
"""

from .base import BaseCurve, Curve
from .discount import (
    DiscountCurve,
    create_discount_curve_from_discount_factors,
    create_flat_discount_curve,
)
from .forward import ForwardCurve, create_forward_curve_from_forwards

__all__ = [
    "Curve",
    "BaseCurve",
    "ForwardCurve",
    "DiscountCurve",
    "create_forward_curve_from_forwards",
    "create_discount_curve_from_discount_factors",
    "create_flat_discount_curve",
]
