"""
Coordinates package - SIMM risk coordinates and modelled market quantities.

Main APIs:
---------
    - SimmCoordinate: Identity of a sensitivity
    - ModelledMarketQuantity: Coordinate plus product per evaluation time
    - SwapRateMarketQuantity: Spot starting par swap rate
"""

from .market_quantity import ModelledMarketQuantity, SwapRateMarketQuantity
from .simm import ProductClass, RiskClass, SimmCoordinate

__all__ = [
    "SimmCoordinate",
    "RiskClass",
    "ProductClass",
    "ModelledMarketQuantity",
    "SwapRateMarketQuantity",
]
