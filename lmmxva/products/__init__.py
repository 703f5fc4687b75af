"""
Products package - path-wise values and market rates.

Main APIs:
---------
    - SwapMarketRateProduct: Par swap rate from the simulated state
    - swap_annuity: Annuity of a schedule observed at a simulation time
    - SimpleSwap: Receiver-floating swap valued against the numeraire
"""

from .base import MonteCarloProduct
from .swap import SimpleSwap
from .swap_rate import SwapMarketRateProduct, remaining_periods, swap_annuity

__all__ = [
    "MonteCarloProduct",
    "SwapMarketRateProduct",
    "SimpleSwap",
    "swap_annuity",
    "remaining_periods",
]
