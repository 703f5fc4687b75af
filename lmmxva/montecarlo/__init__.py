"""
Monte Carlo package - LIBOR market model simulation.

Main APIs:
---------
    - LMMSimulationEngine.from_curves: Engine from tenors, curves and covariance
    - ExponentialForm5ParamCovarianceModel: Parametric factor loadings
    - RandomVariable: Path-wise values returned by the engine and products
"""

from .brownian import BrownianMotion
from .config import SimulationConfig
from .covariance import (
    CovarianceModel,
    ExponentialForm5ParamCovarianceModel,
    FactorLoadingCovarianceModel,
    factor_reduced_correlation,
)
from .lmm import LIBORMarketModel
from .random_variable import RandomVariable
from .simulation import LMMSimulationEngine

__all__ = [
    "BrownianMotion",
    "SimulationConfig",
    "CovarianceModel",
    "ExponentialForm5ParamCovarianceModel",
    "FactorLoadingCovarianceModel",
    "factor_reduced_correlation",
    "LIBORMarketModel",
    "RandomVariable",
    "LMMSimulationEngine",
]
