"""LIBOR Market Model market quantities for sensitivity coordinates.

This package simulates a multi-factor lognormal LIBOR Market Model and
evaluates market-observable rates (par swap rates) path-wise, tagging each
quantity with a SIMM risk coordinate.

Key modules:
- time: Time discretizations (tenors and simulation grids)
- curves: Initial forward and discount curves
- interpolation: Interpolation rules used by the curves
- montecarlo: Brownian motion, covariance models and the simulation engine
- products: Path-wise products (par swap rate, simple swap)
- coordinates: Risk coordinates and modelled market quantities
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "time",
    "curves",
    "interpolation",
    "montecarlo",
    "products",
    "coordinates",
    "conventions",
    "exceptions",
]
