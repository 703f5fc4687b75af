"""Shared market data and engine factories for the test suite."""

import pytest

from lmmxva.conventions import ShortPeriodLocation
from lmmxva.curves import (
    create_discount_curve_from_discount_factors,
    create_forward_curve_from_forwards,
)
from lmmxva.montecarlo import (
    ExponentialForm5ParamCovarianceModel,
    LMMSimulationEngine,
    SimulationConfig,
)
from lmmxva.time import TimeGrid

FORWARD_RATES = [
    [0.01, 0.03, 0.025, 0.02, 0.015],
    [0.01, 0.02, 0.025, 0.02, 0.015],
]
DISCOUNT_FACTORS = [0.98, 0.95, 0.94, 0.92, 0.9]
COVARIANCE_PARAMETERS = (0.1, 0.1, 0.1, 0.1, 0.1)


@pytest.fixture
def annual_tenor():
    return TimeGrid.from_period_length(0.0, 5.0, 1.0, ShortPeriodLocation.SHORT_PERIOD_AT_END)


@pytest.fixture
def discount_curve(annual_tenor):
    return create_discount_curve_from_discount_factors(
        "", annual_tenor.times[1:], DISCOUNT_FACTORS
    )


@pytest.fixture
def make_engine(annual_tenor, discount_curve):
    """Factory building an engine on the five year annual scenario.

    The period tenor uses ``period_length``; the process grid is the union of
    the period tenor with a 0.1 grid.
    """

    def _make(forward_rates,
              period_length=0.25,
              number_of_paths=100,
              parameters=COVARIANCE_PARAMETERS,
              number_of_factors=1,
              seed=42,
              config=None):
        last_time = annual_tenor.last_time
        period_tenor = TimeGrid.from_period_length(0.0, last_time, period_length)
        process_tenor = period_tenor.union(TimeGrid.from_period_length(0.0, last_time, 0.1))

        forward_curve = create_forward_curve_from_forwards(
            "", annual_tenor.times[1:], forward_rates, period_length
        )
        covariance = ExponentialForm5ParamCovarianceModel(
            process_tenor, period_tenor, number_of_factors, parameters
        )
        return LMMSimulationEngine.from_curves(
            period_tenor,
            process_tenor,
            forward_curve,
            discount_curve,
            covariance,
            number_of_factors,
            number_of_paths,
            seed,
            config=config or SimulationConfig(),
        )

    return _make
