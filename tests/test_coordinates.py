"""Tests for risk coordinates and modelled market quantities."""
import dataclasses

import pytest

from lmmxva.coordinates import (
    ModelledMarketQuantity,
    ProductClass,
    RiskClass,
    SimmCoordinate,
    SwapRateMarketQuantity,
)
from lmmxva.exceptions import ConfigurationError, DomainError
from lmmxva.products import SwapMarketRateProduct

from conftest import FORWARD_RATES

COORDINATE = SimmCoordinate(
    qualifier="EUR",
    bucket="1",
    label1="5y",
    label2="Libor6m",
    risk_type="Risk_IRCurve",
    product_class=ProductClass.RATES_FX,
)


class TestSimmCoordinate:
    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            COORDINATE.label1 = "10y"

    def test_equality_and_hash(self):
        same = SimmCoordinate("EUR", "1", "5y", "Libor6m", "Risk_IRCurve")
        assert same == COORDINATE
        assert len({same, COORDINATE}) == 1

    def test_risk_class(self):
        assert COORDINATE.risk_class == RiskClass.INTEREST_RATE
        with pytest.raises(ValueError):
            dataclasses.replace(COORDINATE, risk_type="Risk_Unknown").risk_class

    def test_string_form(self):
        assert str(COORDINATE) == "RatesFX/Risk_IRCurve/EUR/1/5y/Libor6m"


class TestSwapRateMarketQuantity:
    def test_is_a_modelled_market_quantity(self):
        quantity = SwapRateMarketQuantity(COORDINATE, 5.0, 0.5, 1.0)
        assert isinstance(quantity, ModelledMarketQuantity)
        assert quantity.get_coordinate() is COORDINATE

    def test_schedule_starts_at_evaluation_time(self):
        quantity = SwapRateMarketQuantity(COORDINATE, 10.0, 0.5, 1.0)

        product = quantity.get_product(2.0)

        assert isinstance(product, SwapMarketRateProduct)
        assert product.floating_tenor.first_time == 2.0
        assert product.floating_tenor.last_time == 12.0
        assert product.floating_tenor.number_of_time_steps == 20
        assert product.fixed_tenor.times.tolist() == [float(t) for t in range(2, 13)]

    def test_new_product_per_evaluation_time(self):
        quantity = SwapRateMarketQuantity(COORDINATE, 5.0, 0.5, 1.0)
        assert quantity.get_product(0.0) is not quantity.get_product(0.0)
        assert quantity.get_product(1.0).fixed_tenor.first_time == 1.0

    def test_product_delivers_par_rate(self, make_engine, annual_tenor):
        engine = make_engine(FORWARD_RATES[0], period_length=0.5)
        quantity = SwapRateMarketQuantity(COORDINATE, 5.0, 1.0, 1.0)

        rate = quantity.get_product(0.0).get_value(0.0, engine)
        expected = SwapMarketRateProduct(annual_tenor, annual_tenor).get_value(0.0, engine)

        assert rate.average() == pytest.approx(expected.average(), abs=1e-14)

    def test_evaluation_after_simulation_horizon(self, make_engine):
        engine = make_engine(FORWARD_RATES[0])
        product = SwapRateMarketQuantity(COORDINATE, 10.0, 0.5, 1.0).get_product(7.0)
        with pytest.raises(DomainError):
            product.get_value(7.0, engine)

    @pytest.mark.parametrize("lengths", [(0.0, 0.5, 1.0), (5.0, -0.5, 1.0), (5.0, 0.5, 0.0)])
    def test_invalid_lengths(self, lengths):
        with pytest.raises(ConfigurationError):
            SwapRateMarketQuantity(COORDINATE, *lengths)
