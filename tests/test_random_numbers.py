"""Tests for Brownian increments and path-wise random variables."""
import math

import numpy as np
import pytest

from lmmxva.exceptions import ConfigurationError
from lmmxva.montecarlo import BrownianMotion, RandomVariable
from lmmxva.time import TimeGrid


@pytest.fixture
def grid():
    return TimeGrid.from_period_length(0.0, 2.0, 0.5)


class TestBrownianMotion:
    def test_shape_and_variance(self, grid):
        brownian = BrownianMotion(grid, number_of_factors=2, number_of_paths=50_000, seed=7)
        increment = brownian.get_increment(1)
        assert increment.shape == (50_000, 2)
        assert np.var(increment[:, 0]) == pytest.approx(0.5, rel=0.03)
        assert abs(np.corrcoef(increment[:, 0], increment[:, 1])[0, 1]) < 0.03

    def test_same_seed_reproduces(self, grid):
        first = BrownianMotion(grid, 1, 1000, seed=42, block_size=128)
        second = BrownianMotion(grid, 1, 1000, seed=42, block_size=128)
        for step in range(grid.number_of_time_steps):
            np.testing.assert_array_equal(first.get_increment(step), second.get_increment(step))

    def test_different_seed_differs(self, grid):
        first = BrownianMotion(grid, 1, 100, seed=1)
        second = BrownianMotion(grid, 1, 100, seed=2)
        assert not np.array_equal(first.get_increment(0), second.get_increment(0))

    def test_block_draws_do_not_depend_on_path_count(self, grid):
        # Paths of complete blocks keep their draws when more paths are added
        small = BrownianMotion(grid, 1, 256, seed=3, block_size=128)
        large = BrownianMotion(grid, 1, 1000, seed=3, block_size=128)
        np.testing.assert_array_equal(small.get_increment(2), large.get_increment(2)[:256])

    def test_increments_are_read_only(self, grid):
        brownian = BrownianMotion(grid, 1, 10, seed=0)
        with pytest.raises(ValueError):
            brownian.get_increment(0)[0, 0] = 1.0

    def test_index_out_of_range(self, grid):
        brownian = BrownianMotion(grid, 1, 10, seed=0)
        with pytest.raises(IndexError):
            brownian.get_increment(grid.number_of_time_steps)

    def test_block_slices(self, grid):
        brownian = BrownianMotion(grid, 1, 10, seed=0, block_size=4)
        assert brownian.number_of_blocks == 3
        assert brownian.block_slices()[-1] == slice(8, 10)

    @pytest.mark.parametrize(
        "factors, paths, block_size", [(0, 10, 4), (1, 0, 4), (1, 10, 0)]
    )
    def test_invalid_arguments(self, grid, factors, paths, block_size):
        with pytest.raises(ConfigurationError):
            BrownianMotion(grid, factors, paths, seed=0, block_size=block_size)


class TestRandomVariable:
    def test_statistics(self):
        variable = RandomVariable([1.0, 2.0, 3.0, 4.0], filtration_time=1.0)
        assert variable.average() == 2.5
        assert variable.variance() == pytest.approx(1.25)
        assert variable.size == 4
        assert variable[2] == 3.0
        assert variable.min() == 1.0
        assert variable.max() == 4.0
        assert variable.standard_error() == pytest.approx(math.sqrt(1.25) / 2.0)
        assert RandomVariable.constant(1.0).standard_error() == 0.0

    def test_deterministic(self):
        constant = RandomVariable.constant(0.03)
        assert constant.is_deterministic
        assert constant.variance() == 0.0
        assert constant.get(17) == 0.03
        np.testing.assert_array_equal(constant.to_numpy(3), [0.03, 0.03, 0.03])

    def test_arithmetic_broadcasts_constants(self):
        variable = RandomVariable([1.0, 2.0], filtration_time=0.5)
        result = (variable * 2.0 - RandomVariable.constant(1.0, 1.0)) / variable
        np.testing.assert_allclose(result.values, [1.0, 1.5])
        assert result.filtration_time == 1.0
        np.testing.assert_allclose((1.0 - variable).values, [0.0, -1.0])
        np.testing.assert_allclose((4.0 / variable).values, [4.0, 2.0])

    def test_values_are_read_only(self):
        variable = RandomVariable(np.array([1.0, 2.0]))
        with pytest.raises(ValueError):
            variable.values[0] = 3.0

    def test_is_finite(self):
        assert not RandomVariable([1.0, np.nan]).is_finite()
        assert RandomVariable([1.0, 2.0]).is_finite()
