"""Tests for time discretizations."""
import numpy as np
import pytest

from lmmxva.conventions import ShortPeriodLocation
from lmmxva.exceptions import ConfigurationError
from lmmxva.time import TimeGrid


class TestConstruction:
    def test_regular_periods(self):
        grid = TimeGrid.from_period_length(0.0, 5.0, 1.0)
        assert grid.times.tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
        assert grid.number_of_time_steps == 5
        assert grid.number_of_times == 6
        assert len(grid) == 6

    def test_stub_at_end(self):
        grid = TimeGrid.from_period_length(0.0, 1.1, 0.25, ShortPeriodLocation.SHORT_PERIOD_AT_END)
        np.testing.assert_allclose(grid.times, [0.0, 0.25, 0.5, 0.75, 1.0, 1.1])
        assert grid.time_step(4) == pytest.approx(0.1)

    def test_stub_at_start(self):
        grid = TimeGrid.from_period_length(0.0, 1.1, 0.25, ShortPeriodLocation.SHORT_PERIOD_AT_START)
        np.testing.assert_allclose(grid.times, [0.0, 0.1, 0.35, 0.6, 0.85, 1.1])
        assert grid.time_step(0) == pytest.approx(0.1)
        assert grid.first_time == 0.0
        assert grid.last_time == 1.1

    def test_rounding_remainder_is_absorbed(self):
        grid = TimeGrid.from_period_length(0.0, 1.0, 0.1)
        assert grid.number_of_time_steps == 10
        assert grid.last_time == 1.0
        assert min(grid.time_steps()) > 0.09

    @pytest.mark.parametrize("location", list(ShortPeriodLocation))
    def test_near_zero_stub_is_absorbed(self, location):
        end = 1.0 + 2e-10
        grid = TimeGrid.from_period_length(0.0, end, 0.25, location)
        assert grid.number_of_time_steps == 4
        assert grid.first_time == 0.0
        assert grid.last_time == end
        assert min(grid.time_steps()) > 0.2

    def test_tiny_span_keeps_one_period(self):
        grid = TimeGrid.from_period_length(0.0, 1e-12, 0.25)
        assert grid.times.tolist() == [0.0, 1e-12]

    def test_points_do_not_accumulate_error(self):
        grid = TimeGrid.from_period_length(0.0, 5.0, 0.1)
        assert grid.number_of_time_steps == 50
        assert grid.time(37) == 37 * 0.1

    @pytest.mark.parametrize(
        "start, end, period_length",
        [(1.0, 1.0, 0.5), (2.0, 1.0, 0.5), (0.0, 1.0, 0.0), (0.0, 1.0, -0.25)],
    )
    def test_invalid_period_arguments(self, start, end, period_length):
        with pytest.raises(ConfigurationError):
            TimeGrid.from_period_length(start, end, period_length)

    @pytest.mark.parametrize("times", [[], [0.0, 1.0, 1.0], [0.0, 2.0, 1.0], [0.0, float("nan")]])
    def test_invalid_points(self, times):
        with pytest.raises(ConfigurationError):
            TimeGrid(times)

    def test_times_are_a_copy(self):
        grid = TimeGrid([0.0, 1.0])
        times = grid.times
        times[0] = 99.0
        assert grid.time(0) == 0.0


class TestLookup:
    def test_time_index(self):
        grid = TimeGrid([0.0, 0.5, 1.0, 2.0])
        assert grid.time_index(1.0) == 2
        assert grid.time_index(1.0 + 1e-12) == 2
        assert grid.time_index(0.7) is None

    def test_nearest_indices(self):
        grid = TimeGrid([0.0, 0.5, 1.0, 2.0])
        assert grid.time_index_nearest_less_or_equal(0.7) == 1
        assert grid.time_index_nearest_less_or_equal(1.0) == 2
        assert grid.time_index_nearest_less_or_equal(-0.1) == -1
        assert grid.time_index_nearest_less_or_equal(5.0) == 3
        assert grid.time_index_nearest_greater_or_equal(0.7) == 2
        assert grid.time_index_nearest_greater_or_equal(0.5) == 1

    def test_time_step_out_of_range(self):
        grid = TimeGrid([0.0, 1.0])
        with pytest.raises(IndexError):
            grid.time_step(1)

    def test_subset_and_shift(self):
        grid = TimeGrid.from_period_length(0.0, 5.0, 1.0)
        assert grid.subset(1.5, 4.0).times.tolist() == [2.0, 3.0, 4.0]
        assert grid.shifted(2.0).times.tolist() == [2.0, 3.0, 4.0, 5.0, 6.0, 7.0]


class TestUnion:
    @pytest.mark.parametrize(
        "first, second",
        [
            (TimeGrid.from_period_length(0.0, 5.0, 0.25), TimeGrid.from_period_length(0.0, 5.0, 0.1)),
            (TimeGrid.from_period_length(0.0, 5.0, 0.5), TimeGrid.from_period_length(0.0, 5.0, 1.0)),
            (TimeGrid([0.0, 0.3, 2.0]), TimeGrid([0.1, 0.3, 7.0])),
            (TimeGrid([1.0]), TimeGrid([0.0, 1.0])),
        ],
    )
    def test_union_properties(self, first, second):
        union = first.union(second)

        assert np.all(np.diff(union.times) > 0.0)
        for point in list(first) + list(second):
            matches = np.sum(np.abs(union.times - point) <= TimeGrid.TOLERANCE)
            assert matches == 1
        assert union == second.union(first)

    def test_union_with_itself(self):
        grid = TimeGrid.from_period_length(0.0, 2.0, 0.25)
        assert grid.union(grid) == grid

    def test_union_merges_close_points(self):
        union = TimeGrid.from_period_length(0.0, 5.0, 0.25).union(
            TimeGrid.from_period_length(0.0, 5.0, 0.1)
        )
        # 0.25 grid has 21 points, 0.1 grid 51, shared points are multiples of 0.5
        assert union.number_of_times == 21 + 51 - 11
