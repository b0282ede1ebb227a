"""
Tests for 7-day aggregation and the 7-day DTI.
"""
import numpy as np
import pandas as pd
import pytest

from dti_engine.indicators.seven_day import aggregate_to_7day, calculate_7day_dti
from dti_engine.indicators.technical import calculate_dti
from dti_engine.shared.types import InvalidInputError


@pytest.fixture
def bars():
    rng = np.random.default_rng(11)
    n = 100
    dates = pd.bdate_range("2023-01-02", periods=n)
    close = 50 + np.cumsum(rng.normal(0, 0.5, n))
    high = close + rng.uniform(0.05, 0.5, n)
    low = close - rng.uniform(0.05, 0.5, n)
    return dates, high, low


class TestAggregateTo7Day:
    """Test positional partition into 7-bar periods."""

    def test_partition_covers_every_bar_once(self, bars):
        dates, high, low = bars
        periods = aggregate_to_7day(dates, high, low)
        assert periods[0].start_index == 0
        assert periods[-1].end_index == len(dates) - 1
        for prev, cur in zip(periods, periods[1:]):
            assert cur.start_index == prev.end_index + 1
        assert sum(p.length for p in periods) == len(dates)

    def test_short_last_period(self):
        dates = pd.date_range("2024-01-01", periods=20)
        periods = aggregate_to_7day(dates, np.arange(20.0) + 1, np.arange(20.0))
        assert [p.length for p in periods] == [7, 7, 6]

    def test_period_high_low(self):
        dates = pd.date_range("2024-01-01", periods=8)
        high = [1, 5, 2, 3, 4, 2, 1, 9]
        low = [0, 4, 1, -1, 3, 1, 0, 8]
        periods = aggregate_to_7day(dates, high, low)
        assert periods[0].high == 5.0
        assert periods[0].low == -1.0
        assert periods[0].start_date == dates[0]
        assert periods[0].end_date == dates[6]
        assert periods[1].high == 9.0
        assert periods[1].low == 8.0

    def test_empty(self):
        with pytest.raises(InvalidInputError):
            aggregate_to_7day([], [], [])

    def test_mismatched_lengths(self):
        with pytest.raises(InvalidInputError):
            aggregate_to_7day(pd.date_range("2024-01-01", periods=3), [1, 2, 3], [1, 2])


class TestCalculate7DayDTI:
    """Test the aggregated DTI and its daily broadcast."""

    def test_daily_broadcast_matches_period(self, bars):
        dates, high, low = bars
        result = calculate_7day_dti(dates, high, low)
        assert len(result.daily_7day_dti) == len(dates)
        assert len(result.seven_day_dti) == len(result.periods)
        for period in result.periods:
            chunk = result.daily_7day_dti[period.start_index:period.end_index + 1]
            np.testing.assert_array_equal(chunk, period.dti)

    def test_period_dti_is_dti_of_period_bars(self, bars):
        dates, high, low = bars
        result = calculate_7day_dti(dates, high, low)
        expected = calculate_dti([p.high for p in result.periods], [p.low for p in result.periods])
        np.testing.assert_allclose(result.seven_day_dti, expected)

    def test_first_period_zero(self, bars):
        dates, high, low = bars
        result = calculate_7day_dti(dates, high, low)
        assert np.all(result.daily_7day_dti[:7] == 0.0)

    def test_previous_period_dti(self, bars):
        dates, high, low = bars
        result = calculate_7day_dti(dates, high, low)
        assert result.previous_period_dti(0) is None
        assert result.previous_period_dti(6) is None
        assert result.previous_period_dti(7) == result.seven_day_dti[0]
        assert result.previous_period_dti(20) == result.seven_day_dti[1]

    def test_period_index_out_of_range(self, bars):
        dates, high, low = bars
        result = calculate_7day_dti(dates, high, low)
        with pytest.raises(IndexError):
            result.period_index_at(len(dates))
