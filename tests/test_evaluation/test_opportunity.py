"""
Tests for opportunity detection and multi-symbol scanning.
"""
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from dti_engine.evaluation import opportunity as opportunity_module
from dti_engine.evaluation.backtest import run_backtest, run_backtest_with_indicators
from dti_engine.evaluation.opportunity import (
    check_for_opportunity,
    opportunity_from_result,
    scan_opportunities,
)
from dti_engine.indicators.seven_day import SevenDayDTI
from dti_engine.signals.config import TradingParameters
from dti_engine.shared.types import InvalidInputError, PriceSeries

SCENARIO_PARAMS = TradingParameters(warmup_months=0, enable_7day_confirmation=False)


def _prices(closes, symbol="TEST"):
    closes = np.asarray(closes, dtype=float)
    return PriceSeries.from_arrays(
        pd.date_range("2024-01-01", periods=len(closes), freq="D"),
        high=closes + 1,
        low=closes - 1,
        close=closes,
        symbol=symbol,
    )


def _seven_day(n):
    return SevenDayDTI(periods=[], seven_day_dti=np.zeros(1), daily_7day_dti=np.zeros(n))


@pytest.fixture
def random_walks():
    rng = np.random.default_rng(5)
    out = {}
    for k in range(6):
        n = 400
        close = 50 * np.exp(np.cumsum(rng.normal(0, 0.02, n)))
        out[f"S{k}"] = PriceSeries.from_arrays(
            pd.bdate_range("2021-01-01", periods=n),
            high=close * 1.01,
            low=close * 0.99,
            close=close,
            symbol=f"S{k}",
        )
    return out


class TestOpportunityFromResult:
    """Test opportunity construction from a finished backtest."""

    def test_open_trade_is_opportunity(self):
        prices = _prices([100, 100, 101, 102, 103])
        dti = np.array([-20.0, -10.0, -12.0, -15.0, -15.0])
        result = run_backtest_with_indicators(prices, dti, _seven_day(5), SCENARIO_PARAMS)
        opp = opportunity_from_result(prices, result)
        assert opp is not None
        assert opp.symbol == "TEST"
        assert opp.signal_date == pd.Timestamp("2024-01-02")
        assert opp.entry_price == 100.0
        assert opp.entry_dti == -10.0
        assert opp.current_date == pd.Timestamp("2024-01-05")
        assert opp.current_price == 103.0
        assert opp.current_dti == -15.0
        assert opp.current_pl_percent == pytest.approx(3.0)
        assert opp.holding_days == 3
        assert opp.total_trades == 1
        assert opp.completed_trades == 0
        assert opp.backtest is result

    def test_closed_before_last_bar_is_none(self):
        prices = _prices([100, 100, 110, 100, 100])
        dti = np.array([-20.0, -10.0, -5.0, -5.0, -5.0])
        result = run_backtest_with_indicators(prices, dti, _seven_day(5), SCENARIO_PARAMS)
        assert len(result.trades) == 1
        assert opportunity_from_result(prices, result) is None


class TestCheckForOpportunity:
    def test_matches_backtest_terminal_state(self, random_walks):
        for prices in random_walks.values():
            opp = check_for_opportunity(prices)
            open_trade = run_backtest(prices).open_trade
            assert (opp is None) == (open_trade is None)
            if opp is not None:
                assert opp.signal_date == open_trade.entry_date
                assert opp.current_date == prices.dates[-1]

    def test_too_short(self):
        assert check_for_opportunity(_prices([100])) is None


def _fake_opportunity(symbol, pl, win_rate=50.0, signal_date="2024-01-12"):
    return SimpleNamespace(
        symbol=symbol,
        current_pl_percent=pl,
        win_rate=win_rate,
        signal_date=pd.Timestamp(signal_date),
    )


class TestScanOpportunities:
    """Test scanning, filtering and ranking."""

    @pytest.fixture
    def fake_check(self, monkeypatch):
        results = {
            "AAA": _fake_opportunity("AAA", 1.0, win_rate=70.0),
            "BBB": _fake_opportunity("BBB", 5.0, win_rate=40.0),
            "CCC": None,
            "DDD": _fake_opportunity("DDD", -2.0, win_rate=80.0, signal_date="2024-01-02"),
        }

        def fake(prices, params=None):
            if prices.symbol == "BAD":
                raise InvalidInputError("broken data")
            return results[prices.symbol]

        monkeypatch.setattr(opportunity_module, "check_for_opportunity", fake)
        return {s: _prices([10, 11], symbol=s) for s in ["AAA", "BBB", "CCC", "DDD", "BAD"]}

    @pytest.mark.parametrize("workers", [1, 4])
    def test_sorted_by_pl_and_skips_invalid(self, fake_check, workers):
        scan = scan_opportunities(fake_check, max_workers=workers)
        assert [o.symbol for o in scan.opportunities] == ["BBB", "AAA", "DDD"]
        assert scan.scanned == 5
        assert list(scan.skipped) == ["BAD"]
        assert "broken data" in scan.skipped["BAD"]

    def test_min_win_rate(self, fake_check):
        scan = scan_opportunities(fake_check, max_workers=1, min_win_rate=60.0)
        assert [o.symbol for o in scan.opportunities] == ["AAA", "DDD"]

    def test_freshness(self, fake_check):
        scan = scan_opportunities(fake_check, max_workers=1, within_trading_days=2, today="2024-01-15")
        assert [o.symbol for o in scan.opportunities] == ["BBB", "AAA"]

    def test_iterable_input(self, fake_check):
        scan = scan_opportunities(list(fake_check.values()), max_workers=1)
        assert len(scan.opportunities) == 3


def test_scan_real_series(random_walks):
    scan = scan_opportunities(random_walks, max_workers=2)
    assert scan.scanned == len(random_walks)
    assert scan.skipped == {}
    expected = {s for s, p in random_walks.items() if check_for_opportunity(p) is not None}
    assert {o.symbol for o in scan.opportunities} == expected
    pls = [o.current_pl_percent for o in scan.opportunities]
    assert pls == sorted(pls, reverse=True)
