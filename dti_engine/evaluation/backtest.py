"""
DTI backtest engine.

Replays the entry/exit state machine bar by bar over one symbol's history:

    Idle --entry rule--> InTrade --first exit rule--> Idle

Exactly one transition is evaluated per bar, so a bar that closes a trade
never opens the next one. A trade still open at the last bar is emitted with
is_open=True and its P/L marked against the last close.
"""
import logging
from typing import List, Optional

import numpy as np

from .backtest_types import BacktestResult, Trade
from .trade_analysis import calculate_metrics
from ..indicators.seven_day import SevenDayDTI, calculate_7day_dti
from ..indicators.technical import calculate_dti
from ..signals.config import TradingParameters
from ..signals.rules import (
    BarContext,
    first_exit_reason,
    get_exit_rules,
    is_entry_signal,
    pl_percent,
    warmup_end,
)
from ..shared.defaults import MIN_BARS
from ..shared.trading_days import days_between
from ..shared.types import InvalidInputError, PriceSeries

logger = logging.getLogger(__name__)


def _empty_result(prices: PriceSeries, params: TradingParameters) -> BacktestResult:
    return BacktestResult(
        trades=(),
        metrics=calculate_metrics([]),
        params=params,
        symbol=prices.symbol,
    )


def run_backtest_with_indicators(
    prices: PriceSeries,
    dti: np.ndarray,
    seven_day: SevenDayDTI,
    params: Optional[TradingParameters] = None,
) -> BacktestResult:
    """
    Run the trade state machine on precomputed indicators.

    Lets callers that already hold the DTI series (e.g. memoised per symbol
    and parameter set) skip recomputing it.

    Args:
        prices: Chronological price series
        dti: Daily DTI for prices
        seven_day: 7-day DTI for prices
        params: Trading parameters (default: TradingParameters())

    Returns:
        BacktestResult with trades in entry order and summary metrics

    Raises:
        InvalidInputError: If indicator lengths do not match the price series
    """
    params = params or TradingParameters()
    n = len(prices)
    if len(dti) != n or len(seven_day.daily_7day_dti) != n:
        raise InvalidInputError(
            f"Indicator lengths ({len(dti)}, {len(seven_day.daily_7day_dti)}) "
            f"must match price series length {n}"
        )
    if n < MIN_BARS:
        logger.debug("%s: %d bars, not enough for a backtest", prices.symbol, n)
        return _empty_result(prices, params)

    dates = prices.dates
    close = prices.close
    daily_7day = seven_day.daily_7day_dti
    earliest_entry = warmup_end(dates[0], params.warmup_months)
    exit_rules = get_exit_rules(params)

    trades: List[Trade] = []
    current: Optional[Trade] = None

    for i in range(1, n):
        date = dates[i]
        price = float(close[i])

        if current is not None:
            holding_days = days_between(current.entry_date, date)
            pl = pl_percent(price, current.entry_price)
            bar = BarContext(
                pl_percent=pl,
                holding_days=holding_days,
                current_7day_dti=float(daily_7day[i]),
                previous_7day_dti=float(daily_7day[i - 1]),
            )
            reason = first_exit_reason(bar, exit_rules, params)
            if reason is not None:
                trades.append(current.closed(
                    exit_date=date,
                    exit_price=price,
                    exit_index=i,
                    exit_reason=reason,
                    pl_percent=pl,
                    holding_days=holding_days,
                    exit_dti=float(dti[i]),
                    exit_7day_dti=float(daily_7day[i]),
                ))
                logger.debug(
                    "%s: exit %s on %s at %.4f (%.2f%%)",
                    prices.symbol, reason.value, date.date(), price, pl,
                )
                current = None
            else:
                current = current.marked(pl, holding_days)
            continue

        if date < earliest_entry:
            continue

        if is_entry_signal(dti[i], dti[i - 1], daily_7day[i], seven_day.previous_period_dti(i), params):
            current = Trade(
                entry_date=date,
                entry_price=price,
                entry_dti=float(dti[i]),
                entry_7day_dti=float(daily_7day[i]),
                entry_index=i,
            )
            logger.debug("%s: entry on %s at %.4f (DTI %.2f)", prices.symbol, date.date(), price, dti[i])

    if current is not None:
        last = n - 1
        trades.append(current.marked(
            pl_percent(float(close[last]), current.entry_price),
            days_between(current.entry_date, dates[last]),
        ))

    metrics = calculate_metrics(trades)
    return BacktestResult(
        trades=tuple(trades),
        metrics=metrics,
        params=params,
        dti=dti,
        seven_day=seven_day,
        symbol=prices.symbol,
    )


def run_backtest(prices: PriceSeries, params: Optional[TradingParameters] = None) -> BacktestResult:
    """
    Compute DTI and 7-day DTI, then run the trade state machine.

    A series shorter than MIN_BARS is a data state, not an error: the result
    has no trades and zeroed metrics.

    Args:
        prices: Chronological price series
        params: Trading parameters (default: TradingParameters())

    Returns:
        BacktestResult
    """
    params = params or TradingParameters()
    if len(prices) < MIN_BARS:
        logger.debug("%s: %d bars, not enough for a backtest", prices.symbol, len(prices))
        return _empty_result(prices, params)

    dti = calculate_dti(prices.high, prices.low, params.r, params.s, params.u)
    seven_day = calculate_7day_dti(prices.dates, prices.high, prices.low, params.r, params.s, params.u)
    result = run_backtest_with_indicators(prices, dti, seven_day, params)
    logger.debug(
        "%s: %d trades (%d completed), win rate %.1f%%",
        prices.symbol, result.metrics.total_trades,
        result.metrics.completed_trades, result.metrics.win_rate,
    )
    return result


def calculate_win_rate(prices: PriceSeries, params: Optional[TradingParameters] = None) -> float:
    """Historical win rate (0-100) of the DTI setup on this series."""
    return run_backtest(prices, params).metrics.win_rate


class BacktestEngine:
    """Runs DTI backtests with a fixed parameter set."""

    def __init__(self, params: Optional[TradingParameters] = None):
        """
        Initialize the engine.

        Args:
            params: Trading parameters (default: TradingParameters())
        """
        self.params = params or TradingParameters()

    def run(self, prices: PriceSeries) -> BacktestResult:
        """Backtest one symbol."""
        return run_backtest(prices, self.params)

    def win_rate(self, prices: PriceSeries) -> float:
        return calculate_win_rate(prices, self.params)
