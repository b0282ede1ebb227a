"""
Live opportunity detection.

An opportunity is a symbol whose backtest ends in the InTrade state: the
entry fired and no exit rule has triggered up to the last bar. The scanner
runs the check across many symbols in parallel and ranks the survivors by
current P/L.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .backtest import run_backtest
from .backtest_types import BacktestResult, Opportunity
from ..signals.config import TradingParameters
from ..shared.trading_days import is_within_trading_days
from ..shared.types import DateLike, InvalidInputError, PriceSeries

logger = logging.getLogger(__name__)


def opportunity_from_result(prices: PriceSeries, result: BacktestResult) -> Optional[Opportunity]:
    """Build an Opportunity from a finished backtest, or None when no trade is open."""
    trade = result.open_trade
    if trade is None:
        return None
    last = len(prices) - 1
    metrics = result.metrics
    return Opportunity(
        symbol=prices.symbol,
        signal_date=trade.entry_date,
        entry_price=trade.entry_price,
        entry_dti=trade.entry_dti,
        entry_7day_dti=trade.entry_7day_dti,
        current_date=prices.dates[last],
        current_price=float(prices.close[last]),
        current_dti=float(result.dti[last]),
        current_7day_dti=float(result.seven_day.daily_7day_dti[last]),
        current_pl_percent=trade.pl_percent,
        holding_days=trade.holding_days,
        win_rate=metrics.win_rate,
        total_trades=metrics.total_trades,
        completed_trades=metrics.completed_trades,
        backtest=result,
    )


def check_for_opportunity(
    prices: PriceSeries,
    params: Optional[TradingParameters] = None,
) -> Optional[Opportunity]:
    """
    Check whether a symbol currently holds an open DTI trade.

    Args:
        prices: Chronological price series
        params: Trading parameters (default: TradingParameters())

    Returns:
        Opportunity for the open trade, or None when the last state is Idle
        (including series too short to backtest)
    """
    result = run_backtest(prices, params)
    return opportunity_from_result(prices, result)


@dataclass
class ScanResult:
    """Result of scanning many symbols for open trades."""
    opportunities: List[Opportunity] = field(default_factory=list)  # Sorted by current P/L, best first
    skipped: Dict[str, str] = field(default_factory=dict)  # symbol -> reason
    scanned: int = 0


def _symbol_of(key: str, prices: PriceSeries) -> str:
    return prices.symbol or key


def _check_one(
    symbol: str,
    prices: PriceSeries,
    params: TradingParameters,
) -> Tuple[str, Optional[Opportunity], Optional[str]]:
    """Check one symbol. Returns (symbol, opportunity or None, skip_reason or None)."""
    try:
        return (symbol, check_for_opportunity(prices, params), None)
    except InvalidInputError as e:
        return (symbol, None, f"{type(e).__name__}: {e}")


def scan_opportunities(
    series: Union[Mapping[str, PriceSeries], Iterable[PriceSeries]],
    params: Optional[TradingParameters] = None,
    max_workers: Optional[int] = None,
    min_win_rate: Optional[float] = None,
    within_trading_days: Optional[int] = None,
    today: Optional[DateLike] = None,
) -> ScanResult:
    """
    Scan many symbols for open DTI trades.

    Symbols are independent, so they are checked in parallel via
    ThreadPoolExecutor when max_workers > 1. A symbol whose data is invalid
    is logged and skipped; it never aborts the scan.

    Args:
        series: Mapping symbol -> PriceSeries, or an iterable of PriceSeries
            (keyed by PriceSeries.symbol, falling back to its position)
        params: Trading parameters (default: TradingParameters())
        max_workers: Thread pool size (default: cpu_count); 1 = sequential.
        min_win_rate: Drop opportunities whose historical win rate is below this (percent)
        within_trading_days: Keep only opportunities whose entry is at most
            this many trading days before today
        today: Reference date for the freshness filter (default: now)

    Returns:
        ScanResult with opportunities sorted by current P/L descending
    """
    params = params or TradingParameters()
    if isinstance(series, Mapping):
        items = [(_symbol_of(k, v), v) for k, v in series.items()]
    else:
        items = [(_symbol_of(str(i), v), v) for i, v in enumerate(series)]

    workers = (
        max(1, max_workers)
        if max_workers is not None
        else (os.cpu_count() or 1)
    )

    outcomes: List[Tuple[str, Optional[Opportunity], Optional[str]]] = []
    if workers <= 1 or len(items) <= 1:
        for symbol, prices in items:
            outcomes.append(_check_one(symbol, prices, params))
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_check_one, symbol, prices, params) for symbol, prices in items]
            for future in as_completed(futures):
                outcomes.append(future.result())

    result = ScanResult(scanned=len(items))
    for symbol, opportunity, skip_reason in outcomes:
        if skip_reason is not None:
            logger.warning("Skipping %s: %s", symbol, skip_reason)
            result.skipped[symbol] = skip_reason
            continue
        if opportunity is None:
            continue
        if min_win_rate is not None and opportunity.win_rate < min_win_rate:
            logger.debug("%s: win rate %.1f%% below %.1f%%", symbol, opportunity.win_rate, min_win_rate)
            continue
        if within_trading_days is not None and not is_within_trading_days(
            opportunity.signal_date, within_trading_days, today
        ):
            logger.debug("%s: signal %s is stale", symbol, opportunity.signal_date.date())
            continue
        result.opportunities.append(opportunity)

    result.opportunities.sort(key=lambda o: o.current_pl_percent, reverse=True)
    logger.info(
        "Scanned %d symbols: %d opportunities, %d skipped",
        result.scanned, len(result.opportunities), len(result.skipped),
    )
    return result
