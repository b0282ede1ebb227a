"""
Trade analysis helpers: backtest metrics, per-exit-reason breakdowns, DataFrame export.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from .backtest_types import BacktestMetrics, Trade
from ..shared.types import ExitReason

TRADE_COLUMNS = [
    "entry_date", "entry_price", "entry_dti", "entry_7day_dti", "entry_index",
    "exit_date", "exit_price", "exit_index", "exit_reason", "exit_dti", "exit_7day_dti",
    "pl_percent", "holding_days", "is_open",
]


def calculate_metrics(trades: Iterable[Trade]) -> BacktestMetrics:
    """
    Summary metrics for a backtest's trades.

    Win rate counts completed trades only; total and average return include
    the open trade's mark-to-market P/L.
    """
    trades = list(trades)
    n = len(trades)
    if n == 0:
        return BacktestMetrics()
    completed = [t for t in trades if not t.is_open]
    wins = sum(1 for t in completed if t.is_win)
    total_return = sum(t.pl_percent for t in trades)
    return BacktestMetrics(
        total_trades=n,
        completed_trades=len(completed),
        open_trades=n - len(completed),
        wins=wins,
        losses=len(completed) - wins,
        win_rate=(wins / len(completed) * 100) if completed else 0.0,
        total_return=total_return,
        avg_return=total_return / n,
    )


def _metrics_for_pl(pl_pcts: List[float]) -> Dict[str, Any]:
    n = len(pl_pcts)
    if n == 0:
        return {
            "count": 0,
            "win_rate_pct": 0.0,
            "total_pl_pct": 0.0,
            "avg_pl_pct": 0.0,
        }
    winners = [p for p in pl_pcts if p > 0]
    return {
        "count": n,
        "win_rate_pct": len(winners) / n * 100,
        "total_pl_pct": sum(pl_pcts),
        "avg_pl_pct": sum(pl_pcts) / n,
    }


def aggregate_by_exit_reason(trades: Iterable[Trade]) -> Dict[str, Dict[str, Any]]:
    """
    Aggregate completed trades by exit reason.

    Returns a dict keyed by every ExitReason value with count, win_rate_pct,
    total_pl_pct, avg_pl_pct and avg_holding_days.
    """
    completed = [t for t in trades if not t.is_open]
    out: Dict[str, Dict[str, Any]] = {}
    for reason in ExitReason:
        subset = [t for t in completed if t.exit_reason is reason]
        metrics = _metrics_for_pl([t.pl_percent for t in subset])
        metrics["avg_holding_days"] = (
            sum(t.holding_days for t in subset) / len(subset) if subset else 0.0
        )
        out[reason.value] = metrics
    return out


def trades_to_dataframe(trades: Iterable[Trade]) -> pd.DataFrame:
    """One row per trade; exit_reason as its display string ('' while open)."""
    rows = []
    for t in trades:
        rows.append({
            "entry_date": t.entry_date,
            "entry_price": t.entry_price,
            "entry_dti": t.entry_dti,
            "entry_7day_dti": t.entry_7day_dti,
            "entry_index": t.entry_index,
            "exit_date": t.exit_date,
            "exit_price": t.exit_price,
            "exit_index": t.exit_index,
            "exit_reason": t.exit_reason.value if t.exit_reason is not None else "",
            "exit_dti": t.exit_dti,
            "exit_7day_dti": t.exit_7day_dti,
            "pl_percent": t.pl_percent,
            "holding_days": t.holding_days,
            "is_open": t.is_open,
        })
    return pd.DataFrame(rows, columns=TRADE_COLUMNS)
