"""
Backtest types: trades, metrics, backtest result, opportunity.

Extracted for reuse and to keep backtest.py focused on the state machine.
All types are frozen: each state transition builds a new Trade value and
no caller holds a mutable reference into a finished result.
"""
from __future__ import annotations

from dataclasses import dataclass, replace, field
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..indicators.seven_day import SevenDayDTI
from ..signals.config import TradingParameters
from ..shared.types import ExitReason


@dataclass(frozen=True)
class Trade:
    """A single simulated long trade."""
    entry_date: pd.Timestamp
    entry_price: float
    entry_dti: float
    entry_7day_dti: float
    entry_index: int

    # Filled when the trade closes
    exit_date: Optional[pd.Timestamp] = None
    exit_price: Optional[float] = None
    exit_index: Optional[int] = None
    exit_reason: Optional[ExitReason] = None
    exit_dti: Optional[float] = None
    exit_7day_dti: Optional[float] = None

    pl_percent: float = 0.0  # Realized, or mark-to-market while open
    holding_days: int = 0  # Calendar days since entry
    is_open: bool = True

    @property
    def is_win(self) -> bool:
        return self.pl_percent > 0

    def marked(self, pl_percent: float, holding_days: int) -> "Trade":
        """Copy with updated mark-to-market P/L and holding days."""
        return replace(self, pl_percent=pl_percent, holding_days=holding_days)

    def closed(
        self,
        exit_date: pd.Timestamp,
        exit_price: float,
        exit_index: int,
        exit_reason: ExitReason,
        pl_percent: float,
        holding_days: int,
        exit_dti: Optional[float] = None,
        exit_7day_dti: Optional[float] = None,
    ) -> "Trade":
        """Copy finalized on the exit bar."""
        return replace(
            self,
            exit_date=exit_date,
            exit_price=exit_price,
            exit_index=exit_index,
            exit_reason=exit_reason,
            exit_dti=exit_dti,
            exit_7day_dti=exit_7day_dti,
            pl_percent=pl_percent,
            holding_days=holding_days,
            is_open=False,
        )


@dataclass(frozen=True)
class BacktestMetrics:
    """Summary statistics over one backtest's trades."""
    total_trades: int = 0  # Including the open trade, if any
    completed_trades: int = 0
    open_trades: int = 0
    wins: int = 0  # Completed trades with P/L > 0
    losses: int = 0
    win_rate: float = 0.0  # Percent of completed trades that won (0 when none)
    total_return: float = 0.0  # Sum of P/L % over all trades, open included
    avg_return: float = 0.0  # total_return / total_trades


@dataclass(frozen=True, eq=False)
class BacktestResult:
    """Results from one backtest run over one symbol."""
    trades: Tuple[Trade, ...]
    metrics: BacktestMetrics
    params: TradingParameters
    dti: np.ndarray = field(default_factory=lambda: np.zeros(0))
    seven_day: Optional[SevenDayDTI] = None  # None when the series was too short
    symbol: Optional[str] = None

    @property
    def open_trade(self) -> Optional[Trade]:
        """The trade still open at the last bar, if any (always the last trade)."""
        if self.trades and self.trades[-1].is_open:
            return self.trades[-1]
        return None

    @property
    def completed(self) -> Tuple[Trade, ...]:
        return tuple(t for t in self.trades if not t.is_open)

    @property
    def has_data(self) -> bool:
        return self.seven_day is not None


@dataclass(frozen=True, eq=False)
class Opportunity:
    """
    A symbol holding an open trade as of its last bar.

    Carries the open trade's entry data plus the win-rate context of the
    same historical run so callers can rank by setup reliability.
    """
    symbol: Optional[str]
    signal_date: pd.Timestamp  # Entry date of the open trade
    entry_price: float
    entry_dti: float
    entry_7day_dti: float
    current_date: pd.Timestamp
    current_price: float
    current_dti: float
    current_7day_dti: float
    current_pl_percent: float
    holding_days: int
    win_rate: float
    total_trades: int
    completed_trades: int
    backtest: BacktestResult
