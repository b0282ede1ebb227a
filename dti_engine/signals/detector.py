"""
Raw DTI signal detection and latest-bar analysis.

Unlike the backtest engine this does not track trade state: every bar that
satisfies the entry rule is reported as a BUY, every 7-day reversal as a
SELL. Useful for charting and for a quick "does the last bar signal" check.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd

from .config import TradingParameters
from .rules import is_entry_signal
from ..indicators.seven_day import SevenDayDTI, calculate_7day_dti
from ..indicators.technical import calculate_dti
from ..shared.types import InvalidInputError, PriceSeries, SignalType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DTISignal:
    """A single raw entry (BUY) or exit (SELL) signal."""
    index: int
    timestamp: Optional[pd.Timestamp]
    signal_type: SignalType
    dti: float
    seven_day_dti: float


@dataclass(frozen=True)
class SymbolAnalysis:
    """Latest indicator values and raw signal history for one symbol."""
    symbol: Optional[str]
    current_price: float
    current_dti: float
    current_7day_dti: float
    is_entry_signal: bool  # Last bar satisfies the entry rule (no warm-up / trade state)
    signals: List[DTISignal] = field(default_factory=list)

    @property
    def entry_signals(self) -> int:
        return sum(1 for s in self.signals if s.signal_type is SignalType.BUY)

    @property
    def exit_signals(self) -> int:
        return sum(1 for s in self.signals if s.signal_type is SignalType.SELL)

    @property
    def last_signal(self) -> Optional[DTISignal]:
        return self.signals[-1] if self.signals else None


def detect_trade_signals(
    dti: np.ndarray,
    seven_day: SevenDayDTI,
    params: Optional[TradingParameters] = None,
    dates: Optional[pd.DatetimeIndex] = None,
) -> List[DTISignal]:
    """
    Detect raw entry and exit signals bar by bar.

    Args:
        dti: Daily DTI values
        seven_day: 7-day DTI result for the same bars
        params: Trading parameters (default: TradingParameters())
        dates: Optional bar dates to stamp on the signals

    Returns:
        Signals in bar order (an entry and an exit may share a bar)

    Raises:
        InvalidInputError: If dti and the 7-day series have different lengths
    """
    params = params or TradingParameters()
    daily_7day = seven_day.daily_7day_dti
    if len(dti) != len(daily_7day):
        raise InvalidInputError(
            f"dti and daily 7-day DTI must have the same length, got {len(dti)} and {len(daily_7day)}"
        )

    signals: List[DTISignal] = []
    for i in range(1, len(dti)):
        timestamp = dates[i] if dates is not None else None
        if is_entry_signal(dti[i], dti[i - 1], daily_7day[i], seven_day.previous_period_dti(i), params):
            signals.append(DTISignal(i, timestamp, SignalType.BUY, float(dti[i]), float(daily_7day[i])))
        if daily_7day[i - 1] > 0 and daily_7day[i] <= 0:
            signals.append(DTISignal(i, timestamp, SignalType.SELL, float(dti[i]), float(daily_7day[i])))
    return signals


def analyze_symbol(prices: PriceSeries, params: Optional[TradingParameters] = None) -> SymbolAnalysis:
    """
    Compute DTI and 7-day DTI for a symbol and summarize the latest bar.

    Args:
        prices: Chronological price series (at least one bar)
        params: Trading parameters (default: TradingParameters())

    Returns:
        SymbolAnalysis for the last bar
    """
    params = params or TradingParameters()
    dti = calculate_dti(prices.high, prices.low, params.r, params.s, params.u)
    seven_day = calculate_7day_dti(prices.dates, prices.high, prices.low, params.r, params.s, params.u)
    signals = detect_trade_signals(dti, seven_day, params, prices.dates)

    last = len(dti) - 1
    entry_now = last > 0 and is_entry_signal(
        dti[last], dti[last - 1], seven_day.daily_7day_dti[last],
        seven_day.previous_period_dti(last), params,
    )
    logger.debug("%s: %d raw signals, entry on last bar: %s", prices.symbol, len(signals), entry_now)
    return SymbolAnalysis(
        symbol=prices.symbol,
        current_price=float(prices.close[last]),
        current_dti=float(dti[last]),
        current_7day_dti=float(seven_day.daily_7day_dti[last]),
        is_entry_signal=bool(entry_now),
        signals=signals,
    )
