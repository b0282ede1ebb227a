"""
Calendar helpers: whole-day distances and trading-day freshness windows.

Trading days are Monday to Friday; exchange holidays are not modelled.
"""
from datetime import timedelta
from typing import Optional

import pandas as pd

from .defaults import SIGNAL_FRESHNESS_TRADING_DAYS


def days_between(start, end) -> int:
    """Whole calendar days from start to end (floored; negative if end < start)."""
    delta = pd.Timestamp(end) - pd.Timestamp(start)
    return int(delta // pd.Timedelta(days=1))


def is_within_trading_days(
    signal_date,
    days_to_check: int = SIGNAL_FRESHNESS_TRADING_DAYS,
    today: Optional[object] = None,
) -> bool:
    """
    Check whether signal_date falls within the last N trading days.

    Walks backward from today one calendar day at a time, counting
    weekdays. Returns True as soon as the walk reaches signal_date with the
    count still <= days_to_check, False once the count exceeds it.

    Args:
        signal_date: Date of the signal (str, datetime or Timestamp)
        days_to_check: Number of trading days that still count as fresh
        today: Reference date (default: now)

    Returns:
        True if the signal is fresh, False otherwise (also when signal_date
        lies after today)
    """
    signal = pd.Timestamp(signal_date).normalize()
    current = pd.Timestamp.now() if today is None else pd.Timestamp(today)
    current = current.normalize()

    if signal > current:
        return False

    trading_days = 0
    day = current
    while day >= signal and trading_days <= days_to_check:
        if day.dayofweek < 5:
            trading_days += 1
        if day == signal:
            return trading_days <= days_to_check
        day = day - timedelta(days=1)

    return False
