"""
Shared types for the DTI engine.

This module consolidates the price-series container and the input error
that are used across the indicator, signal and evaluation modules.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd


class InvalidInputError(ValueError):
    """Raised on mismatched or empty arrays and non-positive periods."""
    pass


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"


class ExitReason(Enum):
    """Why a simulated trade was closed."""
    TAKE_PROFIT = "Take Profit"
    STOP_LOSS = "Stop Loss"
    MAX_DAYS = "Max Days"
    SEVEN_DAY_DTI = "7-Day DTI Exit"


class ConfirmationMode(Enum):
    """Which 7-day DTI predicate confirms a daily entry."""
    POSITIVE = "positive"  # current 7-day DTI > 0
    RISING_VS_PREV_PERIOD = "rising_vs_prev_period"  # current 7-day DTI > previous period's


ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]
DateLike = Union[str, datetime, pd.Timestamp]


def as_float_array(values: ArrayLike, name: str = "values") -> np.ndarray:
    """Convert a sequence to a 1-D float array; raises InvalidInputError otherwise."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


@dataclass(frozen=True, eq=False)
class PriceSeries:
    """
    Daily OHLC bars for one symbol, chronologically sorted.

    All arrays have equal length and dates are strictly increasing.
    High, low and close are finite and positive.
    Callers must sort before building (from_dataframe does this for them).
    """
    dates: pd.DatetimeIndex
    high: np.ndarray
    low: np.ndarray
    close: np.ndarray
    open: Optional[np.ndarray] = None
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        dates = pd.DatetimeIndex(pd.to_datetime(self.dates))
        high = as_float_array(self.high, "high")
        low = as_float_array(self.low, "low")
        close = as_float_array(self.close, "close")
        opn = as_float_array(self.open, "open") if self.open is not None else None

        n = len(dates)
        lengths = {"high": len(high), "low": len(low), "close": len(close)}
        if opn is not None:
            lengths["open"] = len(opn)
        mismatched = {k: v for k, v in lengths.items() if v != n}
        if mismatched:
            raise InvalidInputError(
                f"Price arrays must match dates length {n}, got {mismatched}"
            )
        if not dates.is_monotonic_increasing or dates.has_duplicates:
            raise InvalidInputError(
                "dates must be strictly increasing (sort the series chronologically first)"
            )
        for name, values in (("high", high), ("low", low), ("close", close)):
            if not np.all(np.isfinite(values)):
                raise InvalidInputError(f"{name} contains NaN or infinite values")
            if np.any(values <= 0):
                raise InvalidInputError(f"{name} must be positive, got min {values.min()}")

        object.__setattr__(self, "dates", dates)
        object.__setattr__(self, "high", high)
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "close", close)
        object.__setattr__(self, "open", opn)

    def __len__(self) -> int:
        return len(self.dates)

    @classmethod
    def from_arrays(
        cls,
        dates: Sequence[DateLike],
        high: ArrayLike,
        low: ArrayLike,
        close: ArrayLike,
        open: Optional[ArrayLike] = None,
        symbol: Optional[str] = None,
    ) -> "PriceSeries":
        """Build from parallel sequences (dates as strings, datetimes or Timestamps)."""
        return cls(
            dates=pd.DatetimeIndex(pd.to_datetime(list(dates))),
            high=high,
            low=low,
            close=close,
            open=open,
            symbol=symbol,
        )

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, symbol: Optional[str] = None) -> "PriceSeries":
        """
        Build from a DataFrame with a datetime index and High/Low/Close columns.

        The frame is sorted by index first. Column names are matched
        case-insensitively; Open is optional.
        """
        columns = {str(c).lower(): c for c in df.columns}
        missing = [c for c in ("high", "low", "close") if c not in columns]
        if missing:
            raise InvalidInputError(
                f"DataFrame missing required columns: {missing}. Available: {list(df.columns)}"
            )
        df = df.sort_index()
        opn = df[columns["open"]].to_numpy() if "open" in columns else None
        return cls(
            dates=pd.DatetimeIndex(pd.to_datetime(df.index)),
            high=df[columns["high"]].to_numpy(),
            low=df[columns["low"]].to_numpy(),
            close=df[columns["close"]].to_numpy(),
            open=opn,
            symbol=symbol,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Return the bars as a DataFrame (Open column only when present)."""
        data = {"High": self.high, "Low": self.low, "Close": self.close}
        if self.open is not None:
            data = {"Open": self.open, **data}
        return pd.DataFrame(data, index=self.dates)
