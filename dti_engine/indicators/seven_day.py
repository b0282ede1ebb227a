"""
Seven-day aggregation of the DTI.

Daily bars are cut into consecutive chunks of seven by position (not by
calendar week). DTI is recomputed on the chunk highs/lows and each chunk's
value is broadcast back onto every daily bar it covers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..shared.defaults import DTI_R, DTI_S, DTI_U, SEVEN_DAY_PERIOD_LENGTH
from ..shared.types import ArrayLike, InvalidInputError, as_float_array
from .technical import calculate_dti


@dataclass(frozen=True)
class SevenDayPeriod:
    """One aggregated chunk of daily bars, [start_index, end_index] inclusive."""
    start_index: int
    end_index: int
    start_date: pd.Timestamp
    end_date: pd.Timestamp
    high: float  # Max high in chunk
    low: float  # Min low in chunk
    dti: float = 0.0  # DTI of this chunk in the aggregated series

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1


@dataclass(frozen=True, eq=False)
class SevenDayDTI:
    """Aggregated periods, their DTI, and the DTI broadcast to daily resolution."""
    periods: List[SevenDayPeriod]
    seven_day_dti: np.ndarray
    daily_7day_dti: np.ndarray
    period_length: int = SEVEN_DAY_PERIOD_LENGTH

    def period_index_at(self, index: int) -> int:
        """Index of the period containing daily bar `index`."""
        if index < 0 or index >= len(self.daily_7day_dti):
            raise IndexError(
                f"Daily index {index} outside [0, {len(self.daily_7day_dti) - 1}]"
            )
        return index // self.period_length

    def previous_period_dti(self, index: int) -> Optional[float]:
        """
        DTI of the period before the one containing daily bar `index`.

        Consecutive days share one period value, so this is not the
        previous array slot of daily_7day_dti. None for the first period.
        """
        p = self.period_index_at(index)
        if p == 0:
            return None
        return float(self.seven_day_dti[p - 1])


def aggregate_to_7day(
    dates: Sequence,
    high: ArrayLike,
    low: ArrayLike,
    period_length: int = SEVEN_DAY_PERIOD_LENGTH,
) -> List[SevenDayPeriod]:
    """
    Partition daily bars into consecutive fixed-size periods.

    Args:
        dates: Bar dates (chronological)
        high: High prices
        low: Low prices
        period_length: Bars per period (the last period may be shorter)

    Returns:
        List of SevenDayPeriod (dti left at 0; see calculate_7day_dti)
    """
    date_index = pd.DatetimeIndex(pd.to_datetime(list(dates)))
    high_arr = as_float_array(high, "high")
    low_arr = as_float_array(low, "low")
    n = len(date_index)
    if n == 0:
        raise InvalidInputError("7-day aggregation requires at least one bar")
    if len(high_arr) != n or len(low_arr) != n:
        raise InvalidInputError(
            f"dates, high and low must have the same length, got "
            f"{n}, {len(high_arr)} and {len(low_arr)}"
        )
    if period_length <= 0:
        raise InvalidInputError(f"period_length must be > 0, got {period_length}")

    periods: List[SevenDayPeriod] = []
    for start in range(0, n, period_length):
        end = min(start + period_length, n) - 1
        periods.append(SevenDayPeriod(
            start_index=start,
            end_index=end,
            start_date=date_index[start],
            end_date=date_index[end],
            high=float(high_arr[start:end + 1].max()),
            low=float(low_arr[start:end + 1].min()),
        ))
    return periods


def calculate_7day_dti(
    dates: Sequence,
    high: ArrayLike,
    low: ArrayLike,
    r: int = DTI_R,
    s: int = DTI_S,
    u: int = DTI_U,
    period_length: int = SEVEN_DAY_PERIOD_LENGTH,
) -> SevenDayDTI:
    """
    Calculate the 7-day DTI and broadcast it to daily resolution.

    Args:
        dates: Bar dates (chronological)
        high: High prices
        low: Low prices
        r, s, u: DTI EMA periods (same as the daily DTI)
        period_length: Bars per aggregated period

    Returns:
        SevenDayDTI with periods, per-period DTI and daily broadcast
    """
    raw_periods = aggregate_to_7day(dates, high, low, period_length)
    seven_day_dti = calculate_dti(
        [p.high for p in raw_periods],
        [p.low for p in raw_periods],
        r, s, u,
    )

    periods: List[SevenDayPeriod] = []
    daily = np.zeros(raw_periods[-1].end_index + 1)
    for period, value in zip(raw_periods, seven_day_dti):
        periods.append(SevenDayPeriod(
            start_index=period.start_index,
            end_index=period.end_index,
            start_date=period.start_date,
            end_date=period.end_date,
            high=period.high,
            low=period.low,
            dti=float(value),
        ))
        daily[period.start_index:period.end_index + 1] = value

    return SevenDayDTI(
        periods=periods,
        seven_day_dti=seven_day_dti,
        daily_7day_dti=daily,
        period_length=period_length,
    )
