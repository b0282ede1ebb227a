"""
DataFrame-facing indicator implementations following the Indicator interface.

Thin wrappers over the array functions for callers that hold OHLC bars as
a DataFrame (the CSV loader's shape).
"""
import pandas as pd

from .base import Indicator
from .seven_day import calculate_7day_dti
from .technical import calculate_dti
from ..shared.defaults import DTI_R, DTI_S, DTI_U
from ..shared.types import InvalidInputError


def _column(bars: pd.DataFrame, name: str) -> pd.Series:
    for col in bars.columns:
        if str(col).lower() == name:
            return bars[col]
    raise InvalidInputError(f"Column '{name}' not found. Available: {list(bars.columns)}")


class DTIIndicator(Indicator):
    """Daily Directional Trend Index."""

    def __init__(self, r: int = DTI_R, s: int = DTI_S, u: int = DTI_U):
        self.r = r
        self.s = s
        self.u = u

    def calculate(self, bars: pd.DataFrame) -> pd.Series:
        """Calculate DTI values."""
        dti = calculate_dti(_column(bars, "high"), _column(bars, "low"), self.r, self.s, self.u)
        return pd.Series(dti, index=bars.index, name="dti")


class SevenDayDTIIndicator(Indicator):
    """7-day DTI broadcast to daily bars."""

    def __init__(self, r: int = DTI_R, s: int = DTI_S, u: int = DTI_U):
        self.r = r
        self.s = s
        self.u = u

    def calculate(self, bars: pd.DataFrame) -> pd.Series:
        """Calculate 7-day DTI values at daily resolution."""
        result = calculate_7day_dti(
            bars.index, _column(bars, "high"), _column(bars, "low"), self.r, self.s, self.u
        )
        return pd.Series(result.daily_7day_dti, index=bars.index, name="dti_7day")
