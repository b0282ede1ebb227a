"""
Base indicator interface.

All indicators should follow this pattern:
1. Calculate values from OHLC bars
2. Provide values that can be used for signal generation
"""
from abc import ABC, abstractmethod
from typing import Optional
import pandas as pd


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from price data that can be used
    for signal generation. They do not generate signals directly.
    """

    @abstractmethod
    def calculate(self, bars: pd.DataFrame) -> pd.Series:
        """
        Calculate indicator values from OHLC bars.

        Args:
            bars: DataFrame with datetime index and High/Low columns

        Returns:
            Series with indicator values (same index as bars)
        """
        pass

    def get_value_at(self, bars: pd.DataFrame, timestamp: pd.Timestamp) -> Optional[float]:
        """
        Get indicator value at a specific timestamp.

        Args:
            bars: OHLC bars (must include data before timestamp)
            timestamp: Timestamp to get value for

        Returns:
            Indicator value at timestamp, or None if timestamp is not a bar
        """
        values = self.calculate(bars)
        if timestamp in values.index:
            val = values[timestamp]
            return None if pd.isna(val) else float(val)
        return None
