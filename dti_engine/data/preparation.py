"""
Price frame validation.

Checks a loaded OHLC frame before it becomes a PriceSeries. Fail-fast:
raises on the first class of problem found.
"""
from __future__ import annotations

from typing import Dict, List

import pandas as pd

REQUIRED_COLUMNS = ("High", "Low", "Close")


class DataPreparationError(Exception):
    """Raised when price data validation fails."""
    pass


def resolve_columns(df: pd.DataFrame, required=REQUIRED_COLUMNS) -> Dict[str, str]:
    """
    Map canonical column names to the frame's actual headers (case-insensitive).

    Raises:
        DataPreparationError: If any required column is missing
    """
    lookup = {str(c).lower(): c for c in df.columns}
    missing: List[str] = [name for name in required if name.lower() not in lookup]
    if missing:
        raise DataPreparationError(
            f"Missing required columns {missing}. Available: {list(df.columns)}"
        )
    return {name: lookup[name.lower()] for name in required}


def validate_price_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate an OHLC frame with a datetime index.

    Args:
        df: Frame indexed by date with High/Low/Close columns (any case)

    Returns:
        The frame sorted by date

    Raises:
        DataPreparationError: On empty data, missing columns, NaNs or
            non-positive prices in required columns, a non-datetime index or
            duplicate dates
    """
    if df is None or len(df) == 0:
        raise DataPreparationError("No price data")
    columns = resolve_columns(df)
    if not isinstance(df.index, pd.DatetimeIndex):
        raise DataPreparationError(f"Index must be a DatetimeIndex, got {type(df.index).__name__}")

    duplicated = df.index[df.index.duplicated()]
    if len(duplicated) > 0:
        raise DataPreparationError(
            f"Duplicate dates in price data: {[d.strftime('%Y-%m-%d') for d in duplicated[:5]]}"
        )

    for name, actual in columns.items():
        nans = int(df[actual].isna().sum())
        if nans:
            raise DataPreparationError(f"Column '{name}' has {nans} missing values")
        non_positive = int((df[actual] <= 0).sum())
        if non_positive:
            raise DataPreparationError(f"Column '{name}' has {non_positive} non-positive prices")

    return df.sort_index()
