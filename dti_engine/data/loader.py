"""
CSV price loader.

Loads daily OHLC bars for one symbol from a CSV file with a date index,
with optional date range filtering.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from .preparation import DataPreparationError, validate_price_frame
from ..shared.types import InvalidInputError, PriceSeries

logger = logging.getLogger(__name__)


class PriceLoader:
    """
    Loads a PriceSeries from a CSV file.

    The first column is the date; High, Low and Close are required (header
    case does not matter), Open is kept when present.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the price loader.

        Args:
            data_path: Path to the CSV file containing the data
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

    def load_frame(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    ) -> pd.DataFrame:
        """Load and validate the raw frame, filtered to [start_date, end_date]."""
        df = pd.read_csv(
            self.data_path,
            index_col=0,
            parse_dates=True,
        )

        if not isinstance(df.index, pd.DatetimeIndex):
            df.index = pd.to_datetime(df.index)

        df = validate_price_frame(df)

        if start_date is not None:
            df = df[df.index >= pd.to_datetime(start_date)]
        if end_date is not None:
            df = df[df.index <= pd.to_datetime(end_date)]
        return df

    def load(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        symbol: Optional[str] = None,
    ) -> PriceSeries:
        """
        Load a PriceSeries with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.
            symbol: Symbol to attach (default: the file stem)

        Returns:
            PriceSeries in chronological order

        Raises:
            DataPreparationError: If the CSV fails validation
        """
        df = self.load_frame(start_date, end_date)
        symbol = symbol or self.data_path.stem
        logger.debug("Loaded %d bars for %s from %s", len(df), symbol, self.data_path)
        return PriceSeries.from_dataframe(df, symbol=symbol)


def list_price_files(directory: Union[str, Path]) -> List[Path]:
    """Return sorted CSV files in directory. Empty if the directory is missing."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(directory.glob("*.csv"))


def load_price_directory(
    paths: List[Union[str, Path]],
    start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    skipped: Optional[Dict[str, str]] = None,
) -> Dict[str, PriceSeries]:
    """
    Load every CSV named by paths; directories are expanded to their CSV files.

    Args:
        paths: CSV files or directories of CSV files
        start_date: Start date for filtering (inclusive)
        end_date: End date for filtering (inclusive)
        skipped: If given, files that fail validation are logged and recorded
            here (symbol -> reason) instead of raising

    Returns:
        Mapping symbol (file stem) -> PriceSeries

    Raises:
        DataPreparationError: If two files share a stem, or a file fails
            validation and skipped is None
    """
    files: List[Path] = []
    for p in paths:
        p = Path(p)
        files.extend(list_price_files(p) if p.is_dir() else [p])

    seen: Dict[str, Path] = {}
    for f in files:
        if f.stem in seen and seen[f.stem].resolve() != f.resolve():
            raise DataPreparationError(
                f"Duplicate symbol '{f.stem}': {seen[f.stem]} and {f}"
            )
        seen[f.stem] = f

    series: Dict[str, PriceSeries] = {}
    for symbol, f in seen.items():
        try:
            series[symbol] = PriceLoader(f).load(start_date, end_date)
        except (DataPreparationError, InvalidInputError) as e:
            if skipped is None:
                raise
            logger.warning("Skipping %s: %s", f, e)
            skipped[symbol] = f"{type(e).__name__}: {e}"
    return series
