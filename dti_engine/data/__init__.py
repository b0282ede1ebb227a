"""
Data loading module.

Loads daily OHLC price CSVs into PriceSeries and validates them.
"""
from .loader import PriceLoader, list_price_files, load_price_directory
from .preparation import DataPreparationError, validate_price_frame, resolve_columns, REQUIRED_COLUMNS

__all__ = [
    'PriceLoader',
    'list_price_files',
    'load_price_directory',
    'DataPreparationError',
    'validate_price_frame',
    'resolve_columns',
    'REQUIRED_COLUMNS',
]
