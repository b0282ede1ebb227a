"""
Tests for price frame validation.
"""
import numpy as np
import pandas as pd
import pytest

from dti_engine.data.preparation import DataPreparationError, resolve_columns, validate_price_frame


def _frame(dates=("2024-01-02", "2024-01-01", "2024-01-03")):
    n = len(dates)
    return pd.DataFrame(
        {"High": np.arange(n) + 2.0, "Low": np.arange(n) + 1.0, "Close": np.arange(n) + 1.5},
        index=pd.to_datetime(list(dates)),
    )


class TestValidatePriceFrame:
    def test_sorts(self):
        df = validate_price_frame(_frame())
        assert df.index.is_monotonic_increasing

    def test_empty(self):
        with pytest.raises(DataPreparationError, match="No price data"):
            validate_price_frame(_frame(dates=()))

    def test_missing_column(self):
        with pytest.raises(DataPreparationError, match="Missing required columns"):
            validate_price_frame(_frame().drop(columns=["Low"]))

    def test_nan(self):
        df = _frame()
        df.iloc[1, df.columns.get_loc("Close")] = np.nan
        with pytest.raises(DataPreparationError, match="missing values"):
            validate_price_frame(df)

    @pytest.mark.parametrize("value", [0.0, -3.0])
    def test_non_positive_price(self, value):
        df = _frame()
        df.iloc[0, df.columns.get_loc("Low")] = value
        with pytest.raises(DataPreparationError, match="non-positive"):
            validate_price_frame(df)

    def test_duplicate_dates(self):
        with pytest.raises(DataPreparationError, match="Duplicate dates"):
            validate_price_frame(_frame(dates=("2024-01-01", "2024-01-01", "2024-01-02")))

    def test_non_datetime_index(self):
        df = _frame().reset_index(drop=True)
        with pytest.raises(DataPreparationError, match="DatetimeIndex"):
            validate_price_frame(df)


def test_resolve_columns_case_insensitive():
    df = pd.DataFrame(columns=["date", "HIGH", "low", "Close"])
    assert resolve_columns(df) == {"High": "HIGH", "Low": "low", "Close": "Close"}
