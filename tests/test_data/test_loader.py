"""
Tests for the CSV price loader.
"""
import numpy as np
import pandas as pd
import pytest

from dti_engine.data.loader import PriceLoader, list_price_files, load_price_directory
from dti_engine.data.preparation import DataPreparationError


def _write_csv(path, n=30, start="2024-01-01", headers=("Date", "Open", "High", "Low", "Close", "Volume")):
    dates = pd.date_range(start, periods=n, freq="B")
    close = 100 + np.arange(n, dtype=float)
    df = pd.DataFrame(
        {
            headers[1]: close - 0.5,
            headers[2]: close + 1,
            headers[3]: close - 1,
            headers[4]: close,
            headers[5]: 1000,
        },
        index=pd.Index(dates, name=headers[0]),
    )
    df.to_csv(path)
    return df


class TestPriceLoader:
    """Test loading PriceSeries from CSV."""

    def test_load(self, tmp_path):
        path = tmp_path / "AAPL.csv"
        _write_csv(path)
        prices = PriceLoader(path).load()
        assert len(prices) == 30
        assert prices.symbol == "AAPL"
        assert prices.close[0] == 100.0
        assert prices.open is not None

    def test_lowercase_headers(self, tmp_path):
        path = tmp_path / "x.csv"
        _write_csv(path, headers=("date", "open", "high", "low", "close", "volume"))
        prices = PriceLoader(path).load(symbol="XYZ")
        assert prices.symbol == "XYZ"
        assert prices.high[0] == 101.0

    def test_date_filter(self, tmp_path):
        path = tmp_path / "f.csv"
        _write_csv(path)
        prices = PriceLoader(path).load(start_date="2024-01-08", end_date="2024-01-12")
        assert len(prices) == 5
        assert prices.dates[0] == pd.Timestamp("2024-01-08")
        assert prices.dates[-1] == pd.Timestamp("2024-01-12")

    def test_unsorted_file(self, tmp_path):
        path = tmp_path / "u.csv"
        df = _write_csv(path)
        df.iloc[::-1].to_csv(path)
        prices = PriceLoader(path).load()
        assert prices.dates.is_monotonic_increasing

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PriceLoader(tmp_path / "nope.csv")

    def test_missing_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        pd.DataFrame(
            {"High": [1.0], "Close": [1.0]},
            index=pd.Index(pd.to_datetime(["2024-01-01"]), name="Date"),
        ).to_csv(path)
        with pytest.raises(DataPreparationError):
            PriceLoader(path).load()


class TestDirectoryLoading:
    def test_list_price_files(self, tmp_path):
        _write_csv(tmp_path / "b.csv")
        _write_csv(tmp_path / "a.csv")
        (tmp_path / "notes.txt").write_text("x")
        assert [p.name for p in list_price_files(tmp_path)] == ["a.csv", "b.csv"]
        assert list_price_files(tmp_path / "missing") == []

    def test_load_price_directory_mixes_files_and_dirs(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        _write_csv(sub / "A.csv")
        _write_csv(sub / "B.csv")
        _write_csv(tmp_path / "C.csv")
        series = load_price_directory([sub, tmp_path / "C.csv"])
        assert sorted(series) == ["A", "B", "C"]
        assert series["C"].symbol == "C"

    def test_duplicate_stem_raises(self, tmp_path):
        (tmp_path / "one").mkdir()
        (tmp_path / "two").mkdir()
        _write_csv(tmp_path / "one" / "AAA.csv")
        _write_csv(tmp_path / "two" / "AAA.csv")
        with pytest.raises(DataPreparationError, match="Duplicate symbol 'AAA'"):
            load_price_directory([tmp_path / "one", tmp_path / "two"])

    def test_same_file_twice_is_loaded_once(self, tmp_path):
        _write_csv(tmp_path / "AAA.csv")
        series = load_price_directory([tmp_path, tmp_path / "AAA.csv"])
        assert list(series) == ["AAA"]

    def test_invalid_file_raises_by_default(self, tmp_path):
        df = _write_csv(tmp_path / "ZERO.csv")
        df.iloc[3, df.columns.get_loc("Close")] = 0.0
        df.to_csv(tmp_path / "ZERO.csv")
        with pytest.raises(DataPreparationError, match="non-positive"):
            load_price_directory([tmp_path])

    def test_invalid_file_recorded_when_skipping(self, tmp_path):
        _write_csv(tmp_path / "GOOD.csv")
        df = _write_csv(tmp_path / "ZERO.csv")
        df.iloc[3, df.columns.get_loc("Close")] = 0.0
        df.to_csv(tmp_path / "ZERO.csv")
        skipped = {}
        series = load_price_directory([tmp_path], skipped=skipped)
        assert list(series) == ["GOOD"]
        assert list(skipped) == ["ZERO"]
        assert "non-positive" in skipped["ZERO"]
