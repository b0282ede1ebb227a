import sys

import numpy as np
import pandas as pd
import pytest

from cli import backtest as cli_backtest


@pytest.fixture
def prices_csv(tmp_path):
    rng = np.random.default_rng(9)
    n = 400
    close = 100 * np.exp(np.cumsum(rng.normal(0, 0.015, n)))
    df = pd.DataFrame(
        {"High": close * 1.01, "Low": close * 0.99, "Close": close},
        index=pd.Index(pd.bdate_range("2021-01-01", periods=n), name="Date"),
    )
    path = tmp_path / "RW.csv"
    df.to_csv(path)
    return path


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli_backtest, "setup_logging", lambda log_path=None, verbose=False: None)


def test_cli_backtest_prints_trades_and_metrics(monkeypatch, prices_csv, capsys):
    monkeypatch.setattr(sys, "argv", ["backtest", str(prices_csv)])
    exit_code = cli_backtest.main()
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "DTI BACKTEST: RW (400 bars)" in out
    assert "Win rate:" in out
    assert "entry<0" in out


def test_cli_backtest_overrides_and_trades_csv(monkeypatch, prices_csv, tmp_path, capsys):
    trades_csv = tmp_path / "out" / "trades.csv"
    monkeypatch.setattr(sys, "argv", [
        "backtest", str(prices_csv),
        "--entry-threshold", "-40",
        "--confirmation-mode", "positive",
        "--trades-csv", str(trades_csv),
    ])
    exit_code = cli_backtest.main()
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "entry<-40" in out
    assert "7d-confirm=positive" in out
    df = pd.read_csv(trades_csv)
    assert "exit_reason" in df.columns


def test_cli_backtest_preset(monkeypatch, prices_csv, capsys):
    monkeypatch.setattr(sys, "argv", ["backtest", str(prices_csv), "--preset", "legacy"])
    assert cli_backtest.main() == 0
    assert "entry<-40" in capsys.readouterr().out


def test_cli_backtest_config_file(monkeypatch, prices_csv, tmp_path, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("exit:\n  take_profit_percent: 12\n")
    monkeypatch.setattr(sys, "argv", ["backtest", str(prices_csv), "--config", str(cfg)])
    assert cli_backtest.main() == 0
    assert "TP=12%" in capsys.readouterr().out


def test_cli_backtest_missing_file(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", ["backtest", str(tmp_path / "missing.csv")])
    assert cli_backtest.main() == 1


def test_cli_backtest_bad_config(monkeypatch, prices_csv, tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("exit:\n  stop_loss_percent: -1\n")
    monkeypatch.setattr(sys, "argv", ["backtest", str(prices_csv), "--config", str(cfg)])
    assert cli_backtest.main() == 1
