#!/usr/bin/env python3
"""
Single-symbol DTI backtest CLI.

Runs the DTI trade state machine over one price CSV and prints every trade
plus summary metrics.

Usage:
    python -m cli.backtest data/AAPL.csv
    python -m cli.backtest data/AAPL.csv --config configs/legacy_threshold.yaml
    python -m cli.backtest data/AAPL.csv --entry-threshold -40 --confirmation-mode positive
"""
import argparse
import logging
import sys
from pathlib import Path

from cli.common import add_parameter_arguments, describe_params, resolve_params, setup_logging
from dti_engine.data.loader import PriceLoader
from dti_engine.data.preparation import DataPreparationError
from dti_engine.evaluation.backtest import run_backtest
from dti_engine.evaluation.trade_analysis import aggregate_by_exit_reason, trades_to_dataframe
from dti_engine.shared.types import InvalidInputError

logger = logging.getLogger(__name__)


def print_trades(result) -> None:
    if not result.trades:
        print("No trades.")
        return
    print(f"{'#':>3}  {'Entry':<10}  {'Price':>10}  {'Exit':<10}  {'Price':>10}  "
          f"{'P/L %':>8}  {'Days':>4}  Reason")
    print("-" * 80)
    for n, t in enumerate(result.trades, 1):
        exit_date = t.exit_date.strftime('%Y-%m-%d') if t.exit_date is not None else "-"
        exit_price = f"{t.exit_price:10.2f}" if t.exit_price is not None else f"{'-':>10}"
        reason = t.exit_reason.value if t.exit_reason is not None else "OPEN"
        print(f"{n:>3}  {t.entry_date.strftime('%Y-%m-%d'):<10}  {t.entry_price:10.2f}  "
              f"{exit_date:<10}  {exit_price}  {t.pl_percent:8.2f}  {t.holding_days:>4}  {reason}")


def print_metrics(result) -> None:
    m = result.metrics
    print()
    print(f"Total trades:     {m.total_trades} ({m.completed_trades} completed, {m.open_trades} open)")
    print(f"Wins / losses:    {m.wins} / {m.losses}")
    print(f"Win rate:         {m.win_rate:.1f}%")
    print(f"Total return:     {m.total_return:.2f}%")
    print(f"Avg return:       {m.avg_return:.2f}%")
    if m.completed_trades:
        print()
        print("By exit reason:")
        for reason, stats in aggregate_by_exit_reason(result.trades).items():
            if stats["count"]:
                print(f"  {reason:<16} {stats['count']:>4} trades  win {stats['win_rate_pct']:5.1f}%  "
                      f"avg {stats['avg_pl_pct']:6.2f}%  {stats['avg_holding_days']:5.1f}d")


def main():
    parser = argparse.ArgumentParser(
        description="Backtest the DTI strategy on one price CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Default parameters (threshold 0, 7-day DTI rising vs previous period)
    python -m cli.backtest data/AAPL.csv

    # Legacy variant
    python -m cli.backtest data/AAPL.csv --preset legacy

    # Export trades
    python -m cli.backtest data/AAPL.csv --trades-csv out/aapl_trades.csv
        """
    )
    parser.add_argument("prices", type=Path, help="CSV with Date index and High/Low/Close columns")
    parser.add_argument("--start-date", help="First date to load (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="Last date to load (YYYY-MM-DD)")
    parser.add_argument("--symbol", help="Symbol name (default: file stem)")
    parser.add_argument("--trades-csv", type=Path, help="Write the trade list to this CSV")
    add_parameter_arguments(parser)

    args = parser.parse_args()
    setup_logging(args.log_file, args.verbose)

    try:
        params = resolve_params(args)
        prices = PriceLoader(args.prices).load(args.start_date, args.end_date, args.symbol)
        result = run_backtest(prices, params)
    except (InvalidInputError, DataPreparationError, FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    print("=" * 80)
    print(f"DTI BACKTEST: {prices.symbol} ({len(prices)} bars)")
    print(describe_params(params))
    print("=" * 80)
    print()
    print_trades(result)
    print_metrics(result)

    if args.trades_csv:
        args.trades_csv.parent.mkdir(parents=True, exist_ok=True)
        trades_to_dataframe(result.trades).to_csv(args.trades_csv, index=False)
        print()
        print(f"Trades written to: {args.trades_csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
