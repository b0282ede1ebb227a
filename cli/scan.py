#!/usr/bin/env python3
"""
Multi-symbol DTI opportunity scan CLI.

Backtests every price CSV given (directories are expanded to their CSV
files) and lists the symbols whose DTI trade is still open on the last bar,
best current P/L first.

Usage:
    python -m cli.scan data/tickers/
    python -m cli.scan data/AAPL.csv data/MSFT.csv --min-win-rate 60 --within-days 2
"""
import argparse
import logging
import sys
from pathlib import Path

from cli.common import add_parameter_arguments, describe_params, resolve_params, setup_logging
from dti_engine.data.loader import load_price_directory
from dti_engine.data.preparation import DataPreparationError
from dti_engine.evaluation.opportunity import scan_opportunities
from dti_engine.shared.defaults import SIGNAL_FRESHNESS_TRADING_DAYS
from dti_engine.shared.types import InvalidInputError

logger = logging.getLogger(__name__)


def print_opportunities(scan) -> None:
    if not scan.opportunities:
        print("No open DTI trades.")
        return
    print(f"{'Symbol':<10}  {'Signal':<10}  {'Entry':>10}  {'Current':>10}  {'P/L %':>8}  "
          f"{'Days':>4}  {'Win %':>6}  {'Trades':>6}")
    print("-" * 80)
    for o in scan.opportunities:
        print(f"{str(o.symbol):<10}  {o.signal_date.strftime('%Y-%m-%d'):<10}  {o.entry_price:10.2f}  "
              f"{o.current_price:10.2f}  {o.current_pl_percent:8.2f}  {o.holding_days:>4}  "
              f"{o.win_rate:6.1f}  {o.completed_trades:>6}")


def main():
    parser = argparse.ArgumentParser(
        description="Scan price CSVs for open DTI trades",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="+", type=Path, help="Price CSV files or directories of CSVs")
    parser.add_argument("--start-date", help="First date to load (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="Last date to load (YYYY-MM-DD)")
    parser.add_argument("--min-win-rate", type=float, help="Minimum historical win rate (percent)")
    parser.add_argument(
        "--within-days",
        type=int,
        nargs="?",
        const=SIGNAL_FRESHNESS_TRADING_DAYS,
        help=f"Only signals from the last N trading days (default N: {SIGNAL_FRESHNESS_TRADING_DAYS})",
    )
    parser.add_argument("--today", help="Reference date for --within-days (default: today)")
    parser.add_argument("--workers", type=int, help="Parallel workers (default: cpu count)")
    add_parameter_arguments(parser)

    args = parser.parse_args()
    setup_logging(args.log_file, args.verbose)

    try:
        params = resolve_params(args)
        load_skipped = {}
        series = load_price_directory(args.paths, args.start_date, args.end_date, skipped=load_skipped)
    except (InvalidInputError, DataPreparationError, FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if not series:
        if load_skipped:
            logger.error("No valid price CSVs in %s", [str(p) for p in args.paths])
        else:
            logger.error("No price CSVs found in %s", [str(p) for p in args.paths])
        return 1

    scan = scan_opportunities(
        series,
        params,
        max_workers=args.workers,
        min_win_rate=args.min_win_rate,
        within_trading_days=args.within_days,
        today=args.today,
    )
    # Files rejected at load time count as scanned and skipped
    scan.scanned += len(load_skipped)
    scan.skipped.update(load_skipped)

    print("=" * 80)
    print(f"DTI SCAN: {scan.scanned} symbols, {len(scan.opportunities)} open trades")
    print(describe_params(params))
    print("=" * 80)
    print()
    print_opportunities(scan)
    if scan.skipped:
        print()
        print(f"Skipped {len(scan.skipped)}: {', '.join(sorted(scan.skipped))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
