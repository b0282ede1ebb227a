"""
Shared CLI plumbing: logging setup and parameter resolution.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from dti_engine.signals.config import TradingParameters, PRESET_PARAMS, parse_confirmation_mode
from dti_engine.signals.config_loader import load_params_from_yaml


def setup_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Setup logging to stdout and optionally to file.

    Args:
        log_path: Path to log file (None = stdout only)
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def add_parameter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the parameter source and override flags shared by all commands."""
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config", "-c",
        type=Path,
        help="YAML parameter file (see configs/default.yaml)",
    )
    source.add_argument(
        "--preset",
        choices=sorted(PRESET_PARAMS),
        help="Named parameter preset",
    )
    parser.add_argument("--entry-threshold", type=float, help="Daily DTI entry threshold")
    parser.add_argument(
        "--confirmation-mode",
        help="7-day confirmation: positive or rising_vs_prev_period",
    )
    parser.add_argument(
        "--no-7day-confirmation",
        action="store_true",
        help="Disable the 7-day DTI entry confirmation",
    )
    parser.add_argument("--take-profit", type=float, help="Take profit percent")
    parser.add_argument("--stop-loss", type=float, help="Stop loss percent")
    parser.add_argument("--max-days", type=int, help="Max holding days")
    parser.add_argument(
        "--no-7day-exit",
        action="store_true",
        help="Disable the 7-day DTI reversal exit",
    )
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def resolve_params(args: argparse.Namespace) -> TradingParameters:
    """
    Build TradingParameters from --config / --preset plus explicit flag overrides.

    Raises:
        FileNotFoundError: If --config does not exist
        ValueError: If the config or an override is invalid
    """
    if args.config:
        params = load_params_from_yaml(args.config)
    elif args.preset:
        params = PRESET_PARAMS[args.preset]
    else:
        params = TradingParameters()

    return params.with_overrides(
        entry_threshold=args.entry_threshold,
        confirmation_mode=(
            parse_confirmation_mode(args.confirmation_mode) if args.confirmation_mode else None
        ),
        enable_7day_confirmation=False if args.no_7day_confirmation else None,
        take_profit_percent=args.take_profit,
        stop_loss_percent=args.stop_loss,
        max_holding_days=args.max_days,
        enable_7day_exit=False if args.no_7day_exit else None,
    )


def describe_params(params: TradingParameters) -> str:
    mode = params.confirmation_mode.value if params.enable_7day_confirmation else "off"
    return (
        f"DTI({params.r},{params.s},{params.u}) entry<{params.entry_threshold:g} "
        f"7d-confirm={mode} TP={params.take_profit_percent:g}% SL={params.stop_loss_percent:g}% "
        f"max={params.max_holding_days}d 7d-exit={'on' if params.enable_7day_exit else 'off'}"
    )
