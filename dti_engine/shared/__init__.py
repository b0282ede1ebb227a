"""
Shared types and defaults for the DTI engine.

This module provides:
- PriceSeries container and InvalidInputError
- Centralized default values for all indicator and backtest parameters
- Trading-day calendar helpers
"""
from .types import PriceSeries, InvalidInputError, SignalType, ExitReason, ConfirmationMode
from .defaults import (
    DTI_R, DTI_S, DTI_U,
    SEVEN_DAY_PERIOD_LENGTH,
    ENTRY_THRESHOLD, LEGACY_ENTRY_THRESHOLD,
    ENABLE_7DAY_CONFIRMATION, WARMUP_MONTHS,
    TAKE_PROFIT_PERCENT, STOP_LOSS_PERCENT, MAX_HOLDING_DAYS,
    ENABLE_7DAY_EXIT, MIN_BARS,
    SIGNAL_FRESHNESS_TRADING_DAYS,
)
from .trading_days import days_between, is_within_trading_days

__all__ = [
    'PriceSeries',
    'InvalidInputError',
    'SignalType',
    'ExitReason',
    'ConfirmationMode',
    'DTI_R', 'DTI_S', 'DTI_U',
    'SEVEN_DAY_PERIOD_LENGTH',
    'ENTRY_THRESHOLD', 'LEGACY_ENTRY_THRESHOLD',
    'ENABLE_7DAY_CONFIRMATION', 'WARMUP_MONTHS',
    'TAKE_PROFIT_PERCENT', 'STOP_LOSS_PERCENT', 'MAX_HOLDING_DAYS',
    'ENABLE_7DAY_EXIT', 'MIN_BARS',
    'SIGNAL_FRESHNESS_TRADING_DAYS',
    'days_between',
    'is_within_trading_days',
]
