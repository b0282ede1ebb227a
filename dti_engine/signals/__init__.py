"""
Signal generation module.

Trading parameters, entry/exit rules and raw signal detection for the DTI
strategy. The backtest engine in evaluation/ drives these rules through
its trade state machine.
"""
from .config import (
    TradingParameters,
    DEFAULT_PARAMS,
    LEGACY_PARAMS,
    PRESET_PARAMS,
    parse_confirmation_mode,
)
from .config_loader import load_params_from_yaml, save_params_to_yaml, params_from_dict
from .rules import (
    BarContext,
    ExitRule,
    TakeProfitRule,
    StopLossRule,
    MaxHoldingRule,
    SevenDayReversalRule,
    get_exit_rules,
    first_exit_reason,
    is_entry_signal,
    seven_day_confirms,
    pl_percent,
    warmup_end,
)
from .detector import DTISignal, SymbolAnalysis, detect_trade_signals, analyze_symbol

__all__ = [
    'TradingParameters',
    'DEFAULT_PARAMS',
    'LEGACY_PARAMS',
    'PRESET_PARAMS',
    'parse_confirmation_mode',
    'load_params_from_yaml',
    'save_params_to_yaml',
    'params_from_dict',
    'BarContext',
    'ExitRule',
    'TakeProfitRule',
    'StopLossRule',
    'MaxHoldingRule',
    'SevenDayReversalRule',
    'get_exit_rules',
    'first_exit_reason',
    'is_entry_signal',
    'seven_day_confirms',
    'pl_percent',
    'warmup_end',
    'DTISignal',
    'SymbolAnalysis',
    'detect_trade_signals',
    'analyze_symbol',
]
