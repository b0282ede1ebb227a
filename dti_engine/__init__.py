"""
DTI engine: William Blau's Directional Trend Index, its 7-day aggregate, and
a single-position long-only backtest built on them.

Typical use:

    from dti_engine import PriceLoader, run_backtest, check_for_opportunity

    prices = PriceLoader("AAPL.csv").load()
    result = run_backtest(prices)
    opportunity = check_for_opportunity(prices)
"""
from .shared import (
    PriceSeries,
    InvalidInputError,
    SignalType,
    ExitReason,
    ConfirmationMode,
    days_between,
    is_within_trading_days,
)
from .indicators import (
    calculate_ema,
    calculate_dti,
    SevenDayPeriod,
    SevenDayDTI,
    aggregate_to_7day,
    calculate_7day_dti,
    DTIIndicator,
    SevenDayDTIIndicator,
)
from .signals import (
    TradingParameters,
    DEFAULT_PARAMS,
    LEGACY_PARAMS,
    load_params_from_yaml,
    save_params_to_yaml,
    DTISignal,
    SymbolAnalysis,
    detect_trade_signals,
    analyze_symbol,
)
from .evaluation import (
    Trade,
    BacktestMetrics,
    BacktestResult,
    Opportunity,
    run_backtest,
    run_backtest_with_indicators,
    calculate_win_rate,
    BacktestEngine,
    check_for_opportunity,
    scan_opportunities,
    ScanResult,
)
from .data import PriceLoader, DataPreparationError, validate_price_frame

__version__ = "0.1.0"

__all__ = [
    'PriceSeries',
    'InvalidInputError',
    'SignalType',
    'ExitReason',
    'ConfirmationMode',
    'days_between',
    'is_within_trading_days',
    'calculate_ema',
    'calculate_dti',
    'SevenDayPeriod',
    'SevenDayDTI',
    'aggregate_to_7day',
    'calculate_7day_dti',
    'DTIIndicator',
    'SevenDayDTIIndicator',
    'TradingParameters',
    'DEFAULT_PARAMS',
    'LEGACY_PARAMS',
    'load_params_from_yaml',
    'save_params_to_yaml',
    'DTISignal',
    'SymbolAnalysis',
    'detect_trade_signals',
    'analyze_symbol',
    'Trade',
    'BacktestMetrics',
    'BacktestResult',
    'Opportunity',
    'run_backtest',
    'run_backtest_with_indicators',
    'calculate_win_rate',
    'BacktestEngine',
    'check_for_opportunity',
    'scan_opportunities',
    'ScanResult',
    'PriceLoader',
    'DataPreparationError',
    'validate_price_frame',
]
