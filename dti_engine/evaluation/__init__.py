"""
Evaluation module.

Backtest engine, trade metrics and live opportunity scanning.
"""
from .backtest_types import Trade, BacktestMetrics, BacktestResult, Opportunity
from .backtest import run_backtest, run_backtest_with_indicators, calculate_win_rate, BacktestEngine
from .opportunity import check_for_opportunity, opportunity_from_result, scan_opportunities, ScanResult
from .trade_analysis import calculate_metrics, aggregate_by_exit_reason, trades_to_dataframe, TRADE_COLUMNS

__all__ = [
    'Trade',
    'BacktestMetrics',
    'BacktestResult',
    'Opportunity',
    'run_backtest',
    'run_backtest_with_indicators',
    'calculate_win_rate',
    'BacktestEngine',
    'check_for_opportunity',
    'opportunity_from_result',
    'scan_opportunities',
    'ScanResult',
    'calculate_metrics',
    'aggregate_by_exit_reason',
    'trades_to_dataframe',
    'TRADE_COLUMNS',
]
