"""
Centralized default values for DTI indicator and backtest parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.
"""

# DTI (Directional Trend Index) triple-EMA periods
DTI_R = 14  # First smoothing pass
DTI_S = 10  # Second smoothing pass
DTI_U = 5  # Third smoothing pass

# Seven-day aggregation
SEVEN_DAY_PERIOD_LENGTH = 7  # Bars per period (by position, not calendar week)

# Entry rules
# The active-trade scanner alerts with threshold 0 and "7-day DTI rising vs
# previous period" confirmation. The legacy shared module used -40 with
# "7-day DTI positive"; that variant is available as LEGACY_ENTRY_THRESHOLD.
ENTRY_THRESHOLD = 0.0
LEGACY_ENTRY_THRESHOLD = -40.0
ENABLE_7DAY_CONFIRMATION = True
WARMUP_MONTHS = 6  # Entries suppressed until indicator has stabilized

# Exit rules
TAKE_PROFIT_PERCENT = 8.0
STOP_LOSS_PERCENT = 5.0
MAX_HOLDING_DAYS = 30
ENABLE_7DAY_EXIT = True

# Backtest needs at least one bar-to-bar transition
MIN_BARS = 2

# Trading-day freshness window for alerting on past signals
SIGNAL_FRESHNESS_TRADING_DAYS = 2
