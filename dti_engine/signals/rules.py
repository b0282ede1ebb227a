"""
Entry and exit rules for the DTI trade state machine.

Exit rules are pluggable: each rule looks at the running trade on one bar
and either names an exit reason or passes. get_exit_rules() returns them in
priority order; the first rule that fires wins even if a later one would
also match on the same bar.
"""
from dataclasses import dataclass
from typing import List, Optional, Protocol

import pandas as pd

from .config import TradingParameters
from ..shared.types import ConfirmationMode, ExitReason


@dataclass(frozen=True)
class BarContext:
    """Running-trade view of one bar, as seen by the exit rules."""
    pl_percent: float
    holding_days: int
    current_7day_dti: float
    previous_7day_dti: float  # daily broadcast value on the previous bar


class ExitRule(Protocol):
    """Protocol for a rule that decides whether an open trade closes on this bar."""

    def evaluate(self, bar: BarContext, params: TradingParameters) -> Optional[ExitReason]:
        """
        Evaluate rule at this bar.

        Args:
            bar: Running P/L, holding days and 7-day DTI values
            params: Trading parameters

        Returns:
            ExitReason if the trade must close, else None
        """
        ...


class TakeProfitRule:
    """Close when the gain reaches take_profit_percent."""

    def evaluate(self, bar: BarContext, params: TradingParameters) -> Optional[ExitReason]:
        if bar.pl_percent >= params.take_profit_percent:
            return ExitReason.TAKE_PROFIT
        return None


class StopLossRule:
    """Close when the loss reaches stop_loss_percent."""

    def evaluate(self, bar: BarContext, params: TradingParameters) -> Optional[ExitReason]:
        if bar.pl_percent <= -params.stop_loss_percent:
            return ExitReason.STOP_LOSS
        return None


class MaxHoldingRule:
    """Close after max_holding_days calendar days."""

    def evaluate(self, bar: BarContext, params: TradingParameters) -> Optional[ExitReason]:
        if bar.holding_days >= params.max_holding_days:
            return ExitReason.MAX_DAYS
        return None


class SevenDayReversalRule:
    """Close when the 7-day DTI turns from positive to non-positive."""

    def evaluate(self, bar: BarContext, params: TradingParameters) -> Optional[ExitReason]:
        if bar.previous_7day_dti > 0 and bar.current_7day_dti <= 0:
            return ExitReason.SEVEN_DAY_DTI
        return None


def get_exit_rules(params: TradingParameters) -> List[ExitRule]:
    """
    Return the exit rules enabled by params, in priority order.

    Order: take profit, stop loss, max holding days, 7-day reversal.
    """
    rules: List[ExitRule] = [TakeProfitRule(), StopLossRule(), MaxHoldingRule()]
    if params.enable_7day_exit:
        rules.append(SevenDayReversalRule())
    return rules


def first_exit_reason(bar: BarContext, rules: List[ExitRule], params: TradingParameters) -> Optional[ExitReason]:
    """First exit reason among rules (priority order), or None."""
    for rule in rules:
        reason = rule.evaluate(bar, params)
        if reason is not None:
            return reason
    return None


def pl_percent(current_price: float, entry_price: float) -> float:
    """Profit/loss of current_price against entry_price, in percent."""
    return (current_price - entry_price) / entry_price * 100


def warmup_end(first_date, warmup_months: int) -> pd.Timestamp:
    """Earliest date on which entries are allowed."""
    return pd.Timestamp(first_date) + pd.DateOffset(months=warmup_months)


def seven_day_confirms(
    current_7day_dti: float,
    previous_period_dti: Optional[float],
    mode: ConfirmationMode,
) -> bool:
    """
    7-day DTI confirmation predicate.

    POSITIVE: current 7-day DTI > 0.
    RISING_VS_PREV_PERIOD: current 7-day DTI > previous period's DTI;
    passes when there is no previous period yet.
    """
    if mode is ConfirmationMode.POSITIVE:
        return current_7day_dti > 0
    if previous_period_dti is None:
        return True
    return current_7day_dti > previous_period_dti


def is_entry_signal(
    current_dti: float,
    previous_dti: float,
    current_7day_dti: float,
    previous_period_dti: Optional[float],
    params: TradingParameters,
) -> bool:
    """
    Indicator part of the entry condition (warm-up and trade state are the engine's).

    Daily DTI strictly below entry_threshold and rising, and, when enabled,
    the 7-day confirmation holds.
    """
    if not (current_dti < params.entry_threshold and current_dti > previous_dti):
        return False
    if params.enable_7day_confirmation:
        return seven_day_confirms(current_7day_dti, previous_period_dti, params.confirmation_mode)
    return True
