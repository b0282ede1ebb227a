"""
Trading parameters for the DTI signal/backtest engine.

One parameterized engine covers every historical variant: the entry
threshold and the 7-day confirmation predicate are configuration, not forks.
Validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass, replace, asdict
from typing import Any, Dict, Union

from ..shared.defaults import (
    DTI_R, DTI_S, DTI_U,
    ENTRY_THRESHOLD, LEGACY_ENTRY_THRESHOLD,
    ENABLE_7DAY_CONFIRMATION, WARMUP_MONTHS,
    TAKE_PROFIT_PERCENT, STOP_LOSS_PERCENT, MAX_HOLDING_DAYS,
    ENABLE_7DAY_EXIT,
)
from ..shared.types import ConfirmationMode, InvalidInputError


def _validate_params(
    *,
    r: int,
    s: int,
    u: int,
    take_profit_percent: float,
    stop_loss_percent: float,
    max_holding_days: int,
    warmup_months: int,
) -> None:
    """Validate indicator and risk parameters. Raises InvalidInputError with clear message on failure."""
    for name, value in (("r", r), ("s", s), ("u", u)):
        if value <= 0:
            raise InvalidInputError(f"EMA period {name} must be > 0, got {value}")
    if take_profit_percent <= 0:
        raise InvalidInputError(f"take_profit_percent must be > 0, got {take_profit_percent}")
    if stop_loss_percent <= 0:
        raise InvalidInputError(f"stop_loss_percent must be > 0, got {stop_loss_percent}")
    if max_holding_days < 1:
        raise InvalidInputError(f"max_holding_days must be >= 1, got {max_holding_days}")
    if warmup_months < 0:
        raise InvalidInputError(f"warmup_months must be >= 0, got {warmup_months}")


def parse_confirmation_mode(value: Union[str, ConfirmationMode]) -> ConfirmationMode:
    """Accept a ConfirmationMode or its string value (case-insensitive, '-' or '_')."""
    if isinstance(value, ConfirmationMode):
        return value
    normalized = str(value).strip().lower().replace("-", "_")
    for mode in ConfirmationMode:
        if mode.value == normalized or mode.name.lower() == normalized:
            return mode
    valid = [m.value for m in ConfirmationMode]
    raise InvalidInputError(f"Unknown confirmation_mode '{value}'. Valid: {valid}")


@dataclass(frozen=True)
class TradingParameters:
    """
    Immutable configuration for one backtest invocation.

    Created once per run and never mutated; use with_overrides() to derive
    a variant.
    """
    # DTI EMA periods
    r: int = DTI_R
    s: int = DTI_S
    u: int = DTI_U

    # Entry rules
    entry_threshold: float = ENTRY_THRESHOLD  # Daily DTI must be strictly below this
    enable_7day_confirmation: bool = ENABLE_7DAY_CONFIRMATION
    confirmation_mode: ConfirmationMode = ConfirmationMode.RISING_VS_PREV_PERIOD
    warmup_months: int = WARMUP_MONTHS  # No entries before first date + N months

    # Exit rules (checked in this order)
    take_profit_percent: float = TAKE_PROFIT_PERCENT
    stop_loss_percent: float = STOP_LOSS_PERCENT
    max_holding_days: int = MAX_HOLDING_DAYS
    enable_7day_exit: bool = ENABLE_7DAY_EXIT  # Exit when 7-day DTI turns non-positive

    def __post_init__(self) -> None:
        object.__setattr__(self, "confirmation_mode", parse_confirmation_mode(self.confirmation_mode))
        _validate_params(
            r=self.r,
            s=self.s,
            u=self.u,
            take_profit_percent=self.take_profit_percent,
            stop_loss_percent=self.stop_loss_percent,
            max_holding_days=self.max_holding_days,
            warmup_months=self.warmup_months,
        )

    def with_overrides(self, **overrides: Any) -> "TradingParameters":
        """Return a copy with the given fields replaced (None values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["confirmation_mode"] = self.confirmation_mode.value
        return d


DEFAULT_PARAMS = TradingParameters()

# Variant of the former shared module: deeper oversold threshold, 7-day DTI must be positive
LEGACY_PARAMS = TradingParameters(
    entry_threshold=LEGACY_ENTRY_THRESHOLD,
    confirmation_mode=ConfirmationMode.POSITIVE,
)

PRESET_PARAMS: Dict[str, TradingParameters] = {
    "default": DEFAULT_PARAMS,
    "legacy": LEGACY_PARAMS,
}
