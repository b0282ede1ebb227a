"""
YAML configuration loader for trading parameters.

Loads TradingParameters from YAML files, allowing easy sharing and
modification of setups without code changes.

Expected layout (every key optional; missing keys keep the preset or default value):

    name: default
    indicator:
      r: 14
      s: 10
      u: 5
    entry:
      threshold: 0
      seven_day_confirmation: true
      confirmation_mode: rising_vs_prev_period
      warmup_months: 6
    exit:
      take_profit_percent: 8
      stop_loss_percent: 5
      max_holding_days: 30
      seven_day_exit: true
"""
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .config import TradingParameters, PRESET_PARAMS

logger = logging.getLogger(__name__)


def _section(config_dict: Dict[str, Any], key: str, source: Path) -> Dict[str, Any]:
    value = config_dict.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Section '{key}' in {source} must be a mapping, got {type(value).__name__}")
    return value


def params_from_dict(config_dict: Dict[str, Any], source: Union[str, Path] = "<dict>") -> TradingParameters:
    """
    Build TradingParameters from the nested YAML structure.

    A top-level 'preset' key starts from a named preset (default, legacy)
    instead of the shared defaults.
    """
    source = Path(str(source))
    preset_name = config_dict.get("preset")
    if preset_name is not None:
        if preset_name not in PRESET_PARAMS:
            raise ValueError(f"Unknown preset '{preset_name}' in {source}. Available: {list(PRESET_PARAMS)}")
        base = PRESET_PARAMS[preset_name]
    else:
        base = TradingParameters()

    indicator = _section(config_dict, "indicator", source)
    entry = _section(config_dict, "entry", source)
    exit_ = _section(config_dict, "exit", source)

    return TradingParameters(
        # DTI periods
        r=int(indicator.get("r", base.r)),
        s=int(indicator.get("s", base.s)),
        u=int(indicator.get("u", base.u)),

        # Entry
        entry_threshold=float(entry.get("threshold", base.entry_threshold)),
        enable_7day_confirmation=bool(entry.get("seven_day_confirmation", base.enable_7day_confirmation)),
        confirmation_mode=entry.get("confirmation_mode", base.confirmation_mode),
        warmup_months=int(entry.get("warmup_months", base.warmup_months)),

        # Exit
        take_profit_percent=float(exit_.get("take_profit_percent", base.take_profit_percent)),
        stop_loss_percent=float(exit_.get("stop_loss_percent", base.stop_loss_percent)),
        max_holding_days=int(exit_.get("max_holding_days", base.max_holding_days)),
        enable_7day_exit=bool(exit_.get("seven_day_exit", base.enable_7day_exit)),
    )


def load_params_from_yaml(yaml_path: Union[str, Path]) -> TradingParameters:
    """
    Load trading parameters from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        TradingParameters object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, not a mapping, or has invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    params = params_from_dict(config_dict, yaml_path)
    logger.debug("Loaded trading parameters '%s' from %s", config_dict.get("name", yaml_path.stem), yaml_path)
    return params


def save_params_to_yaml(params: TradingParameters, yaml_path: Union[str, Path], name: str = "") -> None:
    """
    Save trading parameters to a YAML file in the loader's layout.

    Args:
        params: Parameters to save
        yaml_path: Path to write
        name: Optional name recorded in the file
    """
    yaml_path = Path(yaml_path)
    config_dict = {
        "name": name or yaml_path.stem,
        "indicator": {"r": params.r, "s": params.s, "u": params.u},
        "entry": {
            "threshold": params.entry_threshold,
            "seven_day_confirmation": params.enable_7day_confirmation,
            "confirmation_mode": params.confirmation_mode.value,
            "warmup_months": params.warmup_months,
        },
        "exit": {
            "take_profit_percent": params.take_profit_percent,
            "stop_loss_percent": params.stop_loss_percent,
            "max_holding_days": params.max_holding_days,
            "seven_day_exit": params.enable_7day_exit,
        },
    }
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with open(yaml_path, 'w') as f:
        yaml.safe_dump(config_dict, f, sort_keys=False)
