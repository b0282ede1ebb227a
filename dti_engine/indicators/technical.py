"""
Technical indicators for DTI signal generation.

Provides the EMA primitive and William Blau's Directional Trend Index (DTI),
a triple-smoothed momentum oscillator built from directional high/low moves.
"""
import logging

import numpy as np
import pandas as pd

from ..shared.defaults import DTI_R, DTI_S, DTI_U
from ..shared.types import ArrayLike, InvalidInputError, as_float_array

logger = logging.getLogger(__name__)


def calculate_ema(values: ArrayLike, period: int) -> np.ndarray:
    """
    Calculate Exponential Moving Average.

    ema[0] = values[0]
    ema[i] = values[i] * k + ema[i-1] * (1 - k), k = 2 / (period + 1)

    Args:
        values: Input values (chronological)
        period: EMA period (> 0)

    Returns:
        Array of EMA values, same length as values

    Raises:
        InvalidInputError: If period <= 0 or values is empty
    """
    if period <= 0:
        raise InvalidInputError(f"EMA period must be > 0, got {period}")
    arr = as_float_array(values)
    if len(arr) == 0:
        raise InvalidInputError("EMA requires at least one value")
    # adjust=False is the plain recursive form seeded with the first value
    return pd.Series(arr).ewm(span=period, adjust=False).mean().to_numpy()


def _triple_ema(values: np.ndarray, r: int, s: int, u: int) -> np.ndarray:
    return calculate_ema(calculate_ema(calculate_ema(values, r), s), u)


def directional_momentum(high: np.ndarray, low: np.ndarray):
    """
    Per-bar directional momentum terms.

    Returns:
        Tuple of (x_price, x_price_abs); index 0 of both is 0
    """
    x_hmu = np.zeros(len(high))
    x_lmd = np.zeros(len(low))
    if len(high) > 1:
        x_hmu[1:] = np.maximum(np.diff(high), 0.0)
        x_lmd[1:] = np.maximum(low[:-1] - low[1:], 0.0)
    x_price = x_hmu - x_lmd
    return x_price, np.abs(x_price)


def calculate_dti(
    high: ArrayLike,
    low: ArrayLike,
    r: int = DTI_R,
    s: int = DTI_S,
    u: int = DTI_U,
) -> np.ndarray:
    """
    Calculate Directional Trend Index (DTI).

    DTI = 100 * EMA_u(EMA_s(EMA_r(xPrice))) / EMA_u(EMA_s(EMA_r(|xPrice|)))
    xPrice = max(high - prev_high, 0) - max(prev_low - low, 0)

    Where the absolute denominator is 0 the value is exactly 0, never NaN.

    Args:
        high: High prices (chronological)
        low: Low prices (chronological)
        r: First EMA period
        s: Second EMA period
        u: Third EMA period

    Returns:
        Array of DTI values, same length as input; dti[0] == 0

    Raises:
        InvalidInputError: On empty or mismatched arrays, or non-positive periods
    """
    high_arr = as_float_array(high, "high")
    low_arr = as_float_array(low, "low")
    if len(high_arr) == 0 or len(low_arr) == 0:
        raise InvalidInputError("DTI requires non-empty high and low arrays")
    if len(high_arr) != len(low_arr):
        raise InvalidInputError(
            f"high and low must have the same length, got {len(high_arr)} and {len(low_arr)}"
        )
    if r <= 0 or s <= 0 or u <= 0:
        raise InvalidInputError(f"DTI periods must be > 0, got r={r}, s={s}, u={u}")

    x_price, x_price_abs = directional_momentum(high_arr, low_arr)
    signed = _triple_ema(x_price, r, s, u)
    absolute = _triple_ema(x_price_abs, r, s, u)

    dti = np.zeros(len(signed))
    np.divide(100.0 * signed, absolute, out=dti, where=absolute != 0)
    logger.debug("DTI computed over %d bars (r=%d, s=%d, u=%d)", len(dti), r, s, u)
    return dti
