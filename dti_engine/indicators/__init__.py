"""
Indicator calculation module.

Provides the DTI indicator family:
- EMA primitive
- Daily DTI (William Blau triple-smoothed directional momentum)
- 7-day aggregated DTI broadcast back to daily bars

All indicators are pure functions over chronological arrays.
"""
from .technical import calculate_ema, calculate_dti, directional_momentum
from .seven_day import SevenDayPeriod, SevenDayDTI, aggregate_to_7day, calculate_7day_dti
from .base import Indicator
from .implementations import DTIIndicator, SevenDayDTIIndicator

__all__ = [
    'calculate_ema',
    'calculate_dti',
    'directional_momentum',
    'SevenDayPeriod',
    'SevenDayDTI',
    'aggregate_to_7day',
    'calculate_7day_dti',
    'Indicator',
    'DTIIndicator',
    'SevenDayDTIIndicator',
]
