"""
Heuristic indicators.

Both values here are labeled estimates. The options volume is scaled from
stock volume, and the RSI is a bounded reading seeded from the daily
change rather than a 14-period RSI.
"""

import math

from volscan.domain.reference_data import (
    DEFAULT_OPTIONS_ACTIVITY,
    OPTIONS_ACTIVITY_MULTIPLIERS,
)

BASE_OPTIONS_RATIO = 0.02
MIN_OPTIONS_VOLUME = 1000
MIN_OPTIONS_VOLUME_LIQUID = 5000

RSI_NEUTRAL = 50.0
RSI_FLOOR = 20.0
RSI_CEILING = 80.0


def estimate_options_volume(symbol: str, stock_volume: int) -> int:
    """
    Estimate daily options volume from stock volume.

    Known-liquid names get their activity multiplier and a higher floor.
    """
    multiplier = OPTIONS_ACTIVITY_MULTIPLIERS.get(symbol.upper())
    is_liquid = multiplier is not None
    if multiplier is None:
        multiplier = DEFAULT_OPTIONS_ACTIVITY

    volume = max(stock_volume or 0, 0)
    estimate = math.floor(volume * BASE_OPTIONS_RATIO * multiplier)
    floor = MIN_OPTIONS_VOLUME_LIQUID if is_liquid else MIN_OPTIONS_VOLUME
    return int(max(estimate, floor))


def estimate_rsi(change_percent: float) -> float:
    """
    Pseudo-RSI from the daily change.

    >2% -> 65, >1% -> 58, >0% -> 53, and symmetrically for declines.
    """
    change = change_percent or 0.0
    magnitude = abs(change)
    if magnitude > 2:
        offset = 15.0
    elif magnitude > 1:
        offset = 8.0
    elif magnitude > 0:
        offset = 3.0
    else:
        offset = 0.0

    rsi = RSI_NEUTRAL + offset if change > 0 else RSI_NEUTRAL - offset
    return round(min(max(rsi, RSI_FLOOR), RSI_CEILING), 1)
