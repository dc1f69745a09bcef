"""Pure calculators for volatility, implied volatility and scoring."""

from volscan.application.metrics.volatility import (
    annualized_volatility,
    estimated_volatility,
    five_week_range,
)
from volscan.application.metrics.implied_volatility import (
    estimate_implied_volatility,
    expected_move,
)
from volscan.application.metrics.indicators import (
    estimate_options_volume,
    estimate_rsi,
)
from volscan.application.metrics.volatility_score import calculate_volatility_score

__all__ = [
    'annualized_volatility',
    'estimated_volatility',
    'five_week_range',
    'estimate_implied_volatility',
    'expected_move',
    'estimate_options_volume',
    'estimate_rsi',
    'calculate_volatility_score',
]
