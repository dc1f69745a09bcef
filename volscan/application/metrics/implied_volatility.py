"""
Implied Volatility Estimator.

This is a heuristic markup over historical volatility, NOT a value derived
from option prices. It must never be presented as exchange-sourced IV.
"""

import math

from volscan.domain.reference_data import DEFAULT_IV_PREMIUM, IV_PREMIUMS

EXPECTED_MOVE_HORIZON_DAYS = 30


def estimate_implied_volatility(symbol: str, historical_volatility: float) -> float:
    """
    Estimate implied volatility (percent) from historical volatility.

    Args:
        symbol: Ticker symbol
        historical_volatility: Annualized historical volatility percent

    Returns:
        Estimated IV percent rounded to 1 dp (0 when HV is missing or 0)
    """
    if not historical_volatility or historical_volatility <= 0:
        return 0.0
    multiplier = IV_PREMIUMS.get(symbol.upper(), DEFAULT_IV_PREMIUM)
    return round(historical_volatility * multiplier, 1)


def expected_move(price: float, implied_volatility: float) -> float:
    """One standard deviation move over 30 calendar days, in price units."""
    if price <= 0 or implied_volatility <= 0:
        return 0.0
    horizon = math.sqrt(EXPECTED_MOVE_HORIZON_DAYS / 365)
    return round(price * (implied_volatility / 100) * horizon, 2)
