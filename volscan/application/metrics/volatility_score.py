"""
Volatility score (0-100).

Five independent bands are summed:
- Historical volatility: 0-30
- Implied volatility: 0-25
- Price sanity: 0-20
- Data quality: 8 or 15
- Liquidity (stock volume): 3-10
"""

from typing import Union

from volscan.domain.enums import DataQuality


def _hv_points(hv: float) -> int:
    if 20 <= hv <= 50:
        return 30
    if 15 <= hv <= 60:
        return 25
    if hv >= 10:
        return 20
    return 0


def _iv_points(iv: float) -> int:
    if 25 <= iv <= 55:
        return 25
    if 20 <= iv <= 65:
        return 20
    if iv >= 15:
        return 15
    return 0


def _price_points(price: float) -> int:
    if 20 <= price <= 500:
        return 20
    if price >= 10:
        return 15
    return 0


def _quality_points(quality: DataQuality) -> int:
    return 15 if quality is DataQuality.REAL else 8


def _liquidity_points(volume: int) -> int:
    if volume > 1_000_000:
        return 10
    if volume > 500_000:
        return 8
    if volume > 100_000:
        return 5
    return 3


def calculate_volatility_score(
    historical_volatility: float,
    implied_volatility: float,
    price: float,
    volume: int,
    data_quality: Union[DataQuality, str],
) -> int:
    """
    Calculate the additive volatility score.

    Returns:
        Integer score clamped to [0, 100]
    """
    quality = DataQuality(data_quality)
    score = (
        _hv_points(historical_volatility or 0)
        + _iv_points(implied_volatility or 0)
        + _price_points(price or 0)
        + _quality_points(quality)
        + _liquidity_points(volume or 0)
    )
    return max(0, min(100, score))
