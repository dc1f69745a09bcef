"""
VIX Regime Classification.

Regime Definitions:
- low-volatility: VIX < 15 (premium selling favored)
- normal: VIX 15-20
- elevated-volatility: VIX above 20, up to 30
- high-volatility: VIX > 30 (premium buying considerations)
"""

from typing import Optional

from volscan.domain.enums import MarketRegime

HIGH_VIX_THRESHOLD = 30.0
ELEVATED_VIX_THRESHOLD = 20.0
LOW_VIX_THRESHOLD = 15.0


def classify_vix_regime(vix_level: Optional[float]) -> MarketRegime:
    """
    Classify VIX level into a regime.

    Args:
        vix_level: Current VIX level, or None when unavailable

    Returns:
        MarketRegime (UNKNOWN for missing or negative input)

    Examples:
        >>> classify_vix_regime(12.0)
        <MarketRegime.LOW: 'low-volatility'>
        >>> classify_vix_regime(31.0)
        <MarketRegime.HIGH: 'high-volatility'>
    """
    if vix_level is None or vix_level < 0:
        return MarketRegime.UNKNOWN

    if vix_level > HIGH_VIX_THRESHOLD:
        return MarketRegime.HIGH
    if vix_level > ELEVATED_VIX_THRESHOLD:
        return MarketRegime.ELEVATED
    if vix_level < LOW_VIX_THRESHOLD:
        return MarketRegime.LOW
    return MarketRegime.NORMAL
