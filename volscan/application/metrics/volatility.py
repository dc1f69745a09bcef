"""
Historical Volatility Calculator.

Annualized standard deviation of daily log returns:

    volatility = sqrt(sample_variance(ln(p[i] / p[i-1])) * 252) * 100

A return of 0 means "no signal" (not enough usable data), which is
distinct from genuinely low volatility; a valid series whose volatility
rounds to 0 is reported as 1 instead.
"""

import logging
import math
from numbers import Real
from typing import Optional, Sequence, Union

import numpy as np

from volscan.domain.enums import RangeSource
from volscan.domain.reference_data import (
    DEFAULT_ESTIMATED_VOLATILITY,
    ESTIMATED_VOLATILITY,
)
from volscan.domain.types import FiveWeekRange, HistoricalSeries, PricePoint

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 252
FIVE_WEEK_TRADING_DAYS = 25

PriceInput = Union[PricePoint, float, int]


def _close_of(point: PriceInput) -> Optional[float]:
    if isinstance(point, PricePoint):
        value = point.close
    else:
        value = point
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def annualized_volatility(points: Sequence[PriceInput]) -> float:
    """
    Calculate annualized historical volatility in percent.

    Args:
        points: PricePoints or bare closes, oldest first

    Returns:
        Volatility percent rounded to 2 dp, or 0 when there is no signal
    """
    closes = [c for c in (_close_of(p) for p in points or ()) if c is not None]
    if len(closes) < 2:
        return 0.0

    returns = [
        math.log(curr / prev)
        for prev, curr in zip(closes, closes[1:])
        if prev > 0 and curr > 0
    ]
    if len(returns) < 2:
        return 0.0

    variance = float(np.var(np.asarray(returns, dtype=float), ddof=1))
    volatility = math.sqrt(variance * TRADING_DAYS_PER_YEAR) * 100

    if not math.isfinite(volatility):
        logger.debug("Non-finite volatility from %d returns", len(returns))
        return 0.0

    rounded = round(volatility, 2)
    if rounded == 0:
        return 1.0
    return rounded


def estimated_volatility(symbol: str) -> float:
    """Typical annualized volatility for symbol when no history is available."""
    return float(
        ESTIMATED_VOLATILITY.get(symbol.upper(), DEFAULT_ESTIMATED_VOLATILITY)
    )


def five_week_range(
    price: float,
    series: Optional[HistoricalSeries],
    symbol: str,
) -> FiveWeekRange:
    """
    Price range over the last five weeks (25 trading days).

    Uses the actual min/max close when the series is long enough, otherwise
    a two-sigma band around price based on the symbol's typical volatility.
    """
    if series is not None and len(series) >= FIVE_WEEK_TRADING_DAYS:
        closes = [p.close for p in series.recent(FIVE_WEEK_TRADING_DAYS)]
        return FiveWeekRange(
            high=max(closes),
            low=min(closes),
            source=RangeSource.REAL,
        )

    est_vol = estimated_volatility(symbol) / 100
    band = 2 * price * est_vol * math.sqrt(FIVE_WEEK_TRADING_DAYS / TRADING_DAYS_PER_YEAR)
    return FiveWeekRange(
        high=round(price + band, 2),
        low=round(max(price - band, 0.0), 2),
        source=RangeSource.ESTIMATED,
    )
