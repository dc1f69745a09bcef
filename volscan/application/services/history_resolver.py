"""
Historical series resolver.

Only the primary source serves history. Any failure, timeout or empty
result yields None, which callers treat as "use estimate".
"""

import asyncio
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from volscan.domain.enums import SourceTier
from volscan.domain.protocols import HistorySource
from volscan.domain.types import HistoricalSeries, PricePoint

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DAYS = 60


def _positive_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def clean_rows(rows: Iterable[Dict[str, Any]]) -> List[PricePoint]:
    """
    Convert raw rows to PricePoints, oldest first.

    Rows with an unusable close or date are dropped. Missing high/low fall
    back to the close and missing volume to 0.
    """
    points = []
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        close = _positive_float(row.get('close'))
        day = _as_date(row.get('date'))
        if close is None or day is None:
            continue

        volume = _positive_float(row.get('volume'))
        points.append(PricePoint(
            date=day,
            close=close,
            high=_positive_float(row.get('high')) or close,
            low=_positive_float(row.get('low')) or close,
            volume=int(volume) if volume else 0,
        ))

    points.sort(key=lambda p: p.date)
    return points


class HistoryResolver:
    """Fetch and clean daily history from the primary source."""

    def __init__(
        self,
        source: HistorySource,
        timeout: float = 8.0,
        tier: SourceTier = SourceTier.PRIMARY,
    ):
        self.source = source
        self.timeout = timeout
        self.tier = tier

    async def resolve(self, symbol: str, days: int = DEFAULT_HISTORY_DAYS) -> Optional[HistoricalSeries]:
        """
        Resolve `days` of daily history.

        Returns:
            HistoricalSeries with at least one point, or None
        """
        try:
            result = await asyncio.wait_for(
                self.source.fetch_history(symbol, days), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"{symbol}: history timed out after {self.timeout}s")
            return None
        except Exception as e:
            logger.warning(f"{symbol}: history source raised: {e!r}")
            return None

        if result.is_err:
            logger.warning(f"{symbol}: history unavailable: {result.error}")
            return None

        points = clean_rows(result.value)
        if not points:
            logger.warning(f"{symbol}: history had no usable closes")
            return None

        logger.debug(f"{symbol}: {len(points)} daily points")
        return HistoricalSeries(symbol=symbol, points=tuple(points), source_tier=self.tier)
