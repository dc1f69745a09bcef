"""
Earnings scanner.

Calendar -> universe and window filter -> bulk analysis -> ranking.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from volscan.application.services.bulk_analyzer import BulkAnalyzer
from volscan.application.services.ranker import OpportunityRanker, days_until
from volscan.domain.protocols import EarningsCalendarProvider
from volscan.domain.reference_data import is_in_stock_universe
from volscan.domain.types import EarningsEvent, Opportunity, utc_now

logger = logging.getLogger(__name__)


class EarningsScanner:
    """Find and rank upcoming earnings opportunities.

    Args:
        calendar: Earnings calendar provider
        bulk_analyzer: Sequential batch analyzer
        ranker: Opportunity ranker
        window_days: Calendar horizon in days
        min_days: Earliest accepted days-to-earnings
        timeout: Seconds allowed for the calendar request
    """

    def __init__(
        self,
        calendar: EarningsCalendarProvider,
        bulk_analyzer: BulkAnalyzer,
        ranker: OpportunityRanker,
        window_days: int = 45,
        min_days: int = 1,
        timeout: float = 8.0,
    ):
        self.calendar = calendar
        self.bulk_analyzer = bulk_analyzer
        self.ranker = ranker
        self.window_days = window_days
        self.min_days = min_days
        self.timeout = timeout

    def filter_events(self, events: List[EarningsEvent], now: datetime) -> List[EarningsEvent]:
        """Universe members inside the window, first event per symbol."""
        seen = set()
        kept = []
        for event in events:
            if event.symbol in seen or not is_in_stock_universe(event.symbol):
                continue
            days = days_until(event.date, now)
            if not self.min_days <= days <= self.window_days:
                continue
            seen.add(event.symbol)
            kept.append(event)
        return kept

    async def _fetch_calendar(self, now: datetime) -> List[EarningsEvent]:
        today = now.date()
        try:
            result = await asyncio.wait_for(
                self.calendar.get_earnings_calendar(today, today + timedelta(days=self.window_days)),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Earnings calendar request timed out")
            return []
        except Exception as e:
            logger.warning(f"Earnings calendar request raised: {e!r}")
            return []

        if result.is_err:
            logger.warning(f"Earnings calendar unavailable: {result.error}")
            return []
        return result.value

    async def scan(self, now: Optional[datetime] = None) -> List[Opportunity]:
        """
        Run a full scan.

        Returns:
            Ranked opportunities (empty if the calendar is unavailable)
        """
        now = now or utc_now()
        calendar = await self._fetch_calendar(now)
        if not calendar:
            return []

        events = self.filter_events(calendar, now)
        logger.info(f"{len(events)} of {len(calendar)} calendar events pass filters")
        if not events:
            return []

        analyses = await self.bulk_analyzer.analyze_many([e.symbol for e in events])
        return self.ranker.rank(events, analyses, now)
