"""
Protocol definitions for dependency injection and testability.

Protocols define interfaces without inheritance, enabling duck typing
and easier mocking in tests.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple

from volscan.domain.errors import Result, AppError
from volscan.domain.types import RawQuote, EarningsEvent


# ============================================================================
# Data Provider Interfaces
# ============================================================================


class QuoteSource(Protocol):
    """
    One tier of the quote fallback chain.
    Implementations: YahooFinanceAPI (primary), FinnhubAPI (secondary)
    """

    name: str

    async def fetch_quote(self, symbol: str) -> Result[RawQuote, AppError]:
        """Get current price and previous close for symbol."""
        ...


class HistorySource(Protocol):
    """
    Daily price history.
    Implementation: YahooFinanceAPI
    """

    name: str

    async def fetch_history(
        self, symbol: str, days: int
    ) -> Result[List[Dict[str, Any]], AppError]:
        """Get raw daily rows {date, close, high, low, volume}, oldest first."""
        ...


class FiftyTwoWeekSource(Protocol):
    """
    52-week high/low lookup.
    Implementation: FinnhubAPI
    """

    async def fetch_52_week_range(
        self, symbol: str
    ) -> Result[Tuple[float, float], AppError]:
        """Get (high, low) over the trailing 52 weeks."""
        ...


class EarningsCalendarProvider(Protocol):
    """
    Earnings calendar.
    Implementation: FinnhubAPI
    """

    async def get_earnings_calendar(
        self, from_date: date, to_date: date
    ) -> Result[List[EarningsEvent], AppError]:
        """Get all earnings events between from_date and to_date."""
        ...


class VixSource(Protocol):
    """
    Current VIX level.
    Implementation: FinnhubAPI
    """

    async def fetch_vix(self) -> Result[float, AppError]:
        """Get latest VIX print."""
        ...


# ============================================================================
# Cache Interface
# ============================================================================


class CacheProvider(Protocol):
    """
    Interface for caching layer.
    Implementation: MemoryCache
    """

    def get(self, key: str) -> Optional[Any]:
        """Get cached value by key."""
        ...

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Set cached value with optional TTL."""
        ...
