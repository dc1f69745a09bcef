"""
Pytest configuration and fixtures for volscan tests.

All data sources are in-memory fakes; no test touches the network.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from volscan.application.services.analyzer import VolatilityAnalyzer
from volscan.application.services.history_resolver import HistoryResolver
from volscan.application.services.quote_resolver import QuoteResolver
from volscan.domain.enums import SourceTier
from volscan.domain.errors import AppError, Err, ErrorCode, Ok
from volscan.domain.types import EarningsEvent, RawQuote
from volscan.infrastructure.cache.memory_cache import MemoryCache


# ============================================================================
# Fake Sources
# ============================================================================


class FakeQuoteSource:
    """Quote source answering from a dict of symbol -> RawQuote | AppError | Exception."""

    def __init__(self, name: str = "fake", responses: Optional[Dict[str, Any]] = None):
        self.name = name
        self.responses = responses or {}
        self.calls: List[str] = []

    async def fetch_quote(self, symbol: str):
        self.calls.append(symbol)
        response = self.responses.get(symbol)
        if response is None:
            return Err(AppError(ErrorCode.NODATA, f"No quote for {symbol}"))
        if isinstance(response, Exception):
            raise response
        if isinstance(response, AppError):
            return Err(response)
        return Ok(response)

    def get_stats(self) -> Dict[str, int]:
        return {'requests': len(self.calls), 'errors': 0}


class FakeHistorySource:
    """History source answering from a dict of symbol -> rows | AppError | Exception."""

    name = "fake-history"

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.calls: List[tuple] = []

    async def fetch_history(self, symbol: str, days: int):
        self.calls.append((symbol, days))
        response = self.responses.get(symbol)
        if response is None:
            return Err(AppError(ErrorCode.NODATA, f"No history for {symbol}"))
        if isinstance(response, Exception):
            raise response
        if isinstance(response, AppError):
            return Err(response)
        return Ok(list(response))


class FakeFiftyTwoWeekSource:
    """52-week range lookup from a dict of symbol -> (high, low)."""

    def __init__(self, ranges: Optional[Dict[str, tuple]] = None):
        self.ranges = ranges or {}
        self.calls: List[str] = []

    async def fetch_52_week_range(self, symbol: str):
        self.calls.append(symbol)
        if symbol in self.ranges:
            return Ok(self.ranges[symbol])
        return Err(AppError(ErrorCode.NODATA, f"No 52-week range for {symbol}"))


class FakeCalendar:
    """Earnings calendar returning a fixed event list (or an error)."""

    def __init__(self, events: Optional[List[EarningsEvent]] = None, error: Optional[AppError] = None):
        self.events = events or []
        self.error = error
        self.calls: List[tuple] = []

    async def get_earnings_calendar(self, from_date: date, to_date: date):
        self.calls.append((from_date, to_date))
        if self.error is not None:
            return Err(self.error)
        return Ok(list(self.events))


class FakeVixSource:
    """VIX source returning a fixed level, an error, or raising."""

    def __init__(self, level: Any = 18.0):
        self.level = level

    async def fetch_vix(self):
        if isinstance(self.level, Exception):
            raise self.level
        if isinstance(self.level, AppError):
            return Err(self.level)
        return Ok(self.level)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Data Helpers
# ============================================================================


def make_rows(closes: List[Any], start: date = date(2024, 1, 1)) -> List[Dict[str, Any]]:
    """Daily rows with the given closes, one calendar day apart."""
    return [
        {
            'date': start + timedelta(days=i),
            'close': close,
            'high': close * 1.01 if isinstance(close, (int, float)) else None,
            'low': close * 0.99 if isinstance(close, (int, float)) else None,
            'volume': 1_000_000,
        }
        for i, close in enumerate(closes)
    ]


def wavy_closes(count: int, base: float = 100.0) -> List[float]:
    """Deterministic oscillating price path."""
    return [base + (i % 5) - 2 + i * 0.1 for i in range(count)]


def raw_quote(price: float = 150.5, previous_close: Optional[float] = 149.0, **kwargs) -> RawQuote:
    """RawQuote with sensible defaults."""
    fields = dict(
        price=price,
        previous_close=previous_close,
        day_high=price * 1.01,
        day_low=price * 0.99,
        day_open=previous_close,
        volume=2_500_000,
        provider="fake",
    )
    fields.update(kwargs)
    return RawQuote(**fields)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fixed_now():
    """Fixed scan time: 2024-03-01 12:00 UTC."""
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def primary():
    return FakeQuoteSource(name="primary")


@pytest.fixture
def secondary():
    return FakeQuoteSource(name="secondary")


@pytest.fixture
def history_source():
    return FakeHistorySource()


@pytest.fixture
def quote_resolver(primary, secondary, clock):
    """Resolver over the primary/secondary fakes with a controllable cache clock."""
    return QuoteResolver(
        tiers=[(SourceTier.PRIMARY, primary), (SourceTier.SECONDARY, secondary)],
        cache=MemoryCache(ttl_seconds=300, clock=clock),
        timeout=1.0,
    )


@pytest.fixture
def history_resolver(history_source):
    return HistoryResolver(source=history_source, timeout=1.0)


@pytest.fixture
def analyzer(quote_resolver, history_resolver):
    return VolatilityAnalyzer(
        quote_resolver=quote_resolver,
        history_resolver=history_resolver,
        timeout=1.0,
    )


def make_analysis(
    symbol: str = "AAPL",
    volatility_score: int = 80,
    options_volume: int = 20_000,
    rsi: Optional[float] = 50.0,
    historical_volatility: float = 30.0,
    data_quality: str = "real",
):
    """VolatilityAnalysis with controllable ranking inputs."""
    from volscan.domain.enums import DataQuality, RangeSource
    from volscan.domain.types import (
        DataSources,
        FiveWeekRange,
        TechnicalIndicators,
        VolatilityAnalysis,
    )

    tier = SourceTier.PRIMARY if data_quality == "real" else SourceTier.ESTIMATED
    return VolatilityAnalysis(
        symbol=symbol,
        current_price=100.0,
        change=1.0,
        change_percent=1.0,
        volume=1_000_000,
        historical_volatility=historical_volatility,
        implied_volatility=round(historical_volatility * 1.1, 1),
        expected_move=5.0,
        volatility_score=volatility_score,
        options_volume_estimate=options_volume,
        technical_indicators=TechnicalIndicators(rsi=rsi),
        five_week_range=FiveWeekRange(high=110.0, low=90.0, source=RangeSource.REAL),
        data_quality=DataQuality(data_quality),
        data_sources=DataSources(quote=tier, historical=tier),
    )
