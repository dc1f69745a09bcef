"""
Domain types for the earnings volatility scanner.

All types are immutable (frozen dataclasses). Each record is produced by a
single pipeline stage and handed by value to the next one.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Tuple

from volscan.domain.enums import (
    DataQuality,
    EarningsHour,
    MarketRegime,
    RangeSource,
    SourceTier,
)


def utc_now() -> datetime:
    """Get current time in UTC."""
    return datetime.now(tz=timezone.utc)


# ============================================================================
# Market Data
# ============================================================================


@dataclass(frozen=True)
class RawQuote:
    """
    Quote fields as returned by a single source, before tiering.
    """

    price: float
    previous_close: Optional[float] = None
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    day_open: Optional[float] = None
    volume: int = 0
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    provider: str = ""


@dataclass(frozen=True)
class Quote:
    """
    Resolved quote snapshot tagged with the tier that produced it.
    """

    symbol: str
    price: float
    previous_close: Optional[float]
    change: float
    change_percent: float
    source_tier: SourceTier
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    day_open: Optional[float] = None
    volume: int = 0
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    provider: str = ""
    fetched_at: datetime = field(default_factory=utc_now)

    @property
    def source(self) -> str:
        """Tier name as reported in analysis data sources."""
        return self.source_tier.value


@dataclass(frozen=True)
class PricePoint:
    """Single daily bar."""

    date: date
    close: float
    high: float
    low: float
    volume: int = 0


@dataclass(frozen=True)
class HistoricalSeries:
    """
    Daily price history ordered oldest -> newest.
    """

    symbol: str
    points: Tuple[PricePoint, ...]
    source_tier: SourceTier

    def __len__(self) -> int:
        return len(self.points)

    def recent(self, count: int) -> Tuple[PricePoint, ...]:
        """Most recent `count` points (all points if fewer)."""
        return self.points[-count:] if count > 0 else ()


# ============================================================================
# Analysis Results
# ============================================================================


@dataclass(frozen=True)
class FiveWeekRange:
    """High/low over roughly 25 trading days."""

    high: float
    low: float
    source: RangeSource


@dataclass(frozen=True)
class TechnicalIndicators:
    """
    Heuristic technical signals.

    rsi is an estimate seeded from the daily change, not a 14-period RSI.
    """

    rsi: Optional[float] = None


@dataclass(frozen=True)
class DataSources:
    """Tier that served each input of an analysis."""

    quote: SourceTier
    historical: SourceTier


@dataclass(frozen=True)
class VolatilityAnalysis:
    """
    Volatility analysis for one symbol.

    A degraded analysis has exactly the same shape as a real one; only
    data_quality and data_sources signal the degradation.
    """

    symbol: str
    current_price: float
    change: float
    change_percent: float
    volume: int
    historical_volatility: float
    implied_volatility: float
    expected_move: float
    volatility_score: int
    options_volume_estimate: int
    technical_indicators: TechnicalIndicators
    five_week_range: FiveWeekRange
    data_quality: DataQuality
    data_sources: DataSources
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    last_updated: datetime = field(default_factory=utc_now)

    @property
    def is_estimated(self) -> bool:
        return self.data_quality is DataQuality.ESTIMATED

    def to_dict(self) -> Dict[str, Any]:
        """Mapping consumed by downstream collaborators (narrative, email)."""
        return {
            "symbol": self.symbol,
            "currentPrice": self.current_price,
            "change": self.change,
            "changePercent": self.change_percent,
            "volume": self.volume,
            "historicalVolatility": self.historical_volatility,
            "impliedVolatility": self.implied_volatility,
            "expectedMove": self.expected_move,
            "volatilityScore": self.volatility_score,
            "optionsVolume": self.options_volume_estimate,
            "technicalIndicators": {"rsi": self.technical_indicators.rsi},
            "weeklyRange": {
                "high": self.five_week_range.high,
                "low": self.five_week_range.low,
                "source": self.five_week_range.source.value,
            },
            "fiftyTwoWeekHigh": self.fifty_two_week_high,
            "fiftyTwoWeekLow": self.fifty_two_week_low,
            "dataQuality": self.data_quality.value,
            "dataSources": {
                "quote": self.data_sources.quote.value,
                "historical": self.data_sources.historical.value,
            },
            "lastUpdated": self.last_updated.isoformat(),
        }


# ============================================================================
# Earnings Opportunities
# ============================================================================


@dataclass(frozen=True)
class EarningsEvent:
    """Upcoming earnings announcement from the calendar."""

    symbol: str
    date: date
    hour: EarningsHour = EarningsHour.UNKNOWN


@dataclass(frozen=True)
class Opportunity:
    """
    Scored earnings opportunity.
    """

    event: EarningsEvent
    days_to_earnings: int
    analysis: VolatilityAnalysis
    quality_score: int

    @property
    def symbol(self) -> str:
        return self.event.symbol

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.event.symbol,
            "date": self.event.date.isoformat(),
            "hour": self.event.hour.value,
            "daysToEarnings": self.days_to_earnings,
            "volatilityData": self.analysis.to_dict(),
            "qualityScore": self.quality_score,
        }


@dataclass(frozen=True)
class MarketContext:
    """VIX level and the regime it implies."""

    vix: Optional[float]
    regime: MarketRegime
    last_updated: datetime = field(default_factory=utc_now)
