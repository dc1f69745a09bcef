"""Volatility analyzer: assembles one VolatilityAnalysis per symbol."""

import asyncio
import logging
from typing import Optional, Tuple

from volscan.application.metrics.implied_volatility import (
    estimate_implied_volatility,
    expected_move,
)
from volscan.application.metrics.indicators import estimate_options_volume, estimate_rsi
from volscan.application.metrics.volatility import (
    annualized_volatility,
    estimated_volatility,
    five_week_range,
)
from volscan.application.metrics.volatility_score import calculate_volatility_score
from volscan.application.services.history_resolver import DEFAULT_HISTORY_DAYS, HistoryResolver
from volscan.application.services.quote_resolver import QuoteResolver
from volscan.domain.enums import DataQuality, SourceTier
from volscan.domain.protocols import FiftyTwoWeekSource
from volscan.domain.types import (
    DataSources,
    HistoricalSeries,
    Quote,
    TechnicalIndicators,
    VolatilityAnalysis,
)
from volscan.domain.validation import normalize_symbol

logger = logging.getLogger(__name__)

# Price used when no quote source answered
PLACEHOLDER_PRICE = 150.0

Range = Tuple[Optional[float], Optional[float]]


class VolatilityAnalyzer:
    """Service producing a volatility analysis for any valid symbol.

    Orchestrates the analysis flow:
    1. Resolve the quote (falls back to a placeholder price)
    2. Resolve daily history (falls back to a per-symbol volatility estimate)
    3. Derive implied volatility, expected move, ranges and heuristics
    4. Score the result and flag its data quality

    Never fails for a valid symbol; source problems only degrade the
    data_quality flag.

    Args:
        quote_resolver: Tiered quote resolver
        history_resolver: Primary-source history resolver
        fifty_two_week_source: Optional 52-week range lookup
        history_days: Calendar days of history to request
    """

    def __init__(
        self,
        quote_resolver: QuoteResolver,
        history_resolver: HistoryResolver,
        fifty_two_week_source: Optional[FiftyTwoWeekSource] = None,
        history_days: int = DEFAULT_HISTORY_DAYS,
        timeout: float = 8.0,
    ):
        self.quote_resolver = quote_resolver
        self.history_resolver = history_resolver
        self.fifty_two_week_source = fifty_two_week_source
        self.history_days = history_days
        self.timeout = timeout

    async def analyze(self, symbol: str) -> VolatilityAnalysis:
        """Analyze one symbol.

        Args:
            symbol: Ticker symbol (any case)

        Returns:
            VolatilityAnalysis, estimated where sources failed

        Raises:
            InvalidSymbolError: If the symbol is malformed
        """
        symbol = normalize_symbol(symbol)

        quote_result = await self.quote_resolver.resolve(symbol)
        if quote_result.is_err:
            logger.warning(f"{symbol}: using estimated analysis ({quote_result.error.message})")
            return self._estimated_analysis(symbol)

        quote = quote_result.value
        series = await self.history_resolver.resolve(symbol, self.history_days)
        if series is None:
            historical_vol = estimated_volatility(symbol)
            historical_tier = SourceTier.ESTIMATED
        else:
            historical_vol = annualized_volatility(series.points)
            historical_tier = series.source_tier

        high_52, low_52 = await self._fifty_two_week_range(symbol, quote, series)

        return self._assemble(
            symbol=symbol,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            historical_vol=historical_vol,
            series=series,
            sources=DataSources(quote=quote.source_tier, historical=historical_tier),
            fifty_two_week=(high_52, low_52),
        )

    def _estimated_analysis(self, symbol: str) -> VolatilityAnalysis:
        """All-estimated branch: placeholder price, no volume, estimated volatility."""
        return self._assemble(
            symbol=symbol,
            price=PLACEHOLDER_PRICE,
            change=0.0,
            change_percent=0.0,
            volume=0,
            historical_vol=estimated_volatility(symbol),
            series=None,
            sources=DataSources(quote=SourceTier.ESTIMATED, historical=SourceTier.ESTIMATED),
            fifty_two_week=(None, None),
        )

    def _assemble(
        self,
        symbol: str,
        price: float,
        change: float,
        change_percent: float,
        volume: int,
        historical_vol: float,
        series: Optional[HistoricalSeries],
        sources: DataSources,
        fifty_two_week: Range,
    ) -> VolatilityAnalysis:
        implied_vol = estimate_implied_volatility(symbol, historical_vol)

        is_real = not (sources.quote.is_estimated or sources.historical.is_estimated)
        data_quality = DataQuality.REAL if is_real else DataQuality.ESTIMATED

        analysis = VolatilityAnalysis(
            symbol=symbol,
            current_price=price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            historical_volatility=historical_vol,
            implied_volatility=implied_vol,
            expected_move=expected_move(price, implied_vol),
            volatility_score=calculate_volatility_score(
                historical_vol, implied_vol, price, volume, data_quality
            ),
            options_volume_estimate=estimate_options_volume(symbol, volume),
            technical_indicators=TechnicalIndicators(rsi=estimate_rsi(change_percent)),
            five_week_range=five_week_range(price, series, symbol),
            data_quality=data_quality,
            data_sources=sources,
            fifty_two_week_high=fifty_two_week[0],
            fifty_two_week_low=fifty_two_week[1],
        )
        logger.info(
            f"{symbol}: HV {historical_vol:.2f}% IV {implied_vol:.1f}% "
            f"score {analysis.volatility_score} ({data_quality.value})"
        )
        return analysis

    async def _fifty_two_week_range(
        self,
        symbol: str,
        quote: Quote,
        series: Optional[HistoricalSeries],
    ) -> Range:
        """Quote fields first, then the metric source, then the history extremes."""
        if quote.fifty_two_week_high and quote.fifty_two_week_low:
            return quote.fifty_two_week_high, quote.fifty_two_week_low

        if self.fifty_two_week_source is not None:
            try:
                result = await asyncio.wait_for(
                    self.fifty_two_week_source.fetch_52_week_range(symbol),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError:
                logger.warning(f"{symbol}: 52-week lookup timed out")
            except Exception as e:
                logger.warning(f"{symbol}: 52-week lookup raised: {e!r}")
            else:
                if result.is_ok:
                    return result.value
                logger.debug(f"{symbol}: 52-week lookup failed: {result.error}")

        if series is not None and len(series) > 0:
            return (
                max(p.high for p in series.points),
                min(p.low for p in series.points),
            )
        return None, None
