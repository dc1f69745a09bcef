"""
Quote resolver.

Walks an ordered list of quote tiers and returns the first valid quote.
Live quotes are cached per symbol for a short TTL; estimates never are.
"""

import asyncio
import logging
import math
from typing import List, Optional, Sequence, Tuple

from volscan.domain.enums import SourceTier
from volscan.domain.errors import Result, AppError, Ok, Err, ErrorCode
from volscan.domain.protocols import CacheProvider, QuoteSource
from volscan.domain.types import Quote, RawQuote
from volscan.infrastructure.cache.memory_cache import MemoryCache

logger = logging.getLogger(__name__)

QUOTE_CACHE_TTL = 300  # seconds


def _is_positive(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def build_quote(symbol: str, raw: RawQuote, tier: SourceTier) -> Result[Quote, AppError]:
    """
    Validate a raw quote for its tier and derive change fields.

    The primary tier requires a positive previous close; lower tiers only
    require a positive price and report 0 change without one.
    """
    if not _is_positive(raw.price):
        return Err(AppError(ErrorCode.INVALID, f"Invalid price for {symbol}", {"price": raw.price}))

    has_previous = _is_positive(raw.previous_close)
    if tier is SourceTier.PRIMARY and not has_previous:
        return Err(AppError(ErrorCode.INVALID, f"Missing previous close for {symbol}"))

    if has_previous:
        change = round(raw.price - raw.previous_close, 2)
        change_percent = round((raw.price - raw.previous_close) / raw.previous_close * 100, 2)
    else:
        change = 0.0
        change_percent = 0.0

    return Ok(Quote(
        symbol=symbol,
        price=raw.price,
        previous_close=raw.previous_close if has_previous else None,
        change=change,
        change_percent=change_percent,
        source_tier=tier,
        day_high=raw.day_high,
        day_low=raw.day_low,
        day_open=raw.day_open,
        volume=raw.volume or 0,
        fifty_two_week_high=raw.fifty_two_week_high,
        fifty_two_week_low=raw.fifty_two_week_low,
        provider=raw.provider,
    ))


class QuoteResolver:
    """
    Resolve a current quote through an ordered tier chain.

    Usage:
        resolver = QuoteResolver([
            (SourceTier.PRIMARY, yahoo),
            (SourceTier.SECONDARY, finnhub),
        ])
        result = await resolver.resolve("AAPL")
    """

    def __init__(
        self,
        tiers: Sequence[Tuple[SourceTier, QuoteSource]],
        cache: Optional[CacheProvider] = None,
        timeout: float = 8.0,
        cache_ttl: float = QUOTE_CACHE_TTL,
    ):
        self.tiers = list(tiers)
        self.cache = cache if cache is not None else MemoryCache(ttl_seconds=cache_ttl)
        self.timeout = timeout
        self.cache_ttl = cache_ttl

    @staticmethod
    def _cache_key(symbol: str) -> str:
        return f"quote:{symbol}"

    async def _fetch(self, tier: SourceTier, source: QuoteSource, symbol: str) -> Result[Quote, AppError]:
        """One tier attempt. Never raises."""
        source_name = getattr(source, 'name', tier.value)
        try:
            raw = await asyncio.wait_for(source.fetch_quote(symbol), timeout=self.timeout)
        except asyncio.TimeoutError:
            return Err(AppError(
                ErrorCode.TIMEOUT,
                f"{source_name} quote timed out after {self.timeout}s",
                {"tier": tier.value},
            ))
        except Exception as e:
            logger.warning(f"{source_name} quote raised for {symbol}: {e!r}")
            return Err(AppError(ErrorCode.EXTERNAL, str(e), {"tier": tier.value}))

        if raw.is_err:
            return Err(raw.error)
        return build_quote(symbol, raw.value, tier)

    async def resolve(self, symbol: str) -> Result[Quote, AppError]:
        """
        Resolve a quote for an already-normalized symbol.

        Returns:
            Ok(Quote) from the cache or the first valid tier, or
            Err(UNAVAILABLE) with each tier's failure in context["failures"]
        """
        key = self._cache_key(symbol)
        cached = self.cache.get(key)
        if cached is not None:
            return Ok(cached)

        failures: List[str] = []
        for tier, source in self.tiers:
            result = await self._fetch(tier, source, symbol)
            if result.is_ok:
                quote = result.value
                if not quote.source_tier.is_estimated:
                    self.cache.set(key, quote, ttl=self.cache_ttl)
                logger.debug(f"{symbol}: quote ${quote.price:.2f} from {tier.value}")
                return Ok(quote)

            logger.warning(f"{symbol}: {tier.value} quote failed: {result.error}")
            failures.append(f"{tier.value}: {result.error}")

        return Err(AppError(
            ErrorCode.UNAVAILABLE,
            f"All quote sources failed for {symbol}",
            {"symbol": symbol, "failures": failures},
        ))
