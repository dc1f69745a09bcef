"""
Dependency injection container for volscan.

Built once per run and passed explicitly to whatever needs it; there is no
module-level instance. Services are created lazily on first access.

Usage:
    async with Container(Config.from_env()) as container:
        analysis = await container.analyzer.analyze("AAPL")
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, Optional

from volscan.application.services.analyzer import VolatilityAnalyzer
from volscan.application.services.bulk_analyzer import BulkAnalyzer
from volscan.application.services.history_resolver import HistoryResolver
from volscan.application.services.market_context import MarketContextService
from volscan.application.services.quote_resolver import QuoteResolver
from volscan.application.services.ranker import OpportunityRanker
from volscan.application.services.scanner import EarningsScanner
from volscan.config.config import Config
from volscan.config.validation import validate_configuration
from volscan.domain.enums import SourceTier
from volscan.infrastructure.api.finnhub_async import FinnhubAPI
from volscan.infrastructure.api.yahoo_async import YahooFinanceAPI
from volscan.infrastructure.cache.memory_cache import MemoryCache

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    API clients own aiohttp sessions, so the container must be entered as
    an async context manager before services are used. Clients passed in
    by the caller are used as-is and not entered.
    """

    def __init__(
        self,
        config: Config,
        skip_validation: bool = False,
        yahoo: Optional[YahooFinanceAPI] = None,
        finnhub: Optional[FinnhubAPI] = None,
    ):
        """
        Initialize container with configuration.

        Args:
            config: Configuration instance
            skip_validation: If True, skip configuration validation (useful for testing)
            yahoo: Optional primary client override
            finnhub: Optional secondary client override
        """
        if not skip_validation:
            validate_configuration(config)

        self.config = config
        self._owns_yahoo = yahoo is None
        self._owns_finnhub = finnhub is None
        self._yahoo = yahoo
        self._finnhub = finnhub
        self._exit_stack: Optional[AsyncExitStack] = None

        self._quote_cache: Optional[MemoryCache] = None
        self._quote_resolver: Optional[QuoteResolver] = None
        self._history_resolver: Optional[HistoryResolver] = None
        self._analyzer: Optional[VolatilityAnalyzer] = None
        self._bulk_analyzer: Optional[BulkAnalyzer] = None
        self._ranker: Optional[OpportunityRanker] = None
        self._scanner: Optional[EarningsScanner] = None
        self._market_context: Optional[MarketContextService] = None

    async def __aenter__(self) -> 'Container':
        self._exit_stack = AsyncExitStack()
        await self._exit_stack.__aenter__()
        if self._owns_yahoo:
            self._yahoo = await self._exit_stack.enter_async_context(YahooFinanceAPI(
                base_url=self.config.api.yahoo_chart_url,
                timeout=self.config.api.request_timeout,
            ))
        if self._owns_finnhub:
            self._finnhub = await self._exit_stack.enter_async_context(FinnhubAPI(
                api_key=self.config.api.finnhub_api_key,
                base_url=self.config.api.finnhub_base_url,
                timeout=self.config.api.request_timeout,
            ))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        logger.info(f"Session stats: {self.get_stats()}")
        if self._exit_stack is not None:
            await self._exit_stack.__aexit__(exc_type, exc_val, exc_tb)
            self._exit_stack = None
        if self._owns_yahoo:
            self._yahoo = None
        if self._owns_finnhub:
            self._finnhub = None

    def get_stats(self) -> Dict[str, Any]:
        """Quote cache and API client counters for this run."""
        stats: Dict[str, Any] = {}
        if self._quote_cache is not None:
            stats['quote_cache'] = self._quote_cache.get_stats()
        for name, client in (('yahoo', self._yahoo), ('finnhub', self._finnhub)):
            if client is not None:
                stats[name] = client.get_stats()
        return stats

    # ========================================================================
    # Infrastructure Layer
    # ========================================================================

    @property
    def yahoo(self) -> YahooFinanceAPI:
        if self._yahoo is None:
            raise RuntimeError("Container must be used as async context manager")
        return self._yahoo

    @property
    def finnhub(self) -> FinnhubAPI:
        if self._finnhub is None:
            raise RuntimeError("Container must be used as async context manager")
        return self._finnhub

    @property
    def quote_cache(self) -> MemoryCache:
        if self._quote_cache is None:
            self._quote_cache = MemoryCache(
                ttl_seconds=self.config.cache.quote_ttl,
                max_size=self.config.cache.max_size,
            )
        return self._quote_cache

    # ========================================================================
    # Application Layer
    # ========================================================================

    @property
    def quote_resolver(self) -> QuoteResolver:
        if self._quote_resolver is None:
            self._quote_resolver = QuoteResolver(
                tiers=[
                    (SourceTier.PRIMARY, self.yahoo),
                    (SourceTier.SECONDARY, self.finnhub),
                ],
                cache=self.quote_cache,
                timeout=self.config.api.request_timeout,
                cache_ttl=self.config.cache.quote_ttl,
            )
        return self._quote_resolver

    @property
    def history_resolver(self) -> HistoryResolver:
        if self._history_resolver is None:
            self._history_resolver = HistoryResolver(
                source=self.yahoo,
                timeout=self.config.api.request_timeout,
            )
        return self._history_resolver

    @property
    def analyzer(self) -> VolatilityAnalyzer:
        if self._analyzer is None:
            self._analyzer = VolatilityAnalyzer(
                quote_resolver=self.quote_resolver,
                history_resolver=self.history_resolver,
                fifty_two_week_source=self.finnhub,
                history_days=self.config.scan.history_days,
                timeout=self.config.api.request_timeout,
            )
        return self._analyzer

    @property
    def bulk_analyzer(self) -> BulkAnalyzer:
        if self._bulk_analyzer is None:
            self._bulk_analyzer = BulkAnalyzer(
                analyzer=self.analyzer,
                request_delay=self.config.scan.request_delay,
            )
        return self._bulk_analyzer

    @property
    def ranker(self) -> OpportunityRanker:
        if self._ranker is None:
            self._ranker = OpportunityRanker(
                top_n=self.config.scan.top_n,
                min_quality_score=self.config.scan.min_quality_score,
            )
        return self._ranker

    @property
    def scanner(self) -> EarningsScanner:
        if self._scanner is None:
            self._scanner = EarningsScanner(
                calendar=self.finnhub,
                bulk_analyzer=self.bulk_analyzer,
                ranker=self.ranker,
                window_days=self.config.scan.window_days,
                min_days=self.config.scan.min_days,
                timeout=self.config.api.request_timeout,
            )
        return self._scanner

    @property
    def market_context(self) -> MarketContextService:
        if self._market_context is None:
            self._market_context = MarketContextService(
                vix_source=self.finnhub,
                timeout=self.config.api.request_timeout,
            )
        return self._market_context
