"""
Bulk analyzer.

Runs the volatility analyzer over a symbol list strictly in sequence,
sleeping between symbols to stay inside provider rate limits.
"""

import asyncio
import logging
import uuid
from typing import Dict, Iterable, Optional

from volscan.application.services.analyzer import VolatilityAnalyzer
from volscan.domain.errors import InvalidSymbolError
from volscan.domain.types import VolatilityAnalysis
from volscan.utils.tracing import correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 0.5  # seconds


class BulkAnalyzer:
    """Sequential, rate-limited batch analysis.

    Args:
        analyzer: Single-symbol analyzer
        request_delay: Seconds to wait between symbols (not after the last)
    """

    def __init__(self, analyzer: VolatilityAnalyzer, request_delay: float = DEFAULT_REQUEST_DELAY):
        self.analyzer = analyzer
        self.request_delay = request_delay

    async def analyze_many(self, symbols: Iterable[str]) -> Dict[str, Optional[VolatilityAnalysis]]:
        """
        Analyze symbols one at a time.

        Returns:
            Mapping in input order; invalid symbols map to None
        """
        symbol_list = list(symbols)
        results: Dict[str, Optional[VolatilityAnalysis]] = {}

        for index, symbol in enumerate(symbol_list):
            token = set_correlation_id(str(uuid.uuid4()))
            try:
                results[symbol] = await self.analyzer.analyze(symbol)
            except InvalidSymbolError as e:
                logger.warning(f"Skipping {symbol!r}: {e.reason}")
                results[symbol] = None
            finally:
                correlation_id.reset(token)

            if index < len(symbol_list) - 1 and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

        analyzed = sum(1 for value in results.values() if value is not None)
        logger.info(f"Bulk analysis complete: {analyzed}/{len(symbol_list)} symbols")
        return results
