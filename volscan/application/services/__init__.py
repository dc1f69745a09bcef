"""Application services."""

from volscan.application.services.quote_resolver import QuoteResolver
from volscan.application.services.history_resolver import HistoryResolver
from volscan.application.services.analyzer import VolatilityAnalyzer
from volscan.application.services.ranker import OpportunityRanker
from volscan.application.services.bulk_analyzer import BulkAnalyzer
from volscan.application.services.scanner import EarningsScanner
from volscan.application.services.market_context import MarketContextService

__all__ = [
    "QuoteResolver",
    "HistoryResolver",
    "VolatilityAnalyzer",
    "OpportunityRanker",
    "BulkAnalyzer",
    "EarningsScanner",
    "MarketContextService",
]
