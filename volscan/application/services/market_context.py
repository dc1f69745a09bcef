"""Market context service (VIX level and regime)."""

import asyncio
import logging

from volscan.domain.enums import MarketRegime
from volscan.domain.market_regime import classify_vix_regime
from volscan.domain.protocols import VixSource
from volscan.domain.types import MarketContext

logger = logging.getLogger(__name__)


class MarketContextService:
    """Fetch the VIX and classify the volatility regime."""

    def __init__(self, vix_source: VixSource, timeout: float = 8.0):
        self.vix_source = vix_source
        self.timeout = timeout

    async def get_context(self) -> MarketContext:
        """Current market context; regime is UNKNOWN when the VIX is unavailable."""
        try:
            result = await asyncio.wait_for(self.vix_source.fetch_vix(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("VIX lookup timed out")
            return MarketContext(vix=None, regime=MarketRegime.UNKNOWN)
        except Exception as e:
            logger.warning(f"VIX lookup raised: {e!r}")
            return MarketContext(vix=None, regime=MarketRegime.UNKNOWN)

        if result.is_err:
            logger.warning(f"VIX unavailable: {result.error}")
            return MarketContext(vix=None, regime=MarketRegime.UNKNOWN)

        vix = result.value
        return MarketContext(vix=vix, regime=classify_vix_regime(vix))
