"""
Opportunity ranker.

Composite quality score (0-100):
- Base: 10
- Volatility score band: 6-30
- Timing (days to earnings, peak at 14-21): 5-25
- Options volume estimate: 0-20
- RSI extremity: 0-15 (0 when RSI is unknown)
- Historical volatility present: +5
"""

import logging
import math
from datetime import datetime, time, timezone, date
from typing import Iterable, List, Mapping, Optional

from volscan.domain.types import EarningsEvent, Opportunity, VolatilityAnalysis, utc_now

logger = logging.getLogger(__name__)

BASE_QUALITY_SCORE = 10.0
HISTORICAL_VOL_BONUS = 5.0
SECONDS_PER_DAY = 86400


def days_until(earnings_date: date, now: Optional[datetime] = None) -> int:
    """
    Whole days until earnings, rounded up.

    The earnings date is taken at UTC midnight.
    """
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    target = datetime.combine(earnings_date, time.min, tzinfo=timezone.utc)
    return math.ceil((target - now).total_seconds() / SECONDS_PER_DAY)


def _volatility_points(volatility_score: float) -> float:
    if volatility_score > 70:
        return 30
    if volatility_score > 50:
        return 24
    if volatility_score > 30:
        return 18
    if volatility_score > 10:
        return 12
    return 6


def _timing_points(days: int) -> float:
    if 14 <= days <= 21:
        return 25
    if 10 <= days <= 28:
        return 17.5
    if 5 <= days <= 35:
        return 10
    return 5


def _options_volume_points(options_volume: int) -> float:
    if options_volume > 10000:
        return 20
    if options_volume > 5000:
        return 14
    if options_volume > 1000:
        return 8
    if options_volume > 0:
        return 4
    return 0


def _rsi_points(rsi: Optional[float]) -> float:
    if rsi is None:
        return 0
    if rsi > 70 or rsi < 30:
        return 15
    if rsi > 60 or rsi < 40:
        return 7.5
    return 3


def calculate_quality_score(analysis: VolatilityAnalysis, days_to_earnings: int) -> int:
    """
    Composite quality score for one opportunity.

    Returns:
        Integer in [0, 100], rounded half-up
    """
    score = (
        BASE_QUALITY_SCORE
        + _volatility_points(analysis.volatility_score)
        + _timing_points(days_to_earnings)
        + _options_volume_points(analysis.options_volume_estimate)
        + _rsi_points(analysis.technical_indicators.rsi)
    )
    if analysis.historical_volatility and analysis.historical_volatility > 0:
        score += HISTORICAL_VOL_BONUS

    rounded = int(math.floor(score + 0.5))
    return max(0, min(100, rounded))


class OpportunityRanker:
    """Join earnings events to analyses, score, filter and truncate.

    Args:
        top_n: Maximum opportunities returned
        min_quality_score: Scores must be strictly above this
    """

    def __init__(self, top_n: int = 5, min_quality_score: float = 5):
        self.top_n = top_n
        self.min_quality_score = min_quality_score

    def score(
        self,
        events: Iterable[EarningsEvent],
        analyses: Mapping[str, Optional[VolatilityAnalysis]],
        now: Optional[datetime] = None,
    ) -> List[Opportunity]:
        """Build unfiltered opportunities in event order."""
        now = now or utc_now()
        opportunities = []
        for event in events:
            analysis = analyses.get(event.symbol)
            if analysis is None:
                logger.debug(f"{event.symbol}: no analysis, dropping event")
                continue
            days = days_until(event.date, now)
            opportunities.append(Opportunity(
                event=event,
                days_to_earnings=days,
                analysis=analysis,
                quality_score=calculate_quality_score(analysis, days),
            ))
        return opportunities

    def rank(
        self,
        events: Iterable[EarningsEvent],
        analyses: Mapping[str, Optional[VolatilityAnalysis]],
        now: Optional[datetime] = None,
    ) -> List[Opportunity]:
        """
        Rank opportunities by quality score, highest first.

        Ties keep event order. Output length is at most top_n.
        """
        scored = [
            opp for opp in self.score(events, analyses, now)
            if opp.quality_score > self.min_quality_score
        ]
        ranked = sorted(scored, key=lambda opp: opp.quality_score, reverse=True)
        top = ranked[:self.top_n]
        logger.info(f"Ranked {len(scored)} opportunities, returning top {len(top)}")
        return top
