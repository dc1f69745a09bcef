"""
Async Finnhub API client.

Serves the secondary quote tier plus the earnings calendar, 52-week
metrics and the VIX level. A missing API key is not special-cased: the
request goes out, fails, and is reported as an Err like any other failure.

Usage:
    async with FinnhubAPI(api_key) as api:
        quote = await api.fetch_quote('AAPL')
        events = await api.get_earnings_calendar(date.today(), date.today() + timedelta(days=45))
"""

import aiohttp
import asyncio
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from volscan.domain.enums import EarningsHour
from volscan.domain.errors import Result, AppError, Ok, Err, ErrorCode
from volscan.domain.types import EarningsEvent, RawQuote

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://finnhub.io/api/v1"
VIX_SYMBOL = "VIX"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_quote(symbol: str, payload: Any) -> Result[RawQuote, AppError]:
    """
    Parse a /quote payload (c=current, pc=previous close, h/l/o).

    Finnhub answers unknown symbols with zeros rather than an error, so a
    non-positive current price is NODATA.
    """
    if not isinstance(payload, dict):
        return Err(AppError(ErrorCode.NODATA, f"No Finnhub quote for {symbol}"))

    price = _number(payload.get('c'))
    if price is None or not price > 0:
        return Err(AppError(ErrorCode.NODATA, f"No Finnhub price for {symbol}", {"c": payload.get('c')}))

    previous_close = _number(payload.get('pc'))
    return Ok(RawQuote(
        price=price,
        previous_close=previous_close if previous_close and previous_close > 0 else None,
        day_high=_number(payload.get('h')) or None,
        day_low=_number(payload.get('l')) or None,
        day_open=_number(payload.get('o')) or None,
        volume=0,
        provider="finnhub",
    ))


def parse_earnings_calendar(payload: Any) -> List[EarningsEvent]:
    """Parse /calendar/earnings rows, skipping rows without symbol or date."""
    rows = payload.get('earningsCalendar') if isinstance(payload, dict) else None
    events = []
    for row in rows if isinstance(rows, list) else []:
        if not isinstance(row, dict):
            continue
        symbol = row.get('symbol')
        symbol = symbol.strip().upper() if isinstance(symbol, str) else ''
        raw_date = row.get('date')
        if not symbol or not raw_date:
            continue
        try:
            event_date = datetime.strptime(raw_date, '%Y-%m-%d').date()
        except (TypeError, ValueError):
            logger.debug(f"Skipping calendar row with bad date: {row!r}")
            continue
        events.append(EarningsEvent(
            symbol=symbol,
            date=event_date,
            hour=EarningsHour.parse(row.get('hour')),
        ))
    return events


class FinnhubAPI:
    """
    Finnhub REST client.

    Implements QuoteSource, FiftyTwoWeekSource, EarningsCalendarProvider
    and VixSource.
    """

    name = "finnhub"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 8.0,
    ):
        """
        Initialize Finnhub client.

        Args:
            api_key: Finnhub API token (may be empty)
            base_url: API base URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_count = 0
        self._error_count = 0

    async def __aenter__(self) -> 'FinnhubAPI':
        self._session = aiohttp.ClientSession(
            headers={'Accept': 'application/json'},
            timeout=self.timeout,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._session:
            await self._session.close()
            self._session = None

    def __repr__(self):
        """Mask API key in repr to prevent leaking in logs."""
        return f"FinnhubAPI(base_url={self.base_url}, key=***)"

    async def _get_json(self, endpoint: str, params: Dict[str, Any]) -> Result[Any, AppError]:
        if not self._session:
            raise RuntimeError("API must be used as async context manager")

        query = dict(params)
        query['token'] = self.api_key
        self._request_count += 1
        try:
            async with self._session.get(f"{self.base_url}{endpoint}", params=query) as response:
                if response.status == 429:
                    self._error_count += 1
                    return Err(AppError(ErrorCode.RATELIMIT, f"Finnhub rate limit on {endpoint}"))
                if response.status >= 400:
                    self._error_count += 1
                    return Err(AppError(
                        ErrorCode.EXTERNAL,
                        f"Finnhub API error: {response.status}",
                        {"endpoint": endpoint, "status": response.status},
                    ))
                return Ok(await response.json(content_type=None))
        except asyncio.TimeoutError:
            self._error_count += 1
            return Err(AppError(ErrorCode.TIMEOUT, f"Finnhub request timed out on {endpoint}"))
        except (aiohttp.ClientError, ValueError) as e:
            self._error_count += 1
            return Err(AppError(ErrorCode.EXTERNAL, f"Finnhub request failed on {endpoint}: {e}"))

    async def fetch_quote(self, symbol: str) -> Result[RawQuote, AppError]:
        """Get current quote (no volume on this endpoint)."""
        response = await self._get_json('/quote', {'symbol': symbol})
        if response.is_err:
            return Err(response.error)
        return parse_quote(symbol, response.value)

    async def fetch_52_week_range(self, symbol: str) -> Result[Tuple[float, float], AppError]:
        """Get (high, low) from basic financials."""
        response = await self._get_json('/stock/metric', {'symbol': symbol, 'metric': 'all'})
        if response.is_err:
            return Err(response.error)

        payload = response.value
        metric = payload.get('metric') if isinstance(payload, dict) else None
        if not isinstance(metric, dict) or not metric:
            return Err(AppError(ErrorCode.NODATA, f"No metric data for {symbol}"))

        high = _number(metric.get('52WeekHigh'))
        low = _number(metric.get('52WeekLow'))
        if not high or not low or high <= 0 or low <= 0:
            return Err(AppError(ErrorCode.NODATA, f"No 52-week range for {symbol}"))
        return Ok((high, low))

    async def get_earnings_calendar(
        self, from_date: date, to_date: date
    ) -> Result[List[EarningsEvent], AppError]:
        """Get earnings events between from_date and to_date (inclusive)."""
        response = await self._get_json(
            '/calendar/earnings',
            {'from': from_date.isoformat(), 'to': to_date.isoformat()},
        )
        if response.is_err:
            return Err(response.error)

        events = parse_earnings_calendar(response.value)
        logger.info(f"Fetched {len(events)} earnings events {from_date} -> {to_date}")
        return Ok(events)

    async def fetch_vix(self) -> Result[float, AppError]:
        """Get latest VIX print."""
        quote = await self.fetch_quote(VIX_SYMBOL)
        if quote.is_err:
            return Err(quote.error)
        return Ok(quote.value.price)

    def get_stats(self) -> Dict[str, int]:
        return {'requests': self._request_count, 'errors': self._error_count}
