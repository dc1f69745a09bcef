"""
Async Yahoo Finance chart client (primary tier).

A single endpoint serves both the current quote (chart ``meta``) and the
daily history (``indicators.quote`` plus ``adjclose``).

Usage:
    async with YahooFinanceAPI() as api:
        quote = await api.fetch_quote('AAPL')
        rows = await api.fetch_history('AAPL', days=60)
"""

import aiohttp
import asyncio
import logging
import math
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote as url_quote

from volscan.domain.errors import Result, AppError, Ok, Err, ErrorCode
from volscan.domain.types import RawQuote

logger = logging.getLogger(__name__)

DEFAULT_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

SECONDS_PER_DAY = 24 * 60 * 60


def _first_result(payload: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(payload, dict):
        return None
    results = (payload.get('chart') or {}).get('result') or []
    if not results or not isinstance(results[0], dict):
        return None
    return results[0]


def _positive(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) and number > 0 else None


def parse_chart_quote(symbol: str, payload: Any) -> Result[RawQuote, AppError]:
    """
    Extract the current quote from a chart payload.

    Requires a positive regularMarketPrice and previousClose.
    """
    result = _first_result(payload)
    meta = (result or {}).get('meta')
    if not meta:
        return Err(AppError(ErrorCode.NODATA, f"No quote data for {symbol}"))

    price = _positive(meta.get('regularMarketPrice'))
    previous_close = _positive(meta.get('previousClose'))
    if previous_close is None:
        previous_close = _positive(meta.get('chartPreviousClose'))
    if price is None or previous_close is None:
        return Err(AppError(
            ErrorCode.INVALID,
            f"Invalid price data for {symbol}",
            {"price": meta.get('regularMarketPrice'), "previous_close": meta.get('previousClose')},
        ))

    return Ok(RawQuote(
        price=price,
        previous_close=previous_close,
        day_high=_positive(meta.get('regularMarketDayHigh')),
        day_low=_positive(meta.get('regularMarketDayLow')),
        day_open=_positive(meta.get('regularMarketOpen')),
        volume=int(_positive(meta.get('regularMarketVolume')) or 0),
        fifty_two_week_high=_positive(meta.get('fiftyTwoWeekHigh')),
        fifty_two_week_low=_positive(meta.get('fiftyTwoWeekLow')),
        provider="yahoo",
    ))


def parse_chart_history(symbol: str, payload: Any) -> Result[List[Dict[str, Any]], AppError]:
    """
    Extract daily rows from a chart payload, oldest first.

    Adjusted closes are preferred over raw closes. Rows are returned as-is
    (closes may be null); cleaning is the history resolver's job.
    """
    result = _first_result(payload)
    indicators = (result or {}).get('indicators') or {}
    quotes = indicators.get('quote') or []
    if not quotes or not isinstance(quotes[0], dict):
        return Err(AppError(ErrorCode.NODATA, f"No historical data for {symbol}"))

    quote = quotes[0]
    adjclose = indicators.get('adjclose') or []
    closes = (adjclose[0].get('adjclose') if adjclose and isinstance(adjclose[0], dict) else None) \
        or quote.get('close') or []
    timestamps = result.get('timestamp') or []
    if not closes or not timestamps:
        return Err(AppError(ErrorCode.NODATA, f"Insufficient historical data for {symbol}"))

    highs = quote.get('high') or []
    lows = quote.get('low') or []
    volumes = quote.get('volume') or []

    rows = []
    for i, ts in enumerate(timestamps):
        if i >= len(closes):
            break
        rows.append({
            'date': datetime.fromtimestamp(ts, tz=timezone.utc).date(),
            'close': closes[i],
            'high': highs[i] if i < len(highs) else None,
            'low': lows[i] if i < len(lows) else None,
            'volume': volumes[i] if i < len(volumes) else None,
        })
    return Ok(rows)


class YahooFinanceAPI:
    """
    Yahoo Finance chart API client.

    Implements QuoteSource and HistorySource. No retries: a failed call is
    reported as an Err and the caller falls through to the next tier.
    """

    name = "yahoo"

    def __init__(
        self,
        base_url: str = DEFAULT_CHART_URL,
        timeout: float = 8.0,
        user_agent: str = BROWSER_USER_AGENT,
    ):
        """
        Initialize Yahoo chart client.

        Args:
            base_url: Chart endpoint (symbol is appended)
            timeout: Request timeout in seconds
            user_agent: User-Agent header (the endpoint rejects bare clients)
        """
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.headers = {'User-Agent': user_agent, 'Accept': 'application/json'}
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_count = 0
        self._error_count = 0

    async def __aenter__(self) -> 'YahooFinanceAPI':
        self._session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._session:
            await self._session.close()
            self._session = None

    def __repr__(self):
        return f"YahooFinanceAPI(base_url={self.base_url})"

    async def _get_json(self, symbol: str, params: Optional[Dict[str, Any]] = None) -> Result[Any, AppError]:
        if not self._session:
            raise RuntimeError("API must be used as async context manager")

        url = f"{self.base_url}{url_quote(symbol, safe='')}"
        self._request_count += 1
        try:
            async with self._session.get(url, params=params) as response:
                if response.status == 429:
                    self._error_count += 1
                    return Err(AppError(ErrorCode.RATELIMIT, f"Yahoo rate limit for {symbol}"))
                if response.status >= 400:
                    self._error_count += 1
                    return Err(AppError(
                        ErrorCode.EXTERNAL,
                        f"Yahoo API error: {response.status}",
                        {"symbol": symbol, "status": response.status},
                    ))
                return Ok(await response.json(content_type=None))
        except asyncio.TimeoutError:
            self._error_count += 1
            return Err(AppError(ErrorCode.TIMEOUT, f"Yahoo request timed out for {symbol}"))
        except (aiohttp.ClientError, ValueError) as e:
            self._error_count += 1
            return Err(AppError(ErrorCode.EXTERNAL, f"Yahoo request failed for {symbol}: {e}"))

    async def fetch_quote(self, symbol: str) -> Result[RawQuote, AppError]:
        """Get current quote from chart meta."""
        response = await self._get_json(symbol)
        if response.is_err:
            return Err(response.error)
        return parse_chart_quote(symbol, response.value)

    async def fetch_history(self, symbol: str, days: int = 60) -> Result[List[Dict[str, Any]], AppError]:
        """Get daily rows for the trailing `days` calendar days."""
        end = int(time.time())
        start = end - days * SECONDS_PER_DAY
        response = await self._get_json(
            symbol, {'period1': start, 'period2': end, 'interval': '1d'}
        )
        if response.is_err:
            return Err(response.error)
        return parse_chart_history(symbol, response.value)

    def get_stats(self) -> Dict[str, int]:
        return {'requests': self._request_count, 'errors': self._error_count}
