"""External market data API clients."""

from .yahoo_async import YahooFinanceAPI
from .finnhub_async import FinnhubAPI

__all__ = ['YahooFinanceAPI', 'FinnhubAPI']
