"""
Static per-symbol reference tables.

These are hand-maintained heuristics used when live data is missing or when
an estimate (implied volatility, options activity) is all we can produce.
None of these numbers are market-derived.
"""

from typing import Dict, FrozenSet

__all__ = [
    'DEFAULT_ESTIMATED_VOLATILITY',
    'DEFAULT_IV_PREMIUM',
    'DEFAULT_OPTIONS_ACTIVITY',
    'ESTIMATED_VOLATILITY',
    'IV_PREMIUMS',
    'OPTIONS_ACTIVITY_MULTIPLIERS',
    'STOCK_UNIVERSE',
    'is_in_stock_universe',
]

DEFAULT_ESTIMATED_VOLATILITY = 30.0
DEFAULT_IV_PREMIUM = 1.1
DEFAULT_OPTIONS_ACTIVITY = 1.0

# Typical annualized volatility (%) by name, grouped by sector
ESTIMATED_VOLATILITY: Dict[str, float] = {
    # Mega tech
    'AAPL': 28, 'MSFT': 26, 'GOOGL': 30, 'GOOG': 30, 'AMZN': 32, 'META': 35,
    # High vol tech
    'TSLA': 50, 'NVDA': 38, 'NFLX': 40, 'UBER': 42, 'SNAP': 48, 'TWLO': 45,
    'SHOP': 38, 'SNOW': 40, 'PLTR': 48, 'RBLX': 45,
    # Crypto / meme
    'COIN': 55, 'GME': 60, 'AMC': 65,
    # Biotech / pharma
    'MRNA': 55, 'BIIB': 38, 'GILD': 30, 'REGN': 35, 'PFE': 22, 'JNJ': 18,
    'MRK': 20, 'LLY': 24,
    # Semiconductors
    'AMD': 42, 'INTC': 30, 'QCOM': 32, 'MU': 45, 'AMAT': 32, 'LRCX': 35,
    'KLAC': 34,
    # Consumer / retail
    'DIS': 28, 'NKE': 25, 'SBUX': 26, 'MCD': 18, 'COST': 20, 'HD': 22,
    'TGT': 24, 'LOW': 23,
    # Financials
    'JPM': 25, 'BAC': 28, 'GS': 30, 'MS': 32, 'C': 35, 'WFC': 24,
    # Energy / industrials
    'XOM': 28, 'CVX': 25, 'CAT': 26, 'BA': 35, 'GE': 30,
    # Communications
    'VZ': 18, 'T': 20, 'TMUS': 22, 'CMCSA': 24,
    # Staples
    'PG': 16, 'KO': 17, 'PEP': 18, 'WMT': 19, 'MNST': 24,
}

# Implied-over-historical premium multipliers
IV_PREMIUMS: Dict[str, float] = {
    # High premium (meme, biotech, high beta)
    'TSLA': 1.25, 'GME': 1.4, 'AMC': 1.35, 'MRNA': 1.3, 'SNAP': 1.25,
    'PLTR': 1.3,
    # Moderate premium (growth tech)
    'NVDA': 1.15, 'GOOGL': 1.15, 'AMZN': 1.2, 'META': 1.2, 'NFLX': 1.15,
    'AMD': 1.2,
    # Low premium (stable large caps)
    'AAPL': 1.05, 'MSFT': 1.05, 'JPM': 1.0, 'JNJ': 0.95, 'PG': 0.95,
    'KO': 0.95,
}

# Options activity relative to a typical name with the same stock volume
OPTIONS_ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    'AAPL': 3.0, 'SPY': 5.0, 'QQQ': 4.0, 'TSLA': 2.8, 'NVDA': 2.5,
    'AMD': 2.2, 'META': 2.0, 'MSFT': 1.8, 'GOOGL': 1.5, 'AMZN': 1.7,
    'NFLX': 2.0, 'DIS': 1.5, 'SPOT': 1.8, 'AMAT': 1.6, 'ARM': 2.2,
}

# Curated S&P 500 / NASDAQ 100 names with liquid options
STOCK_UNIVERSE: FrozenSet[str] = frozenset([
    # Core / mega tech
    'AAPL', 'MSFT', 'GOOGL', 'GOOG', 'AMZN', 'NVDA', 'META', 'TSLA', 'ADBE',
    'NFLX',
    # Financials
    'BRK-B', 'JPM', 'GS', 'MS', 'C', 'BAC', 'WFC', 'BLK', 'AXP', 'ICE',
    'SCHW', 'COF',
    # Healthcare / biotech / pharma
    'UNH', 'JNJ', 'PFE', 'LLY', 'MRK', 'ABT', 'MDT', 'BIIB', 'GILD', 'AMGN',
    'REGN', 'ISRG', 'MRNA',
    # Consumer
    'V', 'MA', 'HD', 'DIS', 'MCD', 'COST', 'NKE', 'KO', 'PEP', 'PG', 'SBUX',
    'TGT', 'LOW', 'LULU',
    # Semiconductors / hardware
    'CSCO', 'INTC', 'QCOM', 'TXN', 'AMD', 'AMAT', 'ASML', 'ADI', 'LRCX',
    'KLAC', 'MU', 'NXPI',
    # Software / cloud
    'INTU', 'CRM', 'ORCL', 'NOW', 'SNPS', 'ADSK', 'PYPL', 'ZM', 'DOCU',
    'OKTA',
    # Communications / media
    'VZ', 'T', 'TMUS', 'CMCSA', 'CHTR', 'CMG', 'SIRI', 'TTWO', 'EBAY', 'EXC',
    'MAR', 'MELI', 'MNST', 'VRTX', 'ZTS',
    # Industrials / energy
    'XOM', 'CVX', 'COP', 'SLB', 'CAT', 'BA', 'HON', 'GE', 'UNP', 'UPS', 'DE',
    'RTX',
    # Growth
    'UBER', 'LYFT', 'SHOP', 'SNAP', 'ETSY', 'ROKU', 'SPOT', 'TWLO', 'SNOW',
    'PLTR', 'COIN', 'RBLX', 'SOFI', 'PTON', 'ARM',
])


def is_in_stock_universe(symbol) -> bool:
    """True if symbol is part of the curated universe."""
    if not isinstance(symbol, str):
        return False
    return symbol.upper() in STOCK_UNIVERSE
