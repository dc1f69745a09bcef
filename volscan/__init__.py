"""Earnings volatility scanner: resilient market data resolution and volatility scoring."""

__version__ = "1.0.0"
