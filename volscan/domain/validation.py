"""
Symbol validation.

Only the syntactic shape of a symbol is checked here; whether the symbol
actually trades is left to the data sources.
"""

import re

from volscan.domain.errors import InvalidSymbolError

# Letters/digits with optional class or index separators: BRK-B, BF.B, ^VIX
_SYMBOL_PATTERN = re.compile(r"^\^?[A-Z0-9]{1,6}([.\-][A-Z0-9]{1,3})?$")


def normalize_symbol(symbol) -> str:
    """
    Validate and normalize a ticker symbol.

    Args:
        symbol: Raw symbol (any case, surrounding whitespace allowed)

    Returns:
        Uppercase, stripped symbol

    Raises:
        InvalidSymbolError: If the symbol is empty or malformed

    Examples:
        >>> normalize_symbol(" aapl ")
        'AAPL'
        >>> normalize_symbol("brk-b")
        'BRK-B'
    """
    if not isinstance(symbol, str):
        raise InvalidSymbolError(symbol, "symbol must be a string")

    normalized = symbol.strip().upper()
    if not normalized:
        raise InvalidSymbolError(symbol, "symbol cannot be empty")

    if not _SYMBOL_PATTERN.match(normalized):
        raise InvalidSymbolError(symbol)

    if not any(ch.isalpha() for ch in normalized):
        raise InvalidSymbolError(symbol, "symbol must contain a letter")

    return normalized
