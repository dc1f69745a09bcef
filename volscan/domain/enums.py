"""
Enumerations for domain concepts.
"""

from enum import Enum


class SourceTier(Enum):
    """Rank of the data source that produced a value."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    ESTIMATED = "estimated"

    @property
    def is_estimated(self) -> bool:
        return self is SourceTier.ESTIMATED


class DataQuality(Enum):
    """Overall quality flag of a volatility analysis."""

    REAL = "real"            # quote and history both came from live sources
    ESTIMATED = "estimated"  # at least one side fell back to estimates


class RangeSource(Enum):
    """Origin of a derived price range."""

    REAL = "real"
    ESTIMATED = "estimated"


class EarningsHour(Enum):
    """When earnings are announced relative to market hours."""

    BMO = "bmo"  # Before Market Open
    AMC = "amc"  # After Market Close
    DMH = "dmh"  # During Market Hours
    UNKNOWN = ""

    @classmethod
    def parse(cls, value) -> 'EarningsHour':
        """Lenient parse of calendar 'hour' fields."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.UNKNOWN


class MarketRegime(Enum):
    """Coarse market volatility regime derived from VIX."""

    LOW = "low-volatility"            # VIX < 15
    NORMAL = "normal"                 # VIX 15-20
    ELEVATED = "elevated-volatility"  # VIX 20-30
    HIGH = "high-volatility"          # VIX > 30
    UNKNOWN = "unknown"
