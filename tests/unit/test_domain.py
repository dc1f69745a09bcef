"""Tests for domain errors, validation, enums and reference data."""

import pytest

from volscan.domain.enums import EarningsHour, MarketRegime, SourceTier
from volscan.domain.errors import AppError, Err, ErrorCode, InvalidSymbolError, Ok
from volscan.domain.market_regime import classify_vix_regime
from volscan.domain.reference_data import is_in_stock_universe
from volscan.domain.validation import normalize_symbol


class TestResult:
    """Tests for Result."""

    def test_ok(self):
        result = Ok(5)
        assert result.is_ok
        assert not result.is_err
        assert result.unwrap() == 5

    def test_ok_none(self):
        assert Ok(None).is_ok

    def test_err(self):
        error = AppError(ErrorCode.NODATA, "nothing")
        result = Err(error)
        assert result.is_err
        assert result.error is error
        with pytest.raises(RuntimeError):
            result.unwrap()

    def test_error_str(self):
        error = AppError(ErrorCode.TIMEOUT, "slow", {"tier": "primary"})
        assert str(error) == "TIMEOUT: slow | {'tier': 'primary'}"


class TestNormalizeSymbol:
    """Tests for normalize_symbol."""

    @pytest.mark.parametrize("raw, expected", [
        ("aapl", "AAPL"),
        ("  msft ", "MSFT"),
        ("brk-b", "BRK-B"),
        ("BF.B", "BF.B"),
        ("^vix", "^VIX"),
        ("F", "F"),
    ])
    def test_valid(self, raw, expected):
        assert normalize_symbol(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "TOOLONGSYM", "AA PL", "$$$", "1234", "A-BCDE", None, 42])
    def test_invalid(self, raw):
        with pytest.raises(InvalidSymbolError):
            normalize_symbol(raw)

    def test_invalid_symbol_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_symbol("!!")


class TestEnums:
    """Tests for enum helpers."""

    def test_estimated_tier(self):
        assert SourceTier.ESTIMATED.is_estimated
        assert not SourceTier.SECONDARY.is_estimated

    @pytest.mark.parametrize("raw, hour", [
        ("bmo", EarningsHour.BMO),
        ("AMC", EarningsHour.AMC),
        ("dmh", EarningsHour.DMH),
        ("", EarningsHour.UNKNOWN),
        (None, EarningsHour.UNKNOWN),
        ("later", EarningsHour.UNKNOWN),
    ])
    def test_earnings_hour_parse(self, raw, hour):
        assert EarningsHour.parse(raw) is hour


class TestVixRegime:
    """Tests for classify_vix_regime."""

    @pytest.mark.parametrize("vix, regime", [
        (None, MarketRegime.UNKNOWN),
        (-1.0, MarketRegime.UNKNOWN),
        (14.9, MarketRegime.LOW),
        (15.0, MarketRegime.NORMAL),
        (20.0, MarketRegime.NORMAL),
        (20.1, MarketRegime.ELEVATED),
        (30.0, MarketRegime.ELEVATED),
        (30.1, MarketRegime.HIGH),
    ])
    def test_boundaries(self, vix, regime):
        assert classify_vix_regime(vix) is regime


class TestStockUniverse:
    """Tests for is_in_stock_universe."""

    def test_members(self):
        assert is_in_stock_universe("AAPL")
        assert is_in_stock_universe("brk-b")

    def test_non_members(self):
        assert not is_in_stock_universe("ZZZZ")
        assert not is_in_stock_universe(None)
