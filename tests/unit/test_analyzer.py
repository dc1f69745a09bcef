"""Tests for VolatilityAnalyzer."""

import pytest

from volscan.application.services.analyzer import PLACEHOLDER_PRICE, VolatilityAnalyzer
from volscan.domain.enums import DataQuality, RangeSource, SourceTier
from volscan.domain.errors import InvalidSymbolError
from volscan.domain.types import RawQuote
from tests.conftest import FakeFiftyTwoWeekSource, make_rows, raw_quote, wavy_closes


class TestVolatilityAnalyzer:
    """Tests for VolatilityAnalyzer.analyze."""

    @pytest.mark.asyncio
    async def test_real_analysis(self, analyzer, primary, history_source):
        primary.responses["AAPL"] = raw_quote(150.5, 149.0, volume=50_000_000)
        history_source.responses["AAPL"] = make_rows(wavy_closes(40))

        analysis = await analyzer.analyze("AAPL")

        assert analysis.symbol == "AAPL"
        assert analysis.data_quality is DataQuality.REAL
        assert analysis.data_sources.quote is SourceTier.PRIMARY
        assert analysis.data_sources.historical is SourceTier.PRIMARY
        assert analysis.current_price == 150.5
        assert analysis.historical_volatility > 0
        assert analysis.implied_volatility == round(analysis.historical_volatility * 1.05, 1)
        assert analysis.five_week_range.source is RangeSource.REAL
        assert 0 <= analysis.volatility_score <= 100

    @pytest.mark.asyncio
    async def test_symbol_normalized(self, analyzer, primary):
        primary.responses["AAPL"] = raw_quote()

        analysis = await analyzer.analyze("  aapl ")

        assert analysis.symbol == "AAPL"
        assert primary.calls == ["AAPL"]

    @pytest.mark.asyncio
    async def test_both_quote_sources_fail(self, analyzer, primary, secondary, history_source):
        """All-estimated branch: placeholder price, no exception."""
        primary.responses["AAPL"] = RuntimeError("boom")
        secondary.responses["AAPL"] = RuntimeError("boom")

        analysis = await analyzer.analyze("AAPL")

        assert analysis.data_quality is DataQuality.ESTIMATED
        assert analysis.current_price == PLACEHOLDER_PRICE
        assert analysis.volume == 0
        assert analysis.change == 0
        assert analysis.data_sources.quote is SourceTier.ESTIMATED
        assert analysis.data_sources.historical is SourceTier.ESTIMATED
        assert analysis.historical_volatility == 28
        assert analysis.five_week_range.source is RangeSource.ESTIMATED
        assert history_source.calls == []

    @pytest.mark.asyncio
    async def test_history_missing_estimates_volatility(self, analyzer, primary):
        """Live quote with no history is still 'estimated' overall."""
        primary.responses["TSLA"] = raw_quote(200.0, 190.0)

        analysis = await analyzer.analyze("TSLA")

        assert analysis.data_quality is DataQuality.ESTIMATED
        assert analysis.data_sources.quote is SourceTier.PRIMARY
        assert analysis.data_sources.historical is SourceTier.ESTIMATED
        assert analysis.historical_volatility == 50
        assert analysis.current_price == 200.0

    @pytest.mark.asyncio
    async def test_secondary_quote_is_real_with_history(self, analyzer, primary, secondary, history_source):
        """Secondary is a live tier, so quality stays real."""
        secondary.responses["MSFT"] = RawQuote(price=400.0, previous_close=396.0)
        history_source.responses["MSFT"] = make_rows(wavy_closes(30, base=400))

        analysis = await analyzer.analyze("MSFT")

        assert analysis.data_quality is DataQuality.REAL
        assert analysis.data_sources.quote is SourceTier.SECONDARY

    @pytest.mark.asyncio
    async def test_five_week_range_from_recent_points(self, analyzer, primary, history_source):
        """With 25+ points the range is the min/max of the last 25 closes."""
        closes = [300.0, 5.0] + [100.0 + (i % 7) for i in range(28)]
        primary.responses["AAPL"] = raw_quote(103.0, 102.0)
        history_source.responses["AAPL"] = make_rows(closes)

        analysis = await analyzer.analyze("AAPL")

        recent = closes[-25:]
        assert analysis.five_week_range.source is RangeSource.REAL
        assert analysis.five_week_range.high == max(recent)
        assert analysis.five_week_range.low == min(recent)

    @pytest.mark.asyncio
    async def test_invalid_symbol_raises(self, analyzer, primary):
        with pytest.raises(InvalidSymbolError):
            await analyzer.analyze("NOT A SYMBOL!")
        assert primary.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("symbol", ["AAPL", "ZZZZ", "BRK-B", "GME"])
    async def test_always_well_formed(self, analyzer, symbol):
        """Any valid symbol yields a bounded analysis even with no data at all."""
        analysis = await analyzer.analyze(symbol)

        assert analysis is not None
        assert analysis.historical_volatility >= 0
        assert analysis.implied_volatility >= 0
        assert 0 <= analysis.volatility_score <= 100
        assert 20 <= analysis.technical_indicators.rsi <= 80

    @pytest.mark.asyncio
    async def test_fifty_two_week_from_quote(self, analyzer, primary):
        primary.responses["AAPL"] = raw_quote(fifty_two_week_high=200.0, fifty_two_week_low=120.0)

        analysis = await analyzer.analyze("AAPL")

        assert (analysis.fifty_two_week_high, analysis.fifty_two_week_low) == (200.0, 120.0)

    @pytest.mark.asyncio
    async def test_fifty_two_week_from_metric_source(self, quote_resolver, history_resolver, primary):
        metrics = FakeFiftyTwoWeekSource({"AAPL": (210.0, 110.0)})
        analyzer = VolatilityAnalyzer(quote_resolver, history_resolver, fifty_two_week_source=metrics)
        primary.responses["AAPL"] = raw_quote()

        analysis = await analyzer.analyze("AAPL")

        assert (analysis.fifty_two_week_high, analysis.fifty_two_week_low) == (210.0, 110.0)
        assert metrics.calls == ["AAPL"]

    @pytest.mark.asyncio
    async def test_fifty_two_week_from_history(self, analyzer, primary, history_source):
        primary.responses["AAPL"] = raw_quote()
        history_source.responses["AAPL"] = make_rows([100.0, 110.0, 90.0])

        analysis = await analyzer.analyze("AAPL")

        assert analysis.fifty_two_week_high == pytest.approx(110.0 * 1.01)
        assert analysis.fifty_two_week_low == pytest.approx(90.0 * 0.99)

    @pytest.mark.asyncio
    async def test_to_dict_shape_is_identical(self, analyzer, primary, history_source):
        """Degraded and real analyses expose the same keys."""
        primary.responses["AAPL"] = raw_quote()
        history_source.responses["AAPL"] = make_rows(wavy_closes(30))
        real = (await analyzer.analyze("AAPL")).to_dict()
        estimated = (await analyzer.analyze("ZZZZ")).to_dict()

        assert real.keys() == estimated.keys()
        assert real["dataQuality"] == "real"
        assert estimated["dataQuality"] == "estimated"
