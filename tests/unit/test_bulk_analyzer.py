"""Tests for the sequential bulk analyzer."""

import time
from unittest.mock import AsyncMock, patch

import pytest

from volscan.application.services.bulk_analyzer import BulkAnalyzer
from volscan.domain.errors import InvalidSymbolError
from volscan.utils.tracing import correlation_id
from tests.conftest import make_analysis


class TestBulkAnalyzer:
    """Tests for BulkAnalyzer.analyze_many."""

    @pytest.mark.asyncio
    async def test_preserves_input_order(self, analyzer):
        bulk = BulkAnalyzer(analyzer, request_delay=0)

        results = await bulk.analyze_many(["MSFT", "AAPL", "NVDA"])

        assert list(results) == ["MSFT", "AAPL", "NVDA"]
        assert all(results[s].symbol == s for s in results)

    @pytest.mark.asyncio
    async def test_delay_between_symbols(self, analyzer):
        """Three symbols with a 100ms delay take at least two delays."""
        bulk = BulkAnalyzer(analyzer, request_delay=0.1)

        started = time.monotonic()
        results = await bulk.analyze_many(["AAPL", "MSFT", "NVDA"])
        elapsed = time.monotonic() - started

        assert elapsed >= 0.2
        assert list(results) == ["AAPL", "MSFT", "NVDA"]

    @pytest.mark.asyncio
    async def test_no_delay_after_last_symbol(self, analyzer):
        bulk = BulkAnalyzer(analyzer, request_delay=0.5)

        with patch("volscan.application.services.bulk_analyzer.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await bulk.analyze_many(["AAPL", "MSFT", "NVDA"])

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.5)

    @pytest.mark.asyncio
    async def test_single_symbol_never_sleeps(self, analyzer):
        bulk = BulkAnalyzer(analyzer, request_delay=0.5)

        with patch("volscan.application.services.bulk_analyzer.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await bulk.analyze_many(["AAPL"])

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_symbol_recorded_as_none(self, analyzer):
        """An invalid symbol does not abort the batch."""
        bulk = BulkAnalyzer(analyzer, request_delay=0)

        results = await bulk.analyze_many(["AAPL", "$$$", "MSFT"])

        assert results["$$$"] is None
        assert results["AAPL"] is not None
        assert results["MSFT"] is not None
        assert list(results) == ["AAPL", "$$$", "MSFT"]

    @pytest.mark.asyncio
    async def test_each_symbol_gets_own_correlation_id(self):
        seen = []

        async def fake_analyze(symbol):
            seen.append(correlation_id.get())
            if symbol == "BAD":
                raise InvalidSymbolError(symbol)
            return make_analysis(symbol)

        analyzer = AsyncMock()
        analyzer.analyze.side_effect = fake_analyze
        bulk = BulkAnalyzer(analyzer, request_delay=0)

        await bulk.analyze_many(["AAPL", "BAD", "MSFT"])

        assert len(set(seen)) == 3
        assert None not in seen
        assert correlation_id.get() is None

    @pytest.mark.asyncio
    async def test_empty_input(self, analyzer):
        assert await BulkAnalyzer(analyzer).analyze_many([]) == {}
