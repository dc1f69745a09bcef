"""Tests for MemoryCache."""

from volscan.infrastructure.cache.memory_cache import MemoryCache
from tests.conftest import FakeClock


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_set_and_get(self):
        cache = MemoryCache(clock=FakeClock())
        cache.set("k", "v")
        assert cache.get("k") == "v"

    def test_miss(self):
        assert MemoryCache().get("missing") is None

    def test_expires_after_ttl(self):
        clock = FakeClock()
        cache = MemoryCache(ttl_seconds=300, clock=clock)
        cache.set("k", "v")

        clock.advance(299)
        assert cache.get("k") == "v"

        clock.advance(1)
        assert cache.get("k") is None
        assert cache.size() == 0

    def test_custom_ttl_per_entry(self):
        clock = FakeClock()
        cache = MemoryCache(ttl_seconds=300, clock=clock)
        cache.set("short", 1, ttl=10)
        cache.set("long", 2)

        clock.advance(11)

        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_evicts_oldest_when_full(self):
        clock = FakeClock()
        cache = MemoryCache(max_size=2, clock=clock)
        cache.set("a", 1)
        clock.advance(1)
        cache.set("b", 2)
        clock.advance(1)
        cache.set("c", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_stats(self):
        cache = MemoryCache(clock=FakeClock())
        cache.set("a", 1)
        cache.get("a")
        cache.get("b")

        stats = cache.get_stats()

        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate_pct"] == 50
