"""
In-memory cache with TTL support.

Holds live quotes for a single run. Each entry carries its own expiry so
callers can override the default TTL per key.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class MemoryCache:
    """
    In-memory cache with per-entry TTL and oldest-first eviction.

    Not guarded for concurrent writers; share one instance per sequential
    pipeline (or per worker).
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize memory cache.

        Args:
            ttl_seconds: Default time-to-live for cache entries
            max_size: Maximum number of entries before eviction
            clock: Monotonic time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        # key -> (stored_at, expires_at, value)
        self._entries: Dict[str, Tuple[float, float, Any]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get cached value by key.

        Returns:
            Cached value or None if expired/missing
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            logger.debug(f"Cache MISS: {key}")
            return None

        stored_at, expires_at, value = entry
        now = self._clock()
        if now >= expires_at:
            del self._entries[key]
            self._misses += 1
            logger.debug(f"Cache EXPIRED: {key} (age: {now - stored_at:.1f}s)")
            return None

        self._hits += 1
        logger.debug(f"Cache HIT: {key} (age: {now - stored_at:.1f}s)")
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Set cached value with optional custom TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Optional custom TTL in seconds
        """
        if len(self._entries) >= self.max_size and key not in self._entries:
            self._evict_oldest()

        effective_ttl = ttl if ttl is not None else self.ttl_seconds
        now = self._clock()
        self._entries[key] = (now, now + effective_ttl, value)
        logger.debug(f"Cache SET: {key} (TTL: {effective_ttl}s)")

    def size(self) -> int:
        """Get current cache size."""
        return len(self._entries)

    def _evict_oldest(self) -> None:
        if not self._entries:
            return
        oldest_key = min(self._entries.items(), key=lambda item: item[1][0])[0]
        del self._entries[oldest_key]
        logger.debug(f"Cache EVICTED: {oldest_key} (max size reached)")

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_pct": (self._hits / lookups * 100) if lookups else 0,
        }
