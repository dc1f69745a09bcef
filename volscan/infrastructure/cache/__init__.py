"""Cache implementations."""

from .memory_cache import MemoryCache

__all__ = ['MemoryCache']
