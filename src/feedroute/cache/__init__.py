"""Cache backends."""

from feedroute.cache.memory import CacheEntry, MemoryCache

__all__ = [
    "CacheEntry",
    "MemoryCache",
]
