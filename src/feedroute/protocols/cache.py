"""Cache backend protocol.

Defines the interface the pipeline expects from a cache collaborator
(Redis, Memcached, in-memory) and the read-through helper built on it.

Example:
    >>> from feedroute.protocols.cache import CacheBackend
    >>> hasattr(CacheBackend, "get")
    True
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class CacheBackend(Protocol):
    """Cache backend protocol.

    Implementations must provide async get/set/delete operations
    with optional TTL support. They must tolerate concurrent callers.
    """

    async def get(self, key: str) -> Any | None:
        """Get value from cache."""
        ...

    async def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | int | None = None,
    ) -> None:
        """Set value in cache with optional TTL."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete from cache. Returns True if existed."""
        ...

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        ...

    async def clear(self, pattern: str | None = None) -> int:
        """Clear cache entries. Returns count cleared."""
        ...


async def try_get(
    cache: CacheBackend | None,
    key: str,
    compute: Callable[[], Awaitable[T]],
    ttl: timedelta | int | None = None,
) -> T:
    """Read-through lookup: return the cached value or compute and store it.

    There is no per-key lock. Two concurrent misses both compute and both
    write; the later write wins. Exceptions from ``compute`` propagate and
    nothing is stored, so failures are retried on the next call. A cached
    ``None`` counts as a miss.

    Args:
        cache: Cache backend, or None to always compute.
        key: Cache key (routes use the absolute item link).
        compute: Coroutine factory producing the value on a miss.
        ttl: Optional time-to-live for stored values.

    Example:
        >>> import asyncio
        >>> from feedroute.cache.memory import MemoryCache
        >>> cache = MemoryCache()
        >>> async def compute():
        ...     return "fresh"
        >>> asyncio.run(try_get(cache, "k", compute))
        'fresh'
    """
    if cache is None:
        return await compute()

    cached = await cache.get(key)
    if cached is not None:
        return cached

    value = await compute()
    if value is not None:
        await cache.set(key, value, ttl=ttl)
    return value
