"""Process-local detail cache.

``MemoryCache`` implements ``CacheBackend`` for tests, the CLI and
single-process hosts. Routes store normalized items here keyed by their
absolute link. Deadlines are measured on a monotonic clock that tests can
replace.

Example:
    >>> import asyncio
    >>> from feedroute.cache.memory import MemoryCache
    >>> cache = MemoryCache(default_ttl=60)
    >>> asyncio.run(cache.set("https://www.gov.cn/a.htm", {"title": "A"}))
    >>> asyncio.run(cache.get("https://www.gov.cn/a.htm"))
    {'title': 'A'}
"""

from __future__ import annotations

import fnmatch
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

from feedroute.protocols.cache import try_get

T = TypeVar("T")

Clock = Callable[[], float]


def ttl_seconds(ttl: timedelta | int | None) -> float | None:
    """Normalize a TTL to seconds; None and zero mean no expiry."""
    if ttl is None:
        return None
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    return seconds or None


@dataclass(slots=True)
class CacheEntry:
    """Stored value and its monotonic deadline (None never expires)."""

    value: Any
    deadline: float | None = None

    def alive(self, now: float) -> bool:
        return self.deadline is None or now < self.deadline


class MemoryCache:
    """Dict-backed cache with per-entry expiry.

    Every operation completes without awaiting, so concurrent coroutines in
    one event loop never observe a partial write. Expired entries are
    dropped lazily on access or by ``purge_expired``.

    Args:
        default_ttl: Lifetime used when ``set`` gets no ``ttl``.
        clock: Monotonic time source in seconds.
    """

    def __init__(self, default_ttl: timedelta | int | None = None, clock: Clock = time.monotonic) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl
        self._clock = clock
        self.hits = 0
        self.misses = 0

    def _live(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is not None and not entry.alive(self._clock()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        entry = self._live(key)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return entry.value

    async def set(self, key: str, value: Any, ttl: timedelta | int | None = None) -> None:
        seconds = ttl_seconds(self._default_ttl if ttl is None else ttl)
        deadline = None if seconds is None else self._clock() + seconds
        self._entries[key] = CacheEntry(value=value, deadline=deadline)

    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return self._live(key) is not None

    async def clear(self, pattern: str | None = None) -> int:
        """Drop entries whose key matches a glob (all when None).

        Example:
            >>> import asyncio
            >>> cache = MemoryCache()
            >>> asyncio.run(cache.set("https://www.gov.cn/1", "a"))
            >>> asyncio.run(cache.set("https://www.pbc.gov.cn/1", "b"))
            >>> asyncio.run(cache.clear("https://www.gov.cn/*"))
            1
        """
        if pattern is None:
            doomed = list(self._entries)
        else:
            doomed = [k for k in self._entries if fnmatch.fnmatch(k, pattern)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        doomed = [k for k, entry in self._entries.items() if not entry.alive(now)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    async def try_get(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        ttl: timedelta | int | None = None,
    ) -> T:
        """Read-through lookup; see :func:`feedroute.protocols.cache.try_get`."""
        return await try_get(self, key, compute, ttl=ttl)

    def __len__(self) -> int:
        return len(self._entries)
