"""Detail resolution.

For every descriptor, produce its full content either from inline data or
from a second fetch, memoized by absolute link through the cache
collaborator.

Resolution of a list is dispatched concurrently and awaited jointly; the
result list has the same order as the descriptors regardless of which
fetch finishes first. A failing item is reported to the metrics collector
and replaced by the caller's fallback. It is never retried, never cached,
and never cancels its siblings.

Example:
    >>> resolver = DetailResolver(cache=MemoryCache(), route="gov")
    >>> items = await resolver.resolve_all(descriptors, fetch_detail, fallback)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta
from typing import TypeVar

from feedroute.metrics.collector import CollectionMetrics
from feedroute.models.feed import ItemDescriptor
from feedroute.protocols.cache import CacheBackend, try_get

logger = logging.getLogger(__name__)

T = TypeVar("T")

Compute = Callable[[ItemDescriptor], Awaitable[T]]
Fallback = Callable[[ItemDescriptor, Exception], T | None]


def cache_key(descriptor: ItemDescriptor) -> str:
    """Cache key of a descriptor: its absolute link, else its identifier."""
    if descriptor.link:
        return descriptor.link
    return str(descriptor.identifier)


class DetailResolver:
    """Read-through detail resolver with per-item failure isolation.

    Args:
        cache: Cache backend; None computes every item fresh.
        metrics: Collector receiving failure events.
        route: Route key used in failure events.
        ttl: Lifetime of cached results (backend default when None).
    """

    def __init__(
        self,
        cache: CacheBackend | None = None,
        metrics: CollectionMetrics | None = None,
        route: str = "default",
        ttl: timedelta | int | None = None,
    ) -> None:
        self.cache = cache
        self.metrics = metrics
        self.route = route
        self.ttl = ttl

    async def resolve(self, descriptor: ItemDescriptor, compute: Compute[T]) -> T:
        """Resolve one descriptor through the cache. Errors propagate."""
        return await try_get(
            self.cache,
            cache_key(descriptor),
            lambda: compute(descriptor),
            ttl=self.ttl,
        )

    async def resolve_all(
        self,
        descriptors: Sequence[ItemDescriptor],
        compute: Compute[T],
        fallback: Fallback[T],
    ) -> list[T | None]:
        """Resolve every descriptor concurrently, preserving order.

        Args:
            descriptors: Items from the list extractor.
            compute: Produces the resolved value on a cache miss.
            fallback: Replacement for a failed item; returning None or raising
                drops it.

        Returns:
            One entry per descriptor, in descriptor order.
        """

        async def resolve_one(descriptor: ItemDescriptor) -> T | None:
            try:
                return await self.resolve(descriptor, compute)
            except Exception as e:
                self.report_failure(descriptor, e)
                try:
                    return fallback(descriptor, e)
                except Exception as fallback_error:
                    # the item is dropped; its siblings still resolve
                    self.report_failure(descriptor, fallback_error)
                    return None

        results = await asyncio.gather(*(resolve_one(d) for d in descriptors))
        if self.metrics is not None:
            self.metrics.record_items(self.route, count=sum(r is not None for r in results))
        return list(results)

    def report_failure(self, descriptor: ItemDescriptor, error: Exception) -> None:
        """Emit a failure event; has no effect on the returned value."""
        if self.metrics is not None:
            self.metrics.record_error(
                self.route,
                type(error).__name__,
                key=cache_key(descriptor),
                message=str(error),
            )
        else:
            logger.warning(f"Item failed in {self.route}: {cache_key(descriptor)}: {error}")
