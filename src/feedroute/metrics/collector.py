"""Metrics collector for route runs.

Counts resolved items and per-item failures and keeps the failure events
themselves, so a host can inspect what degraded without the routes mixing
reporting into their fallback logic.

Example:
    >>> from feedroute.metrics import CollectionMetrics
    >>>
    >>> metrics = CollectionMetrics()
    >>> with metrics.time_operation("fetch", route="gov"):
    ...     pass
    >>> metrics.record_items("gov", count=10)
    >>> event = metrics.record_error("gov", "FetchError", key="https://www.gov.cn/a.htm")
    >>> metrics.summary().total_errors
    1
"""

from __future__ import annotations

import logging
import time
from collections import Counter, defaultdict, deque
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailureEvent:
    """One item that fell back instead of resolving."""

    route: str
    error_type: str
    key: str | None = None
    message: str = ""
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class MetricsSummary:
    """Point-in-time totals.

    ``operation_times`` maps operation name to total seconds per route.
    """

    total_items: int = 0
    total_errors: int = 0
    items_by_route: dict[str, int] = field(default_factory=dict)
    errors_by_route: dict[str, int] = field(default_factory=dict)
    errors_by_type: dict[str, int] = field(default_factory=dict)
    operation_times: dict[str, dict[str, float]] = field(default_factory=dict)

    def __str__(self) -> str:
        routes = sorted(self.items_by_route.keys() | self.errors_by_route.keys())
        lines = [f"{self.total_items:,} items, {self.total_errors} failed"]
        lines += [
            f"  {route}: {self.items_by_route.get(route, 0):,} items, {self.errors_by_route.get(route, 0)} failed"
            for route in routes
        ]
        if self.errors_by_type:
            lines.append("  by type: " + ", ".join(f"{t}={n}" for t, n in sorted(self.errors_by_type.items())))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CollectionMetrics:
    """Collects counts, timings and failure events for route runs.

    Args:
        max_events: Failure events kept in memory (oldest dropped first).
    """

    def __init__(self, max_events: int = 1000):
        self._items = Counter()
        self._errors = Counter()
        self._error_types = Counter()
        self._timings: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
        self._events: deque[FailureEvent] = deque(maxlen=max_events)

    @property
    def events(self) -> list[FailureEvent]:
        """Recorded failure events, oldest first."""
        return list(self._events)

    def record_items(self, route: str, count: int = 1) -> None:
        self._items[route] += count

    def record_error(
        self,
        route: str,
        error_type: str = "unknown",
        key: str | None = None,
        message: str = "",
    ) -> FailureEvent:
        """Record an item failure and emit it as a structured log record.

        Args:
            route: Route key
            error_type: Exception class name or category
            key: Item key (usually the detail link)
            message: Error message
        """
        event = FailureEvent(route=route, error_type=error_type, key=key, message=message)
        self._errors[route] += 1
        self._error_types[error_type] += 1
        self._events.append(event)

        logger.warning(
            f"Item failed in {route}: {error_type} ({key})",
            extra={
                "route": route,
                "error_type": error_type,
                "item_key": key,
                "error_message": message,
            },
        )
        return event

    @contextmanager
    def time_operation(
        self,
        operation: str,
        route: str = "default",
    ) -> Generator[None, None, None]:
        """Add the wall time of the block to ``operation`` for ``route``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._timings[operation][route] += time.perf_counter() - start

    def summary(self) -> MetricsSummary:
        return MetricsSummary(
            total_items=sum(self._items.values()),
            total_errors=sum(self._errors.values()),
            items_by_route=dict(self._items),
            errors_by_route=dict(self._errors),
            errors_by_type=dict(self._error_types),
            operation_times={op: dict(routes) for op, routes in self._timings.items()},
        )

    def reset(self) -> None:
        """Reset all metrics."""
        self._items.clear()
        self._errors.clear()
        self._error_types.clear()
        self._timings.clear()
        self._events.clear()

    def to_dict(self) -> dict[str, Any]:
        return self.summary().to_dict()


_global_metrics: CollectionMetrics | None = None


def get_metrics() -> CollectionMetrics:
    """Process-wide collector (created on first call)."""
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = CollectionMetrics()
    return _global_metrics


def reset_metrics() -> None:
    if _global_metrics is not None:
        _global_metrics.reset()


__all__ = [
    "CollectionMetrics",
    "FailureEvent",
    "MetricsSummary",
    "get_metrics",
    "reset_metrics",
]
