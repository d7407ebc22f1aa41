"""feedroute metrics and observability.

Example:
    >>> from feedroute.metrics import CollectionMetrics
    >>>
    >>> metrics = CollectionMetrics()
    >>> metrics.record_items("stats", count=10)
    >>> event = metrics.record_error("stats", "FetchError", key="https://www.stats.gov.cn/x.html")
    >>> print(metrics.summary())
"""

from feedroute.metrics.collector import (
    CollectionMetrics,
    FailureEvent,
    MetricsSummary,
    get_metrics,
    reset_metrics,
)

__all__ = [
    "CollectionMetrics",
    "FailureEvent",
    "MetricsSummary",
    "get_metrics",
    "reset_metrics",
]
