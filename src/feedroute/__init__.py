"""
feedroute - List-to-Feed Extraction Pipeline.

feedroute turns web listing pages and JSON APIs that publish no feed of
their own into RSS feeds. Each site is a small declarative route on top of
one shared pipeline.

Pipeline:
- List extraction: CSS-selected links or flattened API records
- Detail resolution: concurrent, order-preserving, memoized by link
- Normalization: loose dates, gzip byte-array payloads, GBK pages,
  lazy-loaded images and decoration markers
- Assembly: channel metadata plus the resolved items

Quick Start:
    >>> from feedroute import get_route
    >>> GovRoute = get_route("gov")
    >>> async with GovRoute() as route:
    ...     feed = await route.run()
    >>> print(feed.to_rss())

Architecture:
    Routes: BaseRoute subclasses, registered by key or via the
        "feedroute.routes" entry-point group
    Cache: MemoryCache (any CacheBackend works)
    HTTP: HttpClient over httpx
"""

__version__ = "0.1.0"

# Cache backends
from feedroute.cache.memory import MemoryCache

# Core
from feedroute.core.config import Settings, get_settings
from feedroute.core.exceptions import (
    ConfigurationError,
    ContentDecodeError,
    FeedRouteError,
    FetchError,
    RouteError,
    RouteNotFoundError,
)

# HTML and HTTP
from feedroute.html.document import HtmlDocument
from feedroute.http.client import HttpClient

# Metrics
from feedroute.metrics.collector import CollectionMetrics, get_metrics

# Models
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo

# Normalization
from feedroute.normalize.dates import parse_date
from feedroute.normalize.encoding import decode_bytes, inflate_payload
from feedroute.normalize.sanitize import fix_images, remove_marked

# Pipeline
from feedroute.pipeline import (
    DetailResolver,
    ListingPipeline,
    PipelineConfig,
    assemble_feed,
    flatten_groups,
    select_links,
)

# Protocols
from feedroute.protocols import CacheBackend, Route, TreeNode, try_get

# Routes
from feedroute.routes import BaseRoute, get_route, list_routes, register_route

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "FeedRouteError",
    "FetchError",
    "ContentDecodeError",
    "RouteError",
    "RouteNotFoundError",
    "ConfigurationError",
    # Models
    "FeedDocument",
    "ItemDescriptor",
    "NormalizedItem",
    "RouteInfo",
    # Protocols
    "CacheBackend",
    "Route",
    "TreeNode",
    "try_get",
    # Infrastructure
    "MemoryCache",
    "HttpClient",
    "HtmlDocument",
    "CollectionMetrics",
    "get_metrics",
    # Normalization
    "parse_date",
    "decode_bytes",
    "inflate_payload",
    "fix_images",
    "remove_marked",
    # Pipeline
    "DetailResolver",
    "ListingPipeline",
    "PipelineConfig",
    "assemble_feed",
    "flatten_groups",
    "select_links",
    # Routes
    "BaseRoute",
    "get_route",
    "list_routes",
    "register_route",
]
