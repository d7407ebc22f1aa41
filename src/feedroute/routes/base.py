"""Base route implementation.

Provides ``BaseRoute``, the abstract base class every site route extends.
It owns the collaborators a route needs (HTTP client, detail cache,
metrics), validates path parameters, and turns list-level failures into
``RouteError``.

Example:
    >>> from feedroute.routes.base import BaseRoute
    >>> class MyRoute(BaseRoute):
    ...     key = "example"
    ...     info = RouteInfo(path="/latest", name="Latest", url="https://example.com")
    ...     async def collect(self, params):
    ...         return assemble_feed("Example", "https://example.com")
    >>> feed = await MyRoute().run()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar

from feedroute.cache.memory import MemoryCache
from feedroute.core.config import Settings, get_settings
from feedroute.core.exceptions import ConfigurationError, FeedRouteError, RouteError
from feedroute.http.client import HttpClient
from feedroute.metrics.collector import CollectionMetrics, get_metrics
from feedroute.models.feed import FeedDocument, RouteInfo
from feedroute.pipeline.listing import DetailParser, LinkRewriter, ListingPipeline, PipelineConfig
from feedroute.protocols.cache import CacheBackend

logger = logging.getLogger(__name__)


class BaseRoute(ABC):
    """Base class for site routes.

    Subclasses set ``key`` and ``info`` and implement ``collect``.

    Args:
        client: HTTP client; one is built from settings when omitted and
            closed by ``close``.
        cache: Detail cache; defaults to a ``MemoryCache`` when caching is
            enabled in settings.
        metrics: Failure collector; defaults to the process-wide one.
        settings: Settings; loaded from the environment when omitted.
    """

    key: ClassVar[str]
    info: ClassVar[RouteInfo]

    def __init__(
        self,
        client: HttpClient | None = None,
        cache: CacheBackend | None = None,
        metrics: CollectionMetrics | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self.client = client or HttpClient(
            user_agent=self.settings.user_agent,
            timeout=self.settings.request_timeout,
        )
        if cache is None and self.settings.cache_enabled:
            cache = MemoryCache(default_ttl=self.settings.cache_ttl)
        self.cache = cache
        self.metrics = metrics or get_metrics()

    async def run(self, params: Mapping[str, str] | None = None) -> FeedDocument:
        """Fetch the source and return the assembled feed.

        Raises:
            ConfigurationError: If a path parameter is missing.
            RouteError: If the listing could not be fetched or parsed.
        """
        values = self.validate_params(params)
        logger.info(f"Running route {self.key} {values or ''}".rstrip())
        try:
            with self.metrics.time_operation("run", self.key):
                feed = await self.collect(values)
        except (ConfigurationError, RouteError):
            raise
        except FeedRouteError as e:
            raise RouteError(f"Route {self.key} failed: {e}", route=self.key, cause=e) from e
        except Exception as e:
            logger.exception(f"Unexpected error in route {self.key}")
            raise RouteError(f"Route {self.key} failed: {e}", route=self.key, cause=e) from e
        logger.info(f"Route {self.key} produced {len(feed.item)} items")
        return feed

    @abstractmethod
    async def collect(self, params: dict[str, str]) -> FeedDocument:
        """Produce the feed. Implemented by each route."""
        ...

    def validate_params(self, params: Mapping[str, str] | None) -> dict[str, str]:
        """Check that every ``:param`` of the path template has a value."""
        values = {k: str(v).strip() for k, v in (params or {}).items()}
        missing = [name for name in self.info.path_parameters if not values.get(name)]
        if missing:
            raise ConfigurationError(f"Route {self.key} requires parameter(s): {', '.join(missing)}")
        return values

    def pipeline(
        self,
        config: PipelineConfig,
        parse_detail: DetailParser,
        rewrite_link: LinkRewriter | None = None,
    ) -> ListingPipeline:
        """Listing pipeline wired to this route's collaborators."""
        return ListingPipeline(
            config,
            self.client,
            parse_detail=parse_detail,
            cache=self.cache,
            metrics=self.metrics,
            route=self.key,
            rewrite_link=rewrite_link,
            cache_ttl=self.settings.cache_ttl or None,
        )

    async def close(self) -> None:
        """Close the HTTP client if this route created it."""
        if self._owns_client:
            await self.client.close()

    async def __aenter__(self) -> BaseRoute:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"
