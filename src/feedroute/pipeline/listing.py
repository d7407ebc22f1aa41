"""Generic listing pipeline for HTML sources.

Most routes follow the same shape: fetch a listing page, select up to N
links, fetch each detail page (memoized by link), parse it into a
``NormalizedItem``. ``ListingPipeline`` runs that shape from an immutable
``PipelineConfig`` plus a route-supplied ``parse_detail`` callback.

Example:
    >>> config = PipelineConfig(
    ...     list_url="https://www.gov.cn/zhengce/zuixin/",
    ...     item_selector="div.news_box h4 a",
    ... )
    >>> pipeline = ListingPipeline(config, client, parse_detail=parse_policy)
    >>> result = await pipeline.collect()
    >>> len(result.items) <= config.limit
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pydantic import Field

from feedroute.html.document import HtmlDocument
from feedroute.http.client import HttpClient
from feedroute.metrics.collector import CollectionMetrics
from feedroute.models.base import FrozenModel
from feedroute.models.feed import ItemDescriptor, NormalizedItem
from feedroute.normalize.encoding import decode_bytes
from feedroute.pipeline.extract import select_links
from feedroute.pipeline.resolve import DetailResolver
from feedroute.protocols.cache import CacheBackend

logger = logging.getLogger(__name__)

DetailParser = Callable[[HtmlDocument, ItemDescriptor], NormalizedItem]
LinkRewriter = Callable[[ItemDescriptor], str]


class PipelineConfig(FrozenModel):
    """Immutable per-route extraction settings."""

    list_url: str = Field(..., description="Listing page URL")
    item_selector: str = Field(..., description="CSS selector for list entries")
    limit: int = Field(default=10, ge=1)
    title_attr: str | None = Field(default=None, description="Attribute preferred for titles")
    title_attr_only: bool = Field(default=False, description="Use only the title attribute, never the text")
    title_selector: str | None = Field(default=None)
    link_selector: str | None = Field(default=None)
    default_title: str = Field(default="")
    list_headers: dict[str, str] = Field(default_factory=dict)
    detail_headers: dict[str, str] = Field(default_factory=dict)
    detail_encoding: str | None = Field(
        default=None,
        description="Fetch detail pages as bytes and decode with this encoding",
    )
    decode_entities: bool = Field(default=True)
    fallback_description: str | None = Field(
        default="",
        description="Description for items whose detail failed; None drops them",
    )


@dataclass
class ListingResult:
    """Listing page plus its resolved items, in list order."""

    document: HtmlDocument
    descriptors: list[ItemDescriptor] = field(default_factory=list)
    items: list[NormalizedItem | None] = field(default_factory=list)


class ListingPipeline:
    """Fetch list, derive descriptors, resolve details.

    Args:
        config: Extraction settings.
        client: HTTP client.
        parse_detail: Builds the item from a parsed detail page.
        cache: Detail cache (None disables memoization).
        metrics: Collector for per-item failures.
        route: Route key for metrics and logs.
        rewrite_link: Maps a descriptor to the detail URL actually fetched
            (and cached); the default is the descriptor's link.
        cache_ttl: Lifetime of cached detail items.
    """

    def __init__(
        self,
        config: PipelineConfig,
        client: HttpClient,
        *,
        parse_detail: DetailParser,
        cache: CacheBackend | None = None,
        metrics: CollectionMetrics | None = None,
        route: str = "default",
        rewrite_link: LinkRewriter | None = None,
        cache_ttl: int | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.parse_detail = parse_detail
        self.rewrite_link = rewrite_link
        self.resolver = DetailResolver(cache=cache, metrics=metrics, route=route, ttl=cache_ttl)

    async def fetch_listing(self) -> HtmlDocument:
        """Fetch and parse the listing page. Errors propagate to the route."""
        html = await self.client.fetch(self.config.list_url, headers=self.config.list_headers or None)
        return HtmlDocument(html)

    def extract(self, document: HtmlDocument) -> list[ItemDescriptor]:
        """Apply the configured selector to the listing page."""
        config = self.config
        descriptors = select_links(
            document,
            config.item_selector,
            config.list_url,
            config.limit,
            title_attr=config.title_attr,
            title_selector=config.title_selector,
            link_selector=config.link_selector,
            default_title=config.default_title,
            title_attr_only=config.title_attr_only,
        )
        if self.rewrite_link is None:
            return descriptors
        return [d.model_copy(update={"link": self.rewrite_link(d)}) for d in descriptors]

    async def fetch_detail(self, descriptor: ItemDescriptor) -> HtmlDocument:
        """Fetch one detail page, decoding legacy encodings when configured."""
        config = self.config
        headers = config.detail_headers or None
        if config.detail_encoding:
            raw = await self.client.fetch(descriptor.link, headers=headers, response_type="bytes")
            return HtmlDocument(decode_bytes(raw, config.detail_encoding), decode_entities=config.decode_entities)
        html = await self.client.fetch(descriptor.link, headers=headers)
        return HtmlDocument(html, decode_entities=config.decode_entities)

    async def compute_item(self, descriptor: ItemDescriptor) -> NormalizedItem:
        document = await self.fetch_detail(descriptor)
        return self.parse_detail(document, descriptor)

    def fallback_item(self, descriptor: ItemDescriptor, error: Exception) -> NormalizedItem | None:
        """Placeholder item for a failed detail page."""
        if self.config.fallback_description is None:
            return None
        return NormalizedItem(
            title=descriptor.title,
            link=descriptor.link,
            description=self.config.fallback_description,
        )

    async def collect(self) -> ListingResult:
        """Run the listing and detail stages."""
        document = await self.fetch_listing()
        descriptors = self.extract(document)
        items = await self.resolver.resolve_all(descriptors, self.compute_item, self.fallback_item)
        logger.debug(f"{self.resolver.route}: {len(descriptors)} entries, {sum(i is not None for i in items)} items")
        return ListingResult(document=document, descriptors=descriptors, items=items)
