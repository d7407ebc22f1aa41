"""Feed models - the units flowing through a route.

- `ItemDescriptor`: one list entry as found on the listing page or API
- `NormalizedItem`: the canonical, immutable feed entry
- `FeedDocument`: channel metadata plus the ordered items
- `RouteInfo`: declarative metadata a route exposes to its host

Example:
    >>> from feedroute.models.feed import FeedDocument, NormalizedItem
    >>> item = NormalizedItem(title="Hello", link="https://example.com/1")
    >>> doc = FeedDocument(title="Example", link="https://example.com", item=[item])
    >>> [i.title for i in doc.item]
    ['Hello']
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from email.utils import format_datetime
from typing import Any

from pydantic import Field, field_validator

from feedroute.models.base import FeedRouteModel, FrozenModel, is_absolute_url

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class ItemDescriptor(FrozenModel):
    """A list entry before its content is resolved.

    ``link`` is the absolute form of ``raw_link`` and doubles as the cache key.

    Example:
        >>> from feedroute.models.feed import ItemDescriptor
        >>> d = ItemDescriptor(title="A", raw_link="./t1.htm", link="https://x.cn/t1.htm")
        >>> d.link
        'https://x.cn/t1.htm'
    """

    identifier: str | int | None = Field(default=None, description="Opaque key for detail lookups")
    title: str = Field(default="", description="Entry title as listed")
    raw_link: str = Field(default="", description="Link as found in the source, possibly relative")
    link: str = Field(default="", description="Absolute link")
    inline_data: Any = Field(default=None, description="Raw record usable without a detail fetch")


class NormalizedItem(FrozenModel):
    """A canonical feed entry.

    Example:
        >>> from feedroute.models.feed import NormalizedItem
        >>> NormalizedItem(title="T", link="/relative")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ValidationError: link must be an absolute URL
    """

    title: str = Field(default="")
    link: str = Field(..., description="Absolute URL of the entry")
    description: str = Field(default="", description="Sanitized HTML body")
    pub_date: datetime | None = Field(default=None, description="Publication time, None when unknown")
    guid: str | None = Field(default=None, description="Stable unique id, defaults to link")

    @field_validator("link")
    @classmethod
    def require_absolute_link(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError(f"link must be an absolute URL: {v!r}")
        return v


class RouteInfo(FrozenModel):
    """Declarative metadata for a route.

    Example:
        >>> from feedroute.models.feed import RouteInfo
        >>> info = RouteInfo(path="/:fid", name="Digest", url="https://share.zaixs.com")
        >>> info.path_parameters
        ['fid']
    """

    path: str = Field(..., min_length=1, description="Path template with :named parameters")
    name: str = Field(..., min_length=1)
    url: str = Field(..., description="Source site URL")
    categories: tuple[str, ...] = Field(default=())
    example: str = Field(default="")
    parameters: dict[str, str] = Field(default_factory=dict, description="Parameter documentation")
    maintainers: tuple[str, ...] = Field(default=())

    @property
    def path_parameters(self) -> list[str]:
        """Names of the ``:param`` segments in the path template."""
        return [segment[1:] for segment in self.path.split("/") if segment.startswith(":")]


class FeedDocument(FeedRouteModel):
    """The feed returned by a route.

    Example:
        >>> from feedroute.models.feed import FeedDocument
        >>> doc = FeedDocument(title="Empty", link="https://example.com")
        >>> doc.item
        []
        >>> "<channel>" in doc.to_rss()
        True
    """

    title: str = Field(..., description="Channel title")
    link: str = Field(..., description="Channel link")
    description: str = Field(default="", description="Channel description")
    item: list[NormalizedItem] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-friendly dict."""
        return self.model_dump(mode="json")

    def to_rss(self) -> str:
        """Render as an RSS 2.0 document.

        Naive publication times are written as UTC.
        """
        rss = ET.Element("rss", {"version": "2.0"})
        channel = ET.SubElement(rss, "channel")
        ET.SubElement(channel, "title").text = self.title
        ET.SubElement(channel, "link").text = self.link
        ET.SubElement(channel, "description").text = self.description or self.title

        for entry in self.item:
            node = ET.SubElement(channel, "item")
            ET.SubElement(node, "title").text = entry.title
            ET.SubElement(node, "link").text = entry.link
            ET.SubElement(node, "description").text = entry.description
            if entry.guid:
                ET.SubElement(node, "guid", {"isPermaLink": "false"}).text = entry.guid
            else:
                ET.SubElement(node, "guid").text = entry.link
            if entry.pub_date is not None:
                published = entry.pub_date
                if published.tzinfo is None:
                    published = published.replace(tzinfo=UTC)
                ET.SubElement(node, "pubDate").text = format_datetime(published)

        return XML_DECLARATION + ET.tostring(rss, encoding="unicode")
