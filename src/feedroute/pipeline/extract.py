"""List extraction.

Turns a listing document into an ordered, bounded list of
``ItemDescriptor``. HTML listings are read with a CSS selector; JSON
listings are flattened from nested groups. A selector that matches nothing
yields an empty list, so a changed page produces an empty feed rather than
an error.

Example:
    >>> from feedroute.html import HtmlDocument
    >>> from feedroute.pipeline.extract import select_links
    >>> doc = HtmlDocument('<ul><li><a href="t1.htm"> One </a></li></ul>')
    >>> [(d.title, d.link) for d in select_links(doc, "li a", "https://x.cn/list/")]
    [('One', 'https://x.cn/list/t1.htm')]
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import urljoin, urlsplit

from bs4 import Tag

from feedroute.html.document import HtmlDocument, attribute
from feedroute.models.feed import ItemDescriptor

logger = logging.getLogger(__name__)


def absolute_link(raw_link: str, base_url: str) -> str:
    """Resolve a possibly relative link against the page URL.

    Example:
        >>> absolute_link("../202401/t1.html", "https://www.stats.gov.cn/sj/zxfb/")
        'https://www.stats.gov.cn/sj/202401/t1.html'
    """
    return urljoin(base_url, raw_link.strip())


def is_web_link(link: str) -> bool:
    """True for http(s) URLs with a host; false for ``javascript:``, ``mailto:`` and the like."""
    parts = urlsplit(link)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _link_element(element: Tag, link_selector: str | None) -> Tag | None:
    if link_selector:
        return element.select_one(link_selector)
    if element.name == "a":
        return element
    return element.select_one("a[href]")


def _title(
    element: Tag,
    title_attr: str | None,
    title_selector: str | None,
    attr_only: bool = False,
) -> str:
    if title_attr:
        value = attribute(element, title_attr)
        if value:
            return value.strip()
        if attr_only:
            return ""
    if title_selector:
        target = element.select_one(title_selector)
        return target.get_text().strip() if target is not None else ""
    return element.get_text().strip()


def select_links(
    document: HtmlDocument,
    selector: str,
    base_url: str,
    limit: int | None = None,
    *,
    title_attr: str | None = None,
    title_selector: str | None = None,
    link_selector: str | None = None,
    default_title: str = "",
    title_attr_only: bool = False,
) -> list[ItemDescriptor]:
    """Extract titled links from an HTML listing.

    Args:
        document: Parsed listing page.
        selector: CSS selector for list entries (anchors or their containers).
        base_url: URL the listing was fetched from.
        limit: Maximum number of entries (None for all).
        title_attr: Attribute preferred over text for the title (e.g. ``title``).
        title_selector: Sub-selector holding the title text.
        link_selector: Sub-selector of the anchor when entries are containers.
        default_title: Title used when none is found.
        title_attr_only: Never fall back from ``title_attr`` to the text.

    Returns:
        Descriptors in document order; ``identifier`` and ``link`` are the
        absolute URL. Entries without an http(s) link are skipped and do not
        count toward ``limit``.
    """
    elements = document.select(selector)
    if not elements:
        logger.info(f"No list entries matched {selector!r} on {base_url}")
        return []
    descriptors = []
    for element in elements:
        if limit is not None and len(descriptors) >= limit:
            break
        anchor = _link_element(element, link_selector)
        raw_link = (attribute(anchor, "href") or "").strip() if anchor is not None else ""
        link = absolute_link(raw_link, base_url)
        if not raw_link or not is_web_link(link):
            logger.debug(f"Skipping list entry without a web link: {raw_link!r}")
            continue
        descriptors.append(
            ItemDescriptor(
                identifier=link,
                title=_title(element, title_attr, title_selector, title_attr_only) or default_title,
                raw_link=raw_link,
                link=link,
            )
        )
    return descriptors


def json_path(data: Any, path: str | None) -> Any:
    """Follow a dot-notation path through nested dicts.

    Missing segments yield an empty list.

    Example:
        >>> json_path({"data": {"items": [1, 2]}}, "data.items")
        [1, 2]
        >>> json_path({"data": None}, "data.items")
        []
    """
    if not path:
        return data

    result = data
    for key in path.split("."):
        if isinstance(result, Mapping):
            result = result.get(key)
        else:
            return []

    return result if result is not None else []


def flatten_groups(
    groups: Iterable[Mapping[str, Any]] | None,
    items_key: str,
    limit: int | None = None,
) -> list[Any]:
    """Flatten grouped records into one ordered list.

    Groups whose item list is missing or empty are skipped; order within and
    across groups is preserved.

    Example:
        >>> groups = [{"list": [1, 2]}, {"list": []}, {"other": 1}, {"list": [3]}]
        >>> flatten_groups(groups, "list")
        [1, 2, 3]
    """
    flattened: list[Any] = []
    for group in groups or []:
        if not isinstance(group, Mapping):
            continue
        items = group.get(items_key)
        if items:
            flattened.extend(items)
    return flattened[:limit] if limit is not None else flattened


def describe_records(
    records: Iterable[Mapping[str, Any]],
    link_for: Callable[[Mapping[str, Any]], str],
    *,
    id_field: str = "id",
    title_field: str = "title",
    limit: int | None = None,
) -> list[ItemDescriptor]:
    """Build descriptors from API records, keeping each record as inline data."""
    descriptors = []
    for record in records:
        link = link_for(record)
        descriptors.append(
            ItemDescriptor(
                identifier=record.get(id_field),
                title=str(record.get(title_field) or ""),
                raw_link=link,
                link=link,
                inline_data=dict(record),
            )
        )
    return descriptors[:limit] if limit is not None else descriptors
