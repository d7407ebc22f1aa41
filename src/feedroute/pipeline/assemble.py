"""Feed assembly."""

from __future__ import annotations

from collections.abc import Iterable

from feedroute.models.feed import FeedDocument, NormalizedItem


def assemble_feed(
    title: str,
    link: str,
    description: str = "",
    items: Iterable[NormalizedItem | None] = (),
) -> FeedDocument:
    """Wrap items with channel metadata.

    Empty entries (items whose resolution was skipped) are dropped; the
    remaining order is kept. An empty item list still gives a valid feed.

    Example:
        >>> from feedroute.pipeline.assemble import assemble_feed
        >>> assemble_feed("Empty", "https://example.com").item
        []
    """
    return FeedDocument(
        title=title,
        link=link,
        description=description,
        item=[item for item in items if item],
    )
