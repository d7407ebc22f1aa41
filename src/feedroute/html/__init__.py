"""HTML parsing and querying."""

from feedroute.html.document import HtmlDocument, SoupNode, attribute

__all__ = [
    "HtmlDocument",
    "SoupNode",
    "attribute",
]
