"""Queryable HTML documents.

Wraps BeautifulSoup (lxml parser) with the handful of operations routes
need: CSS selection, trimmed text, attribute lookup, inner HTML and subtree
removal. ``SoupNode`` adapts a parsed element to the ``TreeNode`` protocol
used by the sanitizer.

Example:
    >>> from feedroute.html import HtmlDocument
    >>> doc = HtmlDocument('<ul><li><a href="/a" title="A">x</a></li></ul>')
    >>> doc.attr("li a", "title")
    'A'
    >>> doc.text("li a")
    'x'
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence

from bs4 import BeautifulSoup, Tag

PARSER = "lxml"


class HtmlDocument:
    """A parsed HTML page.

    ``decode_entities`` controls how markup is serialized back: when True,
    characters with named HTML entities are written as entities; when False
    the characters already present in the source are written literally and
    only ``&``, ``<`` and ``>`` are escaped. Pages decoded from legacy
    encodings use False so their text is not re-encoded.
    """

    def __init__(self, markup: str | bytes, decode_entities: bool = True) -> None:
        self.soup = BeautifulSoup(markup, PARSER)
        self.decode_entities = decode_entities

    @property
    def formatter(self) -> str:
        return "html" if self.decode_entities else "minimal"

    def select(self, selector: str, limit: int | None = None) -> list[Tag]:
        """All elements matching a CSS selector, in document order."""
        return self.soup.select(selector, limit=limit or None)

    def select_one(self, selector: str) -> Tag | None:
        return self.soup.select_one(selector)

    def text(self, selector: str) -> str:
        """Trimmed text of the first match, or ``""``."""
        element = self.select_one(selector)
        return element.get_text().strip() if element is not None else ""

    def attr(self, selector: str, name: str) -> str | None:
        """Attribute of the first match, or None."""
        element = self.select_one(selector)
        return attribute(element, name) if element is not None else None

    def inner_html(self, target: str | Tag | None) -> str | None:
        """Serialized children of an element (or of the first selector match)."""
        element = self.select_one(target) if isinstance(target, str) else target
        if element is None:
            return None
        return element.decode_contents(formatter=self.formatter)

    def remove(self, selector: str) -> int:
        """Remove every match of ``selector``. Returns the count removed."""
        matches = self.select(selector)
        for element in matches:
            element.decompose()
        return len(matches)

    def node(self, target: str | Tag) -> SoupNode | None:
        """Wrap an element (or the first selector match) as a ``TreeNode``."""
        element = self.select_one(target) if isinstance(target, str) else target
        return SoupNode(element) if element is not None else None


def attribute(element: Tag, name: str) -> str | None:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


class SoupNode:
    """``TreeNode`` over a BeautifulSoup ``Tag``."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag) -> None:
        self.tag = tag

    @property
    def name(self) -> str:
        return (self.tag.name or "").lower()

    @property
    def attributes(self) -> MutableMapping[str, str]:
        return self.tag.attrs

    @property
    def children(self) -> Sequence[SoupNode]:
        return [SoupNode(child) for child in self.tag.children if isinstance(child, Tag)]

    @property
    def text(self) -> str:
        return self.tag.get_text()

    def remove(self) -> None:
        self.tag.decompose()

    def __repr__(self) -> str:
        return f"SoupNode(<{self.name}>)"
