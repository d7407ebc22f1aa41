"""HTML body sanitization.

Forum and article markup carries decoration (tooltips, watermark badges) and
lazy-loaded images whose ``src`` is a placeholder. The rules here are pure
transformations over the ``TreeNode`` protocol:

- ``remove_marked`` drops elements matching simple structural markers
  (``div.tip``, ``.xs0``, ``span#badge``)
- ``fix_images`` points each ``<img>`` at its real source and drops images
  with no usable source

Example:
    >>> from feedroute.html import HtmlDocument
    >>> doc = HtmlDocument('<div id="c"><img data-original="https://x/real.jpg" src="https://x/none.gif"></div>')
    >>> root = doc.node("#c")
    >>> fix_images(root)
    0
    >>> doc.inner_html("#c")
    '<img data-original="https://x/real.jpg" src="https://x/real.jpg"/>'
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from feedroute.protocols.tree import TreeNode

# Highest-resolution attributes first; plain src is the last resort
DEFAULT_IMAGE_ATTRS: tuple[str, ...] = ("zoomfile", "file", "data-src", "data-original", "src")
DEFAULT_PLACEHOLDER = re.compile(r"none\.gif$", re.IGNORECASE)

_MARKER_RE = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*)?(?P<rest>(?:[.#][\w-]+)*)$")


@dataclass(frozen=True)
class Marker:
    """A structural marker: optional tag, optional id, required classes.

    Example:
        >>> Marker.parse("div.tip")
        Marker(tag='div', element_id=None, classes=frozenset({'tip'}))
    """

    tag: str | None = None
    element_id: str | None = None
    classes: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, text: str) -> Marker:
        match = _MARKER_RE.match(text.strip())
        if match is None or not text.strip():
            raise ValueError(f"Unsupported marker: {text!r}")
        tag = match.group("tag")
        parts = re.findall(r"([.#])([\w-]+)", match.group("rest"))
        ids = [name for prefix, name in parts if prefix == "#"]
        return cls(
            tag=tag.lower() if tag else None,
            element_id=ids[0] if ids else None,
            classes=frozenset(name for prefix, name in parts if prefix == "."),
        )

    def matches(self, node: TreeNode) -> bool:
        if self.tag is not None and node.name != self.tag:
            return False
        attributes = node.attributes
        if self.element_id is not None and attributes.get("id") != self.element_id:
            return False
        if self.classes:
            return self.classes.issubset(_classes(attributes.get("class")))
        return True


def parse_markers(markers: str | Sequence[str | Marker]) -> list[Marker]:
    """Parse a comma-separated marker list.

    Example:
        >>> [m.classes for m in parse_markers("div.tip, .xs0")]
        [frozenset({'tip'}), frozenset({'xs0'})]
    """
    if isinstance(markers, str):
        markers = [part for part in markers.split(",") if part.strip()]
    return [m if isinstance(m, Marker) else Marker.parse(m) for m in markers]


def _classes(value: object) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        return set(value.split())
    return set(value)


def iter_descendants(root: TreeNode) -> Iterator[TreeNode]:
    """Pre-order walk over the elements below ``root``."""
    for child in root.children:
        yield child
        yield from iter_descendants(child)


def remove_marked(root: TreeNode, markers: str | Sequence[str | Marker]) -> int:
    """Remove every descendant matching any marker.

    Returns:
        Number of elements removed (nested matches count once).
    """
    parsed = parse_markers(markers)
    removed = 0
    for child in list(root.children):
        if any(marker.matches(child) for marker in parsed):
            child.remove()
            removed += 1
        else:
            removed += remove_marked(child, parsed)
    return removed


def real_image_source(node: TreeNode, candidates: Sequence[str] = DEFAULT_IMAGE_ATTRS) -> str | None:
    """First non-empty candidate attribute of an image."""
    attributes = node.attributes
    for name in candidates:
        value = attributes.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def fix_images(
    root: TreeNode,
    candidates: Sequence[str] = DEFAULT_IMAGE_ATTRS,
    placeholder: re.Pattern[str] | None = DEFAULT_PLACEHOLDER,
) -> int:
    """Rewrite image sources and drop placeholder images.

    Returns:
        Number of images removed.
    """
    images = [node for node in iter_descendants(root) if node.name == "img"]
    removed = 0
    for image in images:
        source = real_image_source(image, candidates)
        if source and not (placeholder is not None and placeholder.search(source)):
            image.attributes["src"] = source
        else:
            image.remove()
            removed += 1
    return removed


def sanitize(
    root: TreeNode,
    markers: str | Sequence[str | Marker] = (),
    candidates: Sequence[str] = DEFAULT_IMAGE_ATTRS,
    placeholder: re.Pattern[str] | None = DEFAULT_PLACEHOLDER,
) -> TreeNode:
    """Apply marker removal then image fixing; returns ``root``."""
    if markers:
        remove_marked(root, markers)
    fix_images(root, candidates, placeholder)
    return root
