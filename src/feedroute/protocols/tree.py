"""Tree node protocol.

Sanitization rules are written against this minimal element interface, so
they do not depend on a particular HTML parser.

Example:
    >>> from feedroute.protocols.tree import TreeNode
    >>> hasattr(TreeNode, "remove")
    True
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class TreeNode(Protocol):
    """An element in a mutable document tree."""

    @property
    def name(self) -> str:
        """Lower-case tag name."""
        ...

    @property
    def attributes(self) -> MutableMapping[str, str]:
        """Element attributes; writes are applied to the element."""
        ...

    @property
    def children(self) -> Sequence[TreeNode]:
        """Child elements in document order (text nodes excluded)."""
        ...

    @property
    def text(self) -> str:
        """Concatenated text content."""
        ...

    def remove(self) -> None:
        """Detach this element and its subtree from the document."""
        ...
