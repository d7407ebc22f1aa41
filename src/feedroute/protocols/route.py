"""Route protocol.

Defines the capability every site route exposes to its host: declarative
metadata plus a single coroutine producing a fully resolved feed.

Example:
    >>> from feedroute.protocols.route import Route
    >>> hasattr(Route, "run")
    True
    >>> hasattr(Route, "info")
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from feedroute.models.feed import FeedDocument, RouteInfo


@runtime_checkable
class Route(Protocol):
    """Route protocol.

    Implementations fetch one source and return its feed.
    """

    @property
    def key(self) -> str:
        """Registry key (namespace of the route)."""
        ...

    @property
    def info(self) -> RouteInfo:
        """Route metadata."""
        ...

    async def run(self, params: Mapping[str, str] | None = None) -> FeedDocument:
        """Fetch the source and return the assembled feed."""
        ...
