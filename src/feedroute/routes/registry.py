"""Route registry and discovery.

Built-in routes register themselves when ``feedroute.routes`` is imported.
Third-party packages contribute routes through entry points.

Usage:
    from feedroute.routes import get_route

    GovRoute = get_route("gov")
    feed = await GovRoute().run()

Entry Point Registration:
    # In pyproject.toml:
    [project.entry-points."feedroute.routes"]
    mysite = "mysite_routes.latest:LatestRoute"
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any

from feedroute.core.exceptions import RouteNotFoundError

if TYPE_CHECKING:
    from feedroute.routes.base import BaseRoute

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "feedroute.routes"

_registry: dict[str, type[BaseRoute]] = {}
_discovered: dict[str, type[BaseRoute]] | None = None


def register_route(route_class: type[BaseRoute], key: str | None = None) -> type[BaseRoute]:
    """Register a route class under its key.

    Usable as a class decorator.

    Example:
        >>> @register_route
        ... class CustomRoute(BaseRoute):
        ...     key = "custom"
    """
    name = key or route_class.key
    _registry[name] = route_class
    logger.debug(f"Registered route: {name}")
    return route_class


def discover_routes(reload: bool = False) -> dict[str, type[BaseRoute]]:
    """Discover routes from installed packages via entry points.

    Looks for entry points in the "feedroute.routes" group. Entries that
    fail to load are logged and skipped.

    Args:
        reload: If True, re-discover routes even if cached.

    Returns:
        Dictionary mapping route keys to route classes.
    """
    global _discovered

    if _discovered is not None and not reload:
        return _discovered

    routes = {}
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            route_class = ep.load()
            routes[ep.name] = route_class
            logger.debug(f"Discovered route: {ep.name} -> {route_class}")
        except Exception as e:
            logger.warning(f"Failed to load route {ep.name}: {e}")

    _discovered = routes
    return routes


def all_routes() -> dict[str, type[BaseRoute]]:
    """Registered routes, with explicitly registered ones taking precedence."""
    return {**discover_routes(), **_registry}


def get_route(key: str) -> type[BaseRoute]:
    """Get a route class by key.

    Raises:
        RouteNotFoundError: If no route is registered under ``key``.
    """
    routes = all_routes()
    if key not in routes:
        raise RouteNotFoundError(f"Unknown route: {key} (available: {', '.join(sorted(routes))})")
    return routes[key]


def list_routes() -> list[dict[str, Any]]:
    """List all routes with their metadata, sorted by key.

    Example:
        >>> for info in list_routes():
        ...     print(f"{info['key']}: {info['name']}")
    """
    result = []
    for key, cls in sorted(all_routes().items()):
        info = cls.info
        result.append(
            {
                "key": key,
                "path": info.path,
                "name": info.name,
                "url": info.url,
                "example": info.example,
                "class": f"{cls.__module__}.{cls.__name__}",
            }
        )
    return result


def clear_cache() -> None:
    """Forget discovered entry points (explicit registrations are kept)."""
    global _discovered
    _discovered = None


def unregister_route(key: str) -> None:
    """Remove an explicitly registered route."""
    _registry.pop(key, None)
