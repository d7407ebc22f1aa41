"""Core configuration and utilities."""

from feedroute.core.config import Settings, get_settings
from feedroute.core.exceptions import (
    ConfigurationError,
    ContentDecodeError,
    FeedRouteError,
    FetchError,
    RouteError,
    RouteNotFoundError,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Exceptions
    "FeedRouteError",
    "FetchError",
    "ContentDecodeError",
    "RouteError",
    "RouteNotFoundError",
    "ConfigurationError",
]
