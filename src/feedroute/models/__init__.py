"""Data models."""

from feedroute.models.base import FeedRouteModel, FrozenModel, is_absolute_url
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo

__all__ = [
    "FeedRouteModel",
    "FrozenModel",
    "is_absolute_url",
    "ItemDescriptor",
    "NormalizedItem",
    "FeedDocument",
    "RouteInfo",
]
