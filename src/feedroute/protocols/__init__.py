"""Protocol definitions - all extension points."""

from feedroute.protocols.cache import CacheBackend, try_get
from feedroute.protocols.route import Route
from feedroute.protocols.tree import TreeNode

__all__ = [
    # Cache
    "CacheBackend",
    "try_get",
    # Routes
    "Route",
    # HTML trees
    "TreeNode",
]
