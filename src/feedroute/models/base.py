"""Base models and shared types.

Example:
    >>> from feedroute.models.base import FeedRouteModel
    >>> class Thing(FeedRouteModel):
    ...     name: str
    >>> Thing(name="  padded  ").name
    'padded'
"""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict


class FeedRouteModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class FrozenModel(FeedRouteModel):
    """Base for values that must not change once produced."""

    model_config = ConfigDict(frozen=True)


def is_absolute_url(value: str) -> bool:
    """Check that a URL has both a scheme and a host.

    Example:
        >>> is_absolute_url("https://www.gov.cn/zhengce/")
        True
        >>> is_absolute_url("../content_1.htm")
        False
    """
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)
