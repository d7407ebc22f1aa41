"""Custom exceptions.

feedroute uses a small hierarchy of exceptions so callers can tell a broken
item apart from a broken route:

Example:
    >>> from feedroute.core.exceptions import FetchError, FeedRouteError
    >>> isinstance(FetchError("timeout", url="https://example.com"), FeedRouteError)
    True
    >>> try:
    ...     raise RouteNotFoundError("gov")
    ... except FeedRouteError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: RouteNotFoundError
"""

from __future__ import annotations


class FeedRouteError(Exception):
    """Base exception for feedroute.

    Example:
        >>> from feedroute.core.exceptions import FeedRouteError
        >>> e = FeedRouteError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class FetchError(FeedRouteError):
    """An outbound request failed at the network or HTTP level.

    Example:
        >>> from feedroute.core.exceptions import FetchError
        >>> err = FetchError("HTTP 502", url="https://example.com/a", status_code=502)
        >>> err.url, err.status_code
        ('https://example.com/a', 502)
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ContentDecodeError(FeedRouteError):
    """A binary or JSON payload could not be turned back into text.

    Example:
        >>> from feedroute.core.exceptions import ContentDecodeError
        >>> raise ContentDecodeError("empty payload")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ContentDecodeError: empty payload
    """


class RouteError(FeedRouteError):
    """The listing for a route could not be fetched or extracted.

    Example:
        >>> from feedroute.core.exceptions import RouteError
        >>> err = RouteError("list fetch failed", route="gov")
        >>> err.route
        'gov'
    """

    def __init__(
        self,
        message: str,
        route: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.route = route
        self.cause = cause


class ConfigurationError(FeedRouteError):
    """Configuration or route parameters are invalid.

    Example:
        >>> from feedroute.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("missing schoolId")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: missing schoolId
    """


class RouteNotFoundError(FeedRouteError):
    """No route is registered under the requested key."""
