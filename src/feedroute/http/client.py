"""HTTP client for routes.

A thin async wrapper over httpx that returns the response body in the shape
a route asks for:

- ``"text"``: decoded using the declared charset
- ``"json"``: parsed JSON
- ``"bytes"``: the raw body, for sources in legacy national encodings

Requests are not retried; a failed fetch raises :class:`FetchError`
immediately so callers can substitute a fallback.

Example:
    >>> from feedroute.http import HttpClient
    >>>
    >>> async with HttpClient(timeout=10.0) as client:
    ...     html = await client.fetch("https://www.gov.cn/zhengce/zuixin/")
    ...     data = await client.fetch(api_url, method="POST", response_type="json")
    ...     raw = await client.fetch(detail_url, response_type="bytes")
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

import httpx

from feedroute.core.config import DEFAULT_USER_AGENT
from feedroute.core.exceptions import FetchError

logger = logging.getLogger(__name__)

ResponseType = Literal["text", "json", "bytes"]


def as_fetch_error(url: str, error: httpx.HTTPError) -> FetchError:
    """Translate an httpx failure into the route-level error."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return FetchError(f"HTTP {status} for {url}", url=url, status_code=status)
    if isinstance(error, httpx.TimeoutException):
        return FetchError(f"Request timeout for {url}: {error}", url=url)
    return FetchError(f"Request failed for {url}: {error}", url=url)


class HttpClient:
    """Async HTTP client shared by a route's listing and detail fetches.

    Args:
        user_agent: User-Agent sent with every request.
        timeout: Per-request timeout in seconds.
        headers: Extra default headers.
        transport: Custom httpx transport (tests inject ``httpx.MockTransport``).
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self.default_headers = {"User-Agent": user_agent, "Accept": "*/*", **(headers or {})}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.request_count = 0

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.default_headers,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        response_type: ResponseType = "text",
        **kwargs: Any,
    ) -> Any:
        """Fetch a URL once and return its body.

        Args:
            url: Absolute URL
            method: HTTP method
            headers: Per-request headers merged over the defaults
            response_type: ``"text"``, ``"json"`` or ``"bytes"``
            **kwargs: Passed through to ``httpx.AsyncClient.request``

        Returns:
            ``str``, parsed JSON, or ``bytes`` depending on ``response_type``.

        Raises:
            FetchError: On transport errors, non-2xx responses, or a body
                that is not valid JSON.
        """
        client = await self._ensure_client()
        self.request_count += 1
        logger.debug(f"{method} {url}")
        try:
            response = await client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise as_fetch_error(url, e) from e

        if response_type == "bytes":
            return response.content
        if response_type == "text":
            return response.text
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchError(f"Invalid JSON from {url}: {e}", url=url) from e

    async def get_text(self, url: str, **kwargs: Any) -> str:
        return await self.fetch(url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return await self.fetch(url, response_type="json", **kwargs)

    async def post_json(self, url: str, **kwargs: Any) -> Any:
        return await self.fetch(url, method="POST", response_type="json", **kwargs)

    async def get_bytes(self, url: str, **kwargs: Any) -> bytes:
        return await self.fetch(url, response_type="bytes", **kwargs)
