"""Shared fixtures.

HTTP is faked with ``httpx.MockTransport``: tests map URLs to responses and
inspect the recorded requests.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from feedroute.cache.memory import MemoryCache
from feedroute.core.config import Settings
from feedroute.http.client import HttpClient
from feedroute.metrics.collector import CollectionMetrics

Responder = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeWeb:
    """URL-keyed responses for ``httpx.MockTransport``.

    Keys are full URLs (query included). Unknown URLs return 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Responder] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, response: Responder) -> None:
        self.routes[url] = response

    def html(self, url: str, body: str, status_code: int = 200) -> None:
        self.add(url, httpx.Response(status_code, text=body, headers={"Content-Type": "text/html; charset=utf-8"}))

    def json(self, url: str, data: object) -> None:
        self.add(url, httpx.Response(200, json=data))

    def raw(self, url: str, content: bytes) -> None:
        self.add(url, httpx.Response(200, content=content))

    def requested(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get(str(request.url))
        if responder is None:
            return httpx.Response(404, text="not found")
        if callable(responder):
            return responder(request)
        return responder

    def client(self) -> HttpClient:
        return HttpClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def metrics() -> CollectionMetrics:
    return CollectionMetrics()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def route_kwargs(web: FakeWeb, metrics: CollectionMetrics, settings: Settings) -> dict:
    """Collaborators for constructing a route against the fake web."""
    return {
        "client": web.client(),
        "cache": MemoryCache(),
        "metrics": metrics,
        "settings": settings,
    }
