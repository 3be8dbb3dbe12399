"""
Test helper utilities for docs-crawler testing.

Provides an in-memory documentation site served through httpx.MockTransport
and a controllable clock for rate limiter tests.
"""

from collections.abc import Callable

import httpx

BASE_URL = "https://docs.example.com/docs/"

HTML_HEADERS = {"content-type": "text/html; charset=utf-8"}

Route = str | Callable[[httpx.Request], httpx.Response]


def html_page(title: str, body: str) -> str:
    """Minimal HTML document with a title and body."""
    return (
        f"<html><head><title>{title}</title>"
        f"<script>var tracking = 1;</script></head>"
        f"<body>{body}</body></html>"
    )


def redirect_to(location: str, status: int = 301) -> Route:
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers={"location": location})

    return respond


def respond_with(
    status: int = 200, content_type: str = "text/html", body: str = ""
) -> Route:
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers={"content-type": content_type}, text=body)

    return respond


def connection_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class FakeSite:
    """
    Serves a fixed set of URLs.

    String routes are served as HTML with status 200, callables build the
    response themselves. Unknown URLs answer 404. Every request is recorded.
    """

    def __init__(self, routes: dict[str, Route]):
        self.routes = routes
        self.requested: list[str] = []
        self.user_agents: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        self.user_agents.append(request.headers.get("user-agent", ""))

        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, headers=HTML_HEADERS, text="<h1>Not found</h1>")
        if callable(route):
            return route(request)
        return httpx.Response(200, headers=HTML_HEADERS, text=route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def was_requested(self, fragment: str) -> bool:
        return any(fragment in url for url in self.requested)


class FakeClock:
    """Clock whose time only moves when the code under test sleeps."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
