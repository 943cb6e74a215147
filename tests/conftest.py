from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from nhl_stats.providers.nhl.provider import build_registry, make_fetcher
from nhl_stats.reconcile.events import RecordingEventSink
from nhl_stats.reconcile.resolver import Resolver

WEB = "api-web.nhle.com/v1"
STATS = "api.nhle.com/stats/rest/en"

URL_CONTEXT = {
    "web": f"https://{WEB}",
    "stats": f"https://{STATS}",
    "season_id": "20242025",
}


def route_handler(routes: dict[str, Any], seen: list[str]) -> Callable[[httpx.Request], httpx.Response]:
    """
    Serve canned upstream documents keyed by "host/path". Unknown routes are
    404s; exceptions are raised as transport failures; callables build a
    fresh response per request.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        key = f"{request.url.host}{request.url.path}"
        seen.append(key)
        value = routes.get(key)
        if value is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(value, Exception):
            raise value
        if isinstance(value, httpx.Response):
            return value
        if callable(value):
            return value(request)
        return httpx.Response(200, json=value)

    return handler


@pytest.fixture
def nhl_resolver() -> Callable[..., tuple[Resolver, list[str]]]:
    def build(routes: dict[str, Any], **kwargs: Any) -> tuple[Resolver, list[str]]:
        seen: list[str] = []
        fetcher = make_fetcher(
            user_agent="nhl-stats-tests",
            transport=httpx.MockTransport(route_handler(routes, seen)),
        )
        resolver = Resolver(
            fetcher=fetcher,
            registry=build_registry(),
            url_context=URL_CONTEXT,
            events=RecordingEventSink(),
            **kwargs,
        )
        return resolver, seen

    return build
