from __future__ import annotations

import httpx
import pytest

from nhl_stats.providers.base.errors import (
    FetchDecodeError,
    FetchError,
    FetchNetworkError,
    FetchStatusError,
)
from nhl_stats.providers.nhl.provider import make_fetcher


def test_fetch_sends_user_agent_and_returns_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["User-Agent"] == "nhl-stats-tests/1.0"
        assert request.headers["Accept"] == "application/json"
        assert request.url.path == "/v1/standings/now"
        return httpx.Response(200, json={"standings": []})

    fetcher = make_fetcher(user_agent="nhl-stats-tests/1.0", transport=httpx.MockTransport(handler))

    assert fetcher.fetch("https://api-web.nhle.com/v1/standings/now") == {"standings": []}
    fetcher.close()


def test_non_success_status_maps_to_status_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="maintenance"))
    fetcher = make_fetcher(user_agent="t", transport=transport)

    with pytest.raises(FetchStatusError) as exc_info:
        fetcher.fetch("https://api.nhle.com/stats/rest/en/team")

    assert exc_info.value.status_code == 503
    assert "HTTP 503" in str(exc_info.value)


def test_invalid_json_maps_to_decode_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    fetcher = make_fetcher(user_agent="t", transport=transport)

    with pytest.raises(FetchDecodeError):
        fetcher.fetch("https://api-web.nhle.com/v1/player/1/landing")


def test_transport_failure_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = make_fetcher(user_agent="t", transport=httpx.MockTransport(handler))

    with pytest.raises(FetchNetworkError) as exc_info:
        fetcher.fetch("https://api-web.nhle.com/v1/standings/now")

    assert isinstance(exc_info.value, FetchError)


def test_undecodable_body_maps_to_decode_error() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")
    )
    fetcher = make_fetcher(user_agent="t", transport=transport)

    with pytest.raises(FetchDecodeError):
        fetcher.fetch("https://api-web.nhle.com/v1/roster/TOR/current")


def test_redirect_loop_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": str(request.url)})

    fetcher = make_fetcher(user_agent="t", transport=httpx.MockTransport(handler))

    with pytest.raises(FetchNetworkError):
        fetcher.fetch("https://api-web.nhle.com/v1/roster/TOR/current")
