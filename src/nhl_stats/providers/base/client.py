from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import FetchDecodeError, FetchNetworkError, FetchStatusError
from .types import Json


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Maps every request problem onto the FetchError family.
    - Takes absolute URLs, so one client can serve several API hosts.
    """

    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_json_value(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """
        GET a URL and return whatever JSON value the body holds.
        Raises FetchNetworkError, FetchStatusError or FetchDecodeError.
        """
        try:
            resp = self._client.get(url, params=params, headers=headers)
        except httpx.DecodingError as e:
            # Body arrived but its content-encoding could not be undone.
            raise FetchDecodeError(f"Response from {url} could not be decoded: {e}") from e
        except httpx.RequestError as e:
            # Transport failures plus protocol-level ones such as redirect loops.
            raise FetchNetworkError(f"GET {url} failed: {e}") from e

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchStatusError(
                f"HTTP {resp.status_code} for GET {resp.request.url}",
                status_code=resp.status_code,
            ) from e

        try:
            return resp.json()
        except ValueError as e:
            raise FetchDecodeError(f"Response from {resp.request.url} was not valid JSON.") from e


@dataclass
class NhlHttpClient:
    """Transport capability for the resolver: `fetch(url) -> Json`."""

    http: BaseHttpClient
    user_agent: str = "nhl-stats-app/1.0"

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    def fetch(self, url: str) -> Json:
        return self.http.get_json_value(url, headers=self._headers())

    def close(self) -> None:
        self.http.close()
