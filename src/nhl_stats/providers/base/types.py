from __future__ import annotations

from typing import Any, Protocol

# Upstream documents are untyped: any decoded JSON value.
Json = Any


class Fetcher(Protocol):
    """
    Transport capability the resolver depends on, not on any HTTP client.

    Implementations raise a FetchError subclass on network failures,
    non-2xx statuses and malformed bodies.
    """

    def fetch(self, url: str) -> Json:
        ...
