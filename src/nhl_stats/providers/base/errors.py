from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nhl_stats.reconcile.resolver import SourceAttempt


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class FetchError(ProviderError):
    """One upstream source could not be read. Never fatal for a whole query."""


class FetchNetworkError(FetchError):
    """Timeouts, DNS and connection failures."""


class FetchStatusError(FetchError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchDecodeError(FetchError):
    """Upstream answered 2xx but the body was not valid JSON."""


class ProviderCapabilityError(ProviderError):
    """No source profile is registered for a requested entity kind."""


class InvalidQueryError(ProviderError, ValueError):
    """Caller supplied a malformed key. Raised before any fetch is attempted."""


class NotFoundError(ProviderError):
    """Every source for a query was exhausted without usable identity data."""

    def __init__(self, query: object, attempts: Sequence[SourceAttempt] = ()) -> None:
        self.query = query
        self.attempts = tuple(attempts)
        super().__init__(f"No upstream source returned data for {query!r}")

    @property
    def reasons(self) -> list[str]:
        return [f"{a.source}: {a.error}" for a in self.attempts if a.error]
