"""Runs one logical query against the priority-ordered sources of its entity kind.

The algorithm is the same for every entity kind:

1. seed the accumulator from the caller's key (keys are never overwritten)
2. fetch each applicable source in priority order, absorbing FetchErrors
3. merge each parsed partial record with the non-regression rule
4. stop as soon as the completeness predicate holds
5. if nothing identified the entity, raise NotFoundError
6. run enrichment calls for fields that are still absent

With ``max_concurrency > 1`` the fetches of step 2 run on a thread pool, but
documents are still merged strictly in priority order; fetches that have not
been merged when the record becomes complete are abandoned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from nhl_stats.providers.base.errors import FetchError, NotFoundError
from nhl_stats.providers.base.registry import SourceRegistry
from nhl_stats.providers.base.types import Fetcher, Json
from nhl_stats.reconcile.descriptors import EntityProfile, SourceDescriptor
from nhl_stats.reconcile.events import EventSink, EventType, LoggingEventSink, ResolverEvent
from nhl_stats.reconcile.merge import is_absent, merge_records


class AttemptOutcome(StrEnum):
    MERGED = "merged"
    EMPTY = "empty"
    FAILED = "failed"
    SKIPPED = "skipped"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class SourceAttempt:
    source: str
    url: str | None
    outcome: AttemptOutcome
    error: str | None = None
    enrichment: bool = False


@dataclass(frozen=True)
class Resolution:
    query: Any
    record: Any
    attempts: tuple[SourceAttempt, ...]
    complete: bool

    @property
    def warnings(self) -> list[str]:
        return [f"{a.source}: {a.error}" for a in self.attempts if a.outcome is AttemptOutcome.FAILED]

    @property
    def sources_used(self) -> list[str]:
        return [a.source for a in self.attempts if a.outcome is AttemptOutcome.MERGED]


class Resolver:
    def __init__(
        self,
        *,
        fetcher: Fetcher,
        registry: SourceRegistry,
        url_context: Mapping[str, str],
        events: EventSink | None = None,
        max_concurrency: int = 1,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.fetcher = fetcher
        self.registry = registry
        self.url_context = dict(url_context)
        self.events = events or LoggingEventSink()
        self.max_concurrency = max_concurrency

    def resolve(self, query: Any) -> Resolution:
        profile = self.registry.get(query.kind)
        kind = profile.kind.value
        attempts: list[SourceAttempt] = []

        record = profile.seed(query)
        planned: list[tuple[SourceDescriptor[Any], str]] = []
        for descriptor in profile.sources:
            if not descriptor.applies(query):
                attempts.append(SourceAttempt(descriptor.name, None, AttemptOutcome.SKIPPED))
                self._emit(EventType.SOURCE_SKIPPED, kind, descriptor.name)
                continue
            planned.append((descriptor, descriptor.url_for(query, self.url_context)))

        if self.max_concurrency > 1 and len(planned) > 1:
            record, complete = self._resolve_fan_out(profile, query, record, planned, attempts)
        else:
            record, complete = self._resolve_sequential(profile, query, record, planned, attempts)

        if not complete and not profile.has_identity(record):
            self._emit(EventType.NOT_FOUND, kind)
            raise NotFoundError(query, attempts)

        record = self._enrich(profile, query, record, attempts)
        return Resolution(
            query=query,
            record=record,
            attempts=tuple(attempts),
            complete=profile.is_complete(record),
        )

    # -----------------------------
    # Primary resolution
    # -----------------------------

    def _resolve_sequential(
        self,
        profile: EntityProfile[Any],
        query: Any,
        record: Any,
        planned: Sequence[tuple[SourceDescriptor[Any], str]],
        attempts: list[SourceAttempt],
    ) -> tuple[Any, bool]:
        for descriptor, url in planned:
            self._emit(EventType.SOURCE_ATTEMPTED, profile.kind.value, descriptor.name, url)
            try:
                document = self.fetcher.fetch(url)
            except FetchError as e:
                self._record_failure(profile, descriptor.name, url, e, attempts)
                continue

            record = self._merge(profile, query, record, descriptor, url, document, attempts)
            if profile.is_complete(record):
                self._emit(EventType.COMPLETE, profile.kind.value, descriptor.name)
                return record, True
        return record, False

    def _resolve_fan_out(
        self,
        profile: EntityProfile[Any],
        query: Any,
        record: Any,
        planned: Sequence[tuple[SourceDescriptor[Any], str]],
        attempts: list[SourceAttempt],
    ) -> tuple[Any, bool]:
        pool = ThreadPoolExecutor(
            max_workers=min(self.max_concurrency, len(planned)),
            thread_name_prefix=f"resolve-{profile.kind.value}",
        )
        try:
            futures: list[Future[Json]] = []
            for descriptor, url in planned:
                self._emit(EventType.SOURCE_ATTEMPTED, profile.kind.value, descriptor.name, url)
                futures.append(pool.submit(self.fetcher.fetch, url))

            # Merge in priority order regardless of arrival order.
            for index, ((descriptor, url), future) in enumerate(zip(planned, futures)):
                try:
                    document = future.result()
                except FetchError as e:
                    self._record_failure(profile, descriptor.name, url, e, attempts)
                    continue

                record = self._merge(profile, query, record, descriptor, url, document, attempts)
                if profile.is_complete(record):
                    self._emit(EventType.COMPLETE, profile.kind.value, descriptor.name)
                    self._abandon(profile, planned[index + 1 :], futures[index + 1 :], attempts)
                    return record, True
            return record, False
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def _abandon(
        self,
        profile: EntityProfile[Any],
        remaining: Sequence[tuple[SourceDescriptor[Any], str]],
        futures: Sequence[Future[Json]],
        attempts: list[SourceAttempt],
    ) -> None:
        for (descriptor, url), future in zip(remaining, futures):
            future.cancel()
            attempts.append(SourceAttempt(descriptor.name, url, AttemptOutcome.ABANDONED))
            self._emit(EventType.SOURCE_ABANDONED, profile.kind.value, descriptor.name, url)

    def _merge(
        self,
        profile: EntityProfile[Any],
        query: Any,
        record: Any,
        descriptor: SourceDescriptor[Any],
        url: str,
        document: Json,
        attempts: list[SourceAttempt],
    ) -> Any:
        partial = descriptor.parse(document, query)
        if is_absent(partial):
            attempts.append(SourceAttempt(descriptor.name, url, AttemptOutcome.EMPTY))
            self._emit(EventType.SOURCE_EMPTY, profile.kind.value, descriptor.name, url)
            return record

        attempts.append(SourceAttempt(descriptor.name, url, AttemptOutcome.MERGED))
        self._emit(EventType.SOURCE_SUCCEEDED, profile.kind.value, descriptor.name, url)
        return merge_records(record, partial)

    def _record_failure(
        self,
        profile: EntityProfile[Any],
        source: str,
        url: str,
        error: FetchError,
        attempts: list[SourceAttempt],
        *,
        enrichment: bool = False,
    ) -> None:
        attempts.append(
            SourceAttempt(source, url, AttemptOutcome.FAILED, error=str(error), enrichment=enrichment)
        )
        event = EventType.ENRICHMENT_FAILED if enrichment else EventType.SOURCE_FAILED
        self._emit(event, profile.kind.value, source, url, str(error))

    # -----------------------------
    # Enrichment
    # -----------------------------

    def _enrich(
        self,
        profile: EntityProfile[Any],
        query: Any,
        record: Any,
        attempts: list[SourceAttempt],
    ) -> Any:
        for enrichment in profile.enrichments:
            if not enrichment.is_needed(record):
                continue

            url = enrichment.url_for(query, record, self.url_context)
            self._emit(EventType.ENRICHMENT_ATTEMPTED, profile.kind.value, enrichment.name, url)
            try:
                document = self.fetcher.fetch(url)
            except FetchError as e:
                self._record_failure(profile, enrichment.name, url, e, attempts, enrichment=True)
                continue

            partial = enrichment.parse(document, record)
            outcome = AttemptOutcome.EMPTY if is_absent(partial) else AttemptOutcome.MERGED
            attempts.append(SourceAttempt(enrichment.name, url, outcome, enrichment=True))
            record = merge_records(record, partial, only=enrichment.fills)
        return record

    def _emit(
        self,
        event_type: EventType,
        kind: str,
        source: str | None = None,
        url: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.events.emit(ResolverEvent(type=event_type, kind=kind, source=source, url=url, detail=detail))
