from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

logger = logging.getLogger(__name__)


class EventType(StrEnum):
    SOURCE_ATTEMPTED = "source_attempted"
    SOURCE_SUCCEEDED = "source_succeeded"
    SOURCE_EMPTY = "source_empty"
    SOURCE_FAILED = "source_failed"
    SOURCE_SKIPPED = "source_skipped"
    SOURCE_ABANDONED = "source_abandoned"
    COMPLETE = "complete"
    ENRICHMENT_ATTEMPTED = "enrichment_attempted"
    ENRICHMENT_FAILED = "enrichment_failed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ResolverEvent:
    type: EventType
    kind: str
    source: str | None = None
    url: str | None = None
    detail: str | None = None


class EventSink(Protocol):
    def emit(self, event: ResolverEvent) -> None:
        ...


_LEVELS = {
    EventType.SOURCE_FAILED: logging.WARNING,
    EventType.ENRICHMENT_FAILED: logging.WARNING,
    EventType.NOT_FOUND: logging.WARNING,
    EventType.COMPLETE: logging.INFO,
}


class LoggingEventSink:
    """Forwards resolver events to the standard logging module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def emit(self, event: ResolverEvent) -> None:
        level = _LEVELS.get(event.type, logging.DEBUG)
        self.log.log(
            level,
            "%s kind=%s source=%s url=%s%s",
            event.type.value,
            event.kind,
            event.source or "-",
            event.url or "-",
            f" detail={event.detail}" if event.detail else "",
        )


@dataclass
class RecordingEventSink:
    events: list[ResolverEvent] = field(default_factory=list)

    def emit(self, event: ResolverEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[ResolverEvent]:
        return [e for e in self.events if e.type is event_type]
