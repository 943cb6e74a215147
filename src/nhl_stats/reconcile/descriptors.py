from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.merge import has_all, has_any
from nhl_stats.reconcile.queries import EntityKind

R = TypeVar("R")

ParseFn = Callable[[Json, Any], R]
EnrichParseFn = Callable[[Json, R], R]


def _always(query: Any) -> bool:
    return True


@dataclass(frozen=True)
class SourceDescriptor(Generic[R]):
    """
    One upstream endpoint plus the pure parser that maps its document onto a
    partial canonical record.

    `url_template` is a str.format template; placeholders come from the
    shared URL context ({web}, {stats}, {season_id}) and the query's
    url_params(). `applies` lets a source opt out of queries it cannot serve.
    """

    name: str
    url_template: str
    parse: ParseFn[R]
    applies: Callable[[Any], bool] = _always

    def url_for(self, query: Any, context: Mapping[str, str]) -> str:
        return self.url_template.format_map({**context, **query.url_params()})


@dataclass(frozen=True)
class Enrichment(Generic[R]):
    """
    A dependent fetch issued after primary resolution to fill `fills` when
    they are still absent. `requires` names record fields used in the URL or
    by the parser; the call is skipped when any of them is missing.
    """

    name: str
    url_template: str
    parse: EnrichParseFn[R]
    fills: tuple[str, ...]
    requires: tuple[str, ...] = ()

    def is_needed(self, record: R) -> bool:
        return not has_all(record, self.fills) and has_all(record, self.requires)

    def url_for(self, query: Any, record: R, context: Mapping[str, str]) -> str:
        params = {name: str(getattr(record, name)) for name in self.requires}
        return self.url_template.format_map({**context, **query.url_params(), **params})


@dataclass(frozen=True)
class EntityProfile(Generic[R]):
    """
    Everything the resolver needs for one entity kind: the seed record built
    from the caller's key, the priority-ordered sources, the completeness
    predicate fields, the identity fields that decide NotFound, and any
    enrichment calls.
    """

    kind: EntityKind
    seed: Callable[[Any], R]
    sources: tuple[SourceDescriptor[R], ...]
    complete_when: tuple[str, ...]
    identity: tuple[str, ...]
    enrichments: tuple[Enrichment[R], ...] = field(default=())

    def is_complete(self, record: R) -> bool:
        return has_all(record, self.complete_when)

    def has_identity(self, record: R) -> bool:
        return has_any(record, self.identity)
