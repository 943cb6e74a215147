from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer

from nhl_stats.core.config import settings
from nhl_stats.providers.base.errors import InvalidQueryError, NotFoundError
from nhl_stats.providers.nhl.provider import build_registry, make_fetcher
from nhl_stats.reconcile.records import record_to_json
from nhl_stats.reconcile.resolver import Resolver
from nhl_stats.render.text import render_not_found, render_resolution

REGISTRY = build_registry()


@contextmanager
def resolver_scope() -> Iterator[Resolver]:
    """
    Context-managed resolver for CLI commands.
    Owns one pooled HTTP client and ensures it is closed.
    """
    fetcher = make_fetcher(
        user_agent=settings.user_agent,
        timeout_s=settings.timeout_s,
        connect_timeout_s=settings.connect_timeout_s,
    )
    try:
        yield Resolver(
            fetcher=fetcher,
            registry=REGISTRY,
            url_context=settings.url_context(),
            max_concurrency=settings.max_concurrency,
        )
    finally:
        fetcher.close()


def run_query(build_query: Any, *, as_json: bool) -> None:
    """Validate, resolve and print one query; exit 2 on bad input, 1 on NotFound."""

    try:
        query = build_query()
    except InvalidQueryError as e:
        typer.echo(f"Invalid query: {e}", err=True)
        raise typer.Exit(code=2) from e

    with resolver_scope() as resolver:
        try:
            resolution = resolver.resolve(query)
        except NotFoundError as e:
            typer.echo("\n".join(render_not_found(e.query)))
            raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(record_to_json(resolution.record))
    else:
        typer.echo("\n".join(render_resolution(resolution)))
