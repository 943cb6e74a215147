from __future__ import annotations

import typer

from nhl_stats.cli.lookup import app as lookup_app
from nhl_stats.core.config import settings
from nhl_stats.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(lookup_app, name="lookup")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log source attempts to stderr."),
) -> None:
    configure_logging("DEBUG" if verbose else settings.log_level)
