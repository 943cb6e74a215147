from __future__ import annotations

import typer

from nhl_stats.cli.common import run_query
from nhl_stats.core.config import settings
from nhl_stats.reconcile.queries import (
    DEFAULT_LIMIT,
    PLAYOFFS,
    REGULAR_SEASON,
    LeaderGroup,
    leaders_query,
    player_query,
    roster_query,
    schedule_query,
    standings_query,
    team_query,
)

app = typer.Typer(help="Look up NHL teams, rosters, players, standings, leaders, schedules and scores.")

JSON_OPTION = typer.Option(False, "--json", help="Print the canonical record as JSON.")


@app.command("team")
def team_cmd(
    team_abbrev: str = typer.Argument(..., help="Three-letter team abbreviation (e.g. TOR, NYR, BOS)."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get information about an NHL team."""

    run_query(lambda: team_query(team_abbrev), as_json=as_json)


@app.command("roster")
def roster_cmd(
    team_abbrev: str = typer.Argument(..., help="Three-letter team abbreviation (e.g. TOR, NYR, BOS)."),
    season: str | None = typer.Option(None, "--season", help="Season such as 20232024 (defaults to the current roster)."),
    as_json: bool = JSON_OPTION,
) -> None:
    """List an NHL team's roster by position."""

    run_query(lambda: roster_query(team_abbrev, season), as_json=as_json)


@app.command("player")
def player_cmd(
    player_id: str = typer.Argument(..., help="NHL player ID (e.g. 8478402 for Connor McDavid)."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get information about an NHL player."""

    run_query(lambda: player_query(player_id), as_json=as_json)


@app.command("standings")
def standings_cmd(
    division: str | None = typer.Option(None, "--division", help="Atlantic, Metropolitan, Central or Pacific."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get current NHL standings, optionally for one division."""

    run_query(lambda: standings_query(division), as_json=as_json)


@app.command("leaders")
def leaders_cmd(
    category: str = typer.Argument(..., help="Stat category (e.g. goals, points, savePctg)."),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", help="Number of players to return (max 50)."),
    goalies: bool = typer.Option(False, "--goalies", help="Goalie leaders instead of skaters."),
    season: str | None = typer.Option(None, "--season", help="Season such as 20232024 (defaults to the current season)."),
    playoffs: bool = typer.Option(False, "--playoffs", help="Playoff leaders instead of the regular season."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get NHL statistical leaders for skaters or goalies."""

    group = LeaderGroup.GOALIE if goalies else LeaderGroup.SKATER
    run_query(
        lambda: leaders_query(
            category,
            limit,
            group=group,
            season=season,
            game_type=PLAYOFFS if playoffs else REGULAR_SEASON,
            max_limit=settings.leaders_max_limit,
        ),
        as_json=as_json,
    )


@app.command("schedule")
def schedule_cmd(
    team_abbrev: str | None = typer.Option(None, "--team", help="Three-letter team abbreviation to filter by."),
    date: str | None = typer.Option(None, "--date", help="Date in YYYY-MM-DD format (defaults to today)."),
    month: str | None = typer.Option(None, "--month", help="Whole month as YYYY-MM (needs --team)."),
    season: str | None = typer.Option(None, "--season", help="Whole season such as 20242025 (needs --team)."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get the NHL game schedule for a week, a month or a season."""

    run_query(lambda: schedule_query(team_abbrev, date, month=month, season=season), as_json=as_json)


@app.command("scores")
def scores_cmd(
    date: str = typer.Argument(..., help="Date in YYYY-MM-DD format."),
    team_abbrev: str | None = typer.Option(None, "--team", help="Only games involving this team."),
    as_json: bool = JSON_OPTION,
) -> None:
    """Get NHL scores for one date; finished and live games show their score."""

    run_query(lambda: schedule_query(team_abbrev, date), as_json=as_json)
