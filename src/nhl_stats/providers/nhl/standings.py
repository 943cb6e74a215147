from __future__ import annotations

from typing import Any

from nhl_stats.core.text import normalize_label
from nhl_stats.providers.base.types import Json
from nhl_stats.providers.nhl.team import conference_name, team_full_name
from nhl_stats.reconcile.descriptors import EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import extract_int, extract_list, extract_str, mappings
from nhl_stats.reconcile.queries import EntityKind, StandingsQuery
from nhl_stats.reconcile.records import Standings, StandingsRow


def _in_division(row: StandingsRow, division: str | None) -> bool:
    if division is None:
        return True
    return row.division is not None and normalize_label(row.division) == normalize_label(division)


def _web_row(item: Any) -> StandingsRow:
    return StandingsRow(
        team_code=extract_str(item, "teamAbbrev", "abbrev"),
        team_name=team_full_name(item),
        division=extract_str(item, "divisionName"),
        conference=conference_name(item),
        games_played=extract_int(item, "gamesPlayed"),
        wins=extract_int(item, "wins"),
        losses=extract_int(item, "losses"),
        ot_losses=extract_int(item, "otLosses"),
        points=extract_int(item, "points"),
        goals_for=extract_int(item, "goalFor", "goalsFor"),
        goals_against=extract_int(item, "goalAgainst", "goalsAgainst"),
    )


def parse_web_standings(document: Json, query: StandingsQuery) -> Standings:
    rows = [_web_row(item) for item in mappings(extract_list(document, "standings"))]
    return Standings(
        as_of=extract_str(document, "standingsDateTimeUtc"),
        rows=tuple(r for r in rows if _in_division(r, query.division)),
    )


def parse_team_summary(document: Json, query: StandingsQuery) -> Standings:
    # The summary report carries no division data, so it cannot serve a filter.
    if query.division is not None:
        return Standings()
    rows = [
        StandingsRow(
            team_name=extract_str(item, "teamFullName", "teamName"),
            games_played=extract_int(item, "gamesPlayed"),
            wins=extract_int(item, "wins"),
            losses=extract_int(item, "losses"),
            ot_losses=extract_int(item, "otLosses"),
            points=extract_int(item, "points"),
            goals_for=extract_int(item, "goalsFor"),
            goals_against=extract_int(item, "goalsAgainst"),
        )
        for item in mappings(extract_list(document, "data"))
    ]
    return Standings(rows=tuple(rows))


def seed_standings(query: StandingsQuery) -> Standings:
    return Standings(division=query.division)


STANDINGS_SOURCES: tuple[SourceDescriptor[Standings], ...] = (
    SourceDescriptor("standings", "{web}/standings/now", parse_web_standings),
    SourceDescriptor(
        "team-summary",
        "{stats}/team/summary?sort=points&cayenneExp=seasonId={season_id}",
        parse_team_summary,
    ),
)

STANDINGS_PROFILE: EntityProfile[Standings] = EntityProfile(
    kind=EntityKind.STANDINGS,
    seed=seed_standings,
    sources=STANDINGS_SOURCES,
    complete_when=("rows",),
    identity=("rows",),
)
