from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.descriptors import Enrichment, EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import extract_int, extract_list, extract_str, mappings
from nhl_stats.reconcile.queries import EntityKind, TeamQuery
from nhl_stats.reconcile.records import Team, TeamStats

CONFERENCE_BY_ABBREV = {"E": "Eastern", "W": "Western"}


def find_team(items: Any, team_code: str) -> Mapping[str, Any] | None:
    """Locate a team entry by tri-code; upstreams disagree on the key name."""
    for item in mappings(items):
        code = extract_str(item, "teamAbbrev", "triCode", "rawTricode", "abbrev")
        if code is not None and code.upper() == team_code:
            return item
    return None


def conference_name(item: Any) -> str | None:
    name = extract_str(item, "conferenceName", "conference.name")
    if name is not None:
        return name
    abbrev = extract_str(item, "conferenceAbbrev", "conference.abbrev")
    return CONFERENCE_BY_ABBREV.get(abbrev.upper()) if abbrev else None


def team_full_name(item: Any) -> str | None:
    name = extract_str(item, "fullTeamName", "teamName", "fullName", "name")
    if name is not None:
        return name
    place = extract_str(item, "placeName", "locationName")
    common = extract_str(item, "teamCommonName", "commonName")
    if place and common:
        return f"{place} {common}"
    return None


def parse_roster(document: Json, query: TeamQuery) -> Team:
    groups = [extract_list(document, key) or [] for key in ("forwards", "defensemen", "goalies")]
    size = sum(len(mappings(g)) for g in groups)
    return Team(
        team_id=extract_int(document, "teamId", "id"),
        name=team_full_name(document),
        location_name=extract_str(document, "placeName", "locationName"),
        common_name=extract_str(document, "teamCommonName", "commonName"),
        roster_size=size or None,
    )


def _standings_stats(item: Any) -> TeamStats:
    return TeamStats(
        games_played=extract_int(item, "gamesPlayed"),
        wins=extract_int(item, "wins"),
        losses=extract_int(item, "losses"),
        ot_losses=extract_int(item, "otLosses"),
        points=extract_int(item, "points"),
        goals_for=extract_int(item, "goalFor", "goalsFor"),
        goals_against=extract_int(item, "goalAgainst", "goalsAgainst"),
        home_record=_record_string(item, "home"),
        away_record=_record_string(item, "road"),
    )


def _record_string(item: Any, prefix: str) -> str | None:
    wins = extract_int(item, f"{prefix}Wins")
    losses = extract_int(item, f"{prefix}Losses")
    ot = extract_int(item, f"{prefix}OtLosses")
    if wins is None or losses is None or ot is None:
        return None
    return f"{wins}-{losses}-{ot}"


def parse_standings_team(document: Json, query: TeamQuery) -> Team:
    item = find_team(extract_list(document, "standings"), query.team_code)
    if item is None:
        return Team()
    return Team(
        team_id=extract_int(item, "teamId", "id"),
        name=team_full_name(item),
        location_name=extract_str(item, "placeName"),
        common_name=extract_str(item, "teamCommonName"),
        division=extract_str(item, "divisionName"),
        division_abbrev=extract_str(item, "divisionAbbrev"),
        conference=conference_name(item),
        conference_abbrev=extract_str(item, "conferenceAbbrev"),
        record=_standings_stats(item),
    )


def parse_team_directory(document: Json, query: TeamQuery) -> Team:
    item = find_team(extract_list(document, "data"), query.team_code)
    if item is None:
        return Team()
    return Team(
        team_id=extract_int(item, "id", "teamId"),
        name=extract_str(item, "fullName", "name"),
        location_name=extract_str(item, "locationName"),
        common_name=extract_str(item, "teamName", "commonName"),
        division=extract_str(item, "divisionName", "division.name"),
        division_abbrev=extract_str(item, "divisionAbbrev", "division.nameShort"),
        conference=conference_name(item),
        conference_abbrev=extract_str(item, "conferenceAbbrev", "conference.nameShort"),
    )


def parse_club_stats(document: Json, record: Team) -> Team:
    # Older payloads nest totals under teamStats[0]; newer ones are flat.
    def first(key: str) -> int | None:
        return extract_int(document, f"teamStats.0.{key}", key)

    stats = TeamStats(
        games_played=first("gamesPlayed"),
        wins=first("wins"),
        losses=first("losses"),
        ot_losses=first("otLosses"),
        points=first("points"),
        goals_for=first("goalsFor"),
        goals_against=first("goalsAgainst"),
        home_record=extract_str(document, "teamStats.0.homeRecord", "homeRecord"),
        away_record=extract_str(document, "teamStats.0.awayRecord", "awayRecord"),
    )
    return Team(record=stats)


def seed_team(query: TeamQuery) -> Team:
    return Team(team_code=query.team_code)


TEAM_SOURCES: tuple[SourceDescriptor[Team], ...] = (
    SourceDescriptor("team-roster", "{web}/roster/{team_code}/current", parse_roster),
    SourceDescriptor("standings", "{web}/standings/now", parse_standings_team),
    SourceDescriptor("team-directory", "{stats}/team", parse_team_directory),
)

TEAM_PROFILE: EntityProfile[Team] = EntityProfile(
    kind=EntityKind.TEAM,
    seed=seed_team,
    sources=TEAM_SOURCES,
    complete_when=("name", "division", "conference"),
    identity=("name",),
    enrichments=(
        Enrichment(
            "club-stats",
            "{web}/club-stats/{team_code}/now",
            parse_club_stats,
            fills=("record",),
        ),
    ),
)
