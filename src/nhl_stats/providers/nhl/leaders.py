from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nhl_stats.core.text import format_season, normalize_label
from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.descriptors import EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import (
    extract_int,
    extract_list,
    extract_number,
    extract_str,
    mappings,
)
from nhl_stats.reconcile.queries import EntityKind, LeadersQuery
from nhl_stats.reconcile.records import LeaderBoard, LeaderRow

CATEGORY_LABELS = {
    "plusMinus": "Plus/Minus",
    "powerPlayGoals": "Power Play Goals",
    "gameWinningGoals": "Game Winning Goals",
    "savePctg": "Save Percentage",
    "goalsAgainstAverage": "Goals Against Average",
}

# The web leaders endpoint abbreviates a few goalie categories.
_WEB_CATEGORY_ALIASES = {"goalsAgainstAverage": "goalsAgainstAverage,gaa"}

# Summary reports spell some columns differently from the leaders endpoints.
_SUMMARY_KEYS = {"savePctg": "savePct"}


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category[:1].upper() + category[1:])


def leader_name(item: Any) -> str | None:
    name = extract_str(item, "fullName", "skaterFullName", "goalieFullName", "playerName")
    if name is not None:
        return name
    first = extract_str(item, "firstName")
    last = extract_str(item, "lastName")
    if first and last:
        return f"{first} {last}"
    return last


def leader_row(item: Any, rank: int, category: str) -> LeaderRow:
    return LeaderRow(
        rank=rank,
        player_id=extract_int(item, "playerId", "id"),
        name=leader_name(item),
        team_abbrev=extract_str(
            item, "teamAbbrev", "teamAbbrevs", "team.triCode", "team.abbrev"
        ),
        position=extract_str(item, "position", "positionCode"),
        value=extract_number(item, "value", category, _SUMMARY_KEYS.get(category, category)),
        games_played=extract_int(item, "gamesPlayed"),
    )


def _season(document: Any, query: LeadersQuery) -> str | None:
    season = extract_str(document, "season") or extract_int(document, "season")
    return format_season(season or query.season)


def _rows(items: Any, query: LeadersQuery) -> tuple[LeaderRow, ...]:
    leaders = mappings(items)[: query.limit]
    return tuple(leader_row(item, i + 1, query.category) for i, item in enumerate(leaders))


def _web_category_block(document: Any, category: str) -> Mapping[str, Any] | None:
    wanted = normalize_label(category)
    for block in mappings(extract_list(document, "categories")):
        names = (extract_str(block, "categoryName"), extract_str(block, "categoryLabel"))
        if any(n is not None and normalize_label(n) == wanted for n in names):
            return block
    return None


def parse_web_leaders(document: Json, query: LeadersQuery) -> LeaderBoard:
    """
    Two shapes are in the wild: {"categories": [{"categoryName", "leaders"}]}
    and a flat {"<category>": [...]}; the goalie endpoint also uses "gaa".
    """
    block = _web_category_block(document, query.category)
    if block is not None:
        items = extract_list(block, "leaders")
        label = extract_str(block, "categoryLabel")
    else:
        aliases = _WEB_CATEGORY_ALIASES.get(query.category, query.category).split(",")
        items = extract_list(document, *aliases)
        label = None

    rows = _rows(items, query)
    if not rows:
        return LeaderBoard()
    return LeaderBoard(
        category_label=label,
        season=_season(document, query),
        rows=rows,
    )


def parse_stats_leaders(document: Json, query: LeadersQuery) -> LeaderBoard:
    rows = _rows(extract_list(document, "data"), query)
    if not rows:
        return LeaderBoard()
    return LeaderBoard(
        category_label=extract_str(document, "description"),
        season=_season(document, query),
        rows=rows,
    )


def parse_summary_leaders(document: Json, query: LeadersQuery) -> LeaderBoard:
    """Summary reports are filtered on `report_season`; rows also carry seasonId."""
    items = extract_list(document, "data")
    rows = _rows(items, query)
    if not rows:
        return LeaderBoard()
    season = extract_int(items, "0.seasonId") or query.report_season
    return LeaderBoard(season=format_season(season), rows=rows)


def seed_leaders(query: LeadersQuery) -> LeaderBoard:
    return LeaderBoard(
        category=query.category,
        group=query.group.value,
        game_type=query.game_type,
    )


def _current_season(query: LeadersQuery) -> bool:
    return query.season is None


SKATER_LEADER_SOURCES: tuple[SourceDescriptor[LeaderBoard], ...] = (
    SourceDescriptor(
        "skater-leaders",
        "{web}/skater-stats-leaders/{leaders_season}?categories={category}&limit={limit}",
        parse_web_leaders,
    ),
    SourceDescriptor(
        "stats-leaders",
        "{stats}/leaders/skaters/{category}?limit={limit}",
        parse_stats_leaders,
        applies=_current_season,
    ),
    SourceDescriptor(
        "skater-summary",
        "{stats}/skater/summary?limit={limit}&sort={category}&cayenneExp=seasonId={season_id}%20and%20gameTypeId={game_type}",
        parse_summary_leaders,
    ),
)

GOALIE_LEADER_SOURCES: tuple[SourceDescriptor[LeaderBoard], ...] = (
    SourceDescriptor(
        "goalie-leaders",
        "{web}/goalie-stats-leaders/{leaders_season}?categories={category}&limit={limit}",
        parse_web_leaders,
    ),
    SourceDescriptor(
        "goalie-summary",
        "{stats}/goalie/summary?limit={limit}&sort={category}&cayenneExp=seasonId={season_id}%20and%20gameTypeId={game_type}",
        parse_summary_leaders,
    ),
)


def _leaders_profile(kind: EntityKind, sources: tuple[SourceDescriptor[LeaderBoard], ...]) -> EntityProfile[LeaderBoard]:
    return EntityProfile(
        kind=kind,
        seed=seed_leaders,
        sources=sources,
        complete_when=("rows",),
        identity=("rows",),
    )


SKATER_LEADERS_PROFILE = _leaders_profile(EntityKind.SKATER_LEADERS, SKATER_LEADER_SOURCES)
GOALIE_LEADERS_PROFILE = _leaders_profile(EntityKind.GOALIE_LEADERS, GOALIE_LEADER_SOURCES)
