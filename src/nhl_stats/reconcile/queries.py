from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as date_type
from enum import StrEnum
from typing import ClassVar

from nhl_stats.core.config import settings
from nhl_stats.core.text import normalize_label
from nhl_stats.providers.base.errors import InvalidQueryError


class EntityKind(StrEnum):
    TEAM = "team"
    PLAYER = "player"
    STANDINGS = "standings"
    ROSTER = "roster"
    SKATER_LEADERS = "skater_leaders"
    GOALIE_LEADERS = "goalie_leaders"
    SCHEDULE = "schedule"


class LeaderGroup(StrEnum):
    SKATER = "skater"
    GOALIE = "goalie"


SKATER_CATEGORIES = (
    "points",
    "goals",
    "assists",
    "plusMinus",
    "powerPlayGoals",
    "gameWinningGoals",
    "shots",
)
GOALIE_CATEGORIES = ("wins", "savePctg", "goalsAgainstAverage", "shutouts")

DIVISIONS = ("Atlantic", "Metropolitan", "Central", "Pacific")

MAX_LIMIT = 50
DEFAULT_LIMIT = 10

REGULAR_SEASON = 2
PLAYOFFS = 3
GAME_TYPES = {REGULAR_SEASON: "Regular Season", PLAYOFFS: "Playoffs"}

_team_code_re = re.compile(r"^[A-Z]{3}$")
_season_re = re.compile(r"^(\d{4})(\d{4})$")
_month_re = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class TeamQuery:
    team_code: str
    kind: ClassVar[EntityKind] = EntityKind.TEAM

    def url_params(self) -> dict[str, str]:
        return {"team_code": self.team_code}


@dataclass(frozen=True)
class PlayerQuery:
    player_id: int
    kind: ClassVar[EntityKind] = EntityKind.PLAYER

    def url_params(self) -> dict[str, str]:
        return {"player_id": str(self.player_id)}


@dataclass(frozen=True)
class StandingsQuery:
    division: str | None = None
    kind: ClassVar[EntityKind] = EntityKind.STANDINGS

    def url_params(self) -> dict[str, str]:
        return {}


@dataclass(frozen=True)
class RosterQuery:
    team_code: str
    season: str | None = None
    kind: ClassVar[EntityKind] = EntityKind.ROSTER

    def url_params(self) -> dict[str, str]:
        return {
            "team_code": self.team_code,
            "roster_season": self.season or "current",
            "stats_season": f"{self.season}/{REGULAR_SEASON}" if self.season else "now",
        }


@dataclass(frozen=True)
class LeadersQuery:
    """
    `season` is set only when the caller asked for one; without it the web
    endpoints serve the current season. `report_season` is the season the
    stats summary reports are filtered on, so it is always known.
    """

    category: str
    limit: int = DEFAULT_LIMIT
    group: LeaderGroup = LeaderGroup.SKATER
    season: str | None = None
    game_type: int = REGULAR_SEASON
    report_season: str | None = None

    @property
    def kind(self) -> EntityKind:  # type: ignore[override]
        if self.group is LeaderGroup.GOALIE:
            return EntityKind.GOALIE_LEADERS
        return EntityKind.SKATER_LEADERS

    def url_params(self) -> dict[str, str]:
        params = {
            "category": self.category,
            "limit": str(self.limit),
            "game_type": str(self.game_type),
            "leaders_season": f"{self.season}/{self.game_type}" if self.season else "current",
        }
        if self.report_season:
            params["season_id"] = self.report_season
        return params


@dataclass(frozen=True)
class ScheduleQuery:
    team_code: str | None = None
    date: str | None = None
    month: str | None = None
    season: str | None = None
    kind: ClassVar[EntityKind] = EntityKind.SCHEDULE

    def url_params(self) -> dict[str, str]:
        return {
            "team_code": self.team_code or "",
            "date": self.date or "now",
            "month": self.month or "",
            "season": self.season or "",
        }


# -----------------------------
# Boundary validation
# -----------------------------


def parse_team_code(value: str) -> str:
    code = value.strip().upper()
    if not _team_code_re.match(code):
        raise InvalidQueryError(
            f"Team code must be exactly three letters (e.g. TOR, NYR), got {value!r}"
        )
    return code


def parse_date(value: str) -> str:
    try:
        return date_type.fromisoformat(value.strip()).isoformat()
    except ValueError as e:
        raise InvalidQueryError(f"Date must be YYYY-MM-DD, got {value!r}") from e


def parse_season(value: str) -> str:
    """Accept an eight-digit season id such as 20232024 (consecutive years)."""

    m = _season_re.match(str(value).strip())
    if m is None or int(m.group(2)) != int(m.group(1)) + 1:
        raise InvalidQueryError(f"Season must look like 20232024, got {value!r}")
    return m.group(0)


def parse_month(value: str) -> str:
    m = _month_re.match(value.strip())
    if m is None or not 1 <= int(m.group(2)) <= 12:
        raise InvalidQueryError(f"Month must be YYYY-MM, got {value!r}")
    return m.group(0)


def parse_game_type(value: int) -> int:
    if value not in GAME_TYPES:
        raise InvalidQueryError(
            f"Game type must be {REGULAR_SEASON} (regular season) or {PLAYOFFS} (playoffs), got {value!r}"
        )
    return value


def clamp_limit(limit: int | None, *, maximum: int = MAX_LIMIT) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(int(limit), maximum, MAX_LIMIT))


def team_query(team_code: str) -> TeamQuery:
    return TeamQuery(team_code=parse_team_code(team_code))


def player_query(player_id: int | str) -> PlayerQuery:
    try:
        pid = int(str(player_id).strip())
    except ValueError as e:
        raise InvalidQueryError(f"Player id must be an integer, got {player_id!r}") from e
    if pid <= 0:
        raise InvalidQueryError(f"Player id must be positive, got {pid}")
    return PlayerQuery(player_id=pid)


def standings_query(division: str | None = None) -> StandingsQuery:
    if division is None or not division.strip():
        return StandingsQuery()
    wanted = normalize_label(division)
    for name in DIVISIONS:
        if normalize_label(name) == wanted:
            return StandingsQuery(division=name)
    raise InvalidQueryError(
        f"Unknown division {division!r}. Valid divisions are: {', '.join(DIVISIONS)}."
    )


def roster_query(team_code: str, season: str | None = None) -> RosterQuery:
    return RosterQuery(
        team_code=parse_team_code(team_code),
        season=parse_season(season) if season else None,
    )


def _leader_group(value: LeaderGroup | str) -> LeaderGroup:
    try:
        return LeaderGroup(value)
    except ValueError as e:
        valid = ", ".join(g.value for g in LeaderGroup)
        raise InvalidQueryError(f"Unknown leader group {value!r}. Valid groups are: {valid}.") from e


def leaders_query(
    category: str,
    limit: int | None = None,
    *,
    group: LeaderGroup | str = LeaderGroup.SKATER,
    season: str | None = None,
    game_type: int = REGULAR_SEASON,
    max_limit: int = MAX_LIMIT,
) -> LeadersQuery:
    group = _leader_group(group)
    season = parse_season(season) if season else None
    known = GOALIE_CATEGORIES if group is LeaderGroup.GOALIE else SKATER_CATEGORIES
    wanted = normalize_label(category)
    for name in known:
        if normalize_label(name) == wanted:
            return LeadersQuery(
                category=name,
                limit=clamp_limit(limit, maximum=max_limit),
                group=group,
                season=season,
                game_type=parse_game_type(game_type),
                report_season=season or settings.season_id,
            )
    raise InvalidQueryError(
        f"Unknown {group.value} category {category!r}. Valid categories are: {', '.join(known)}."
    )


def schedule_query(
    team_code: str | None = None,
    date: str | None = None,
    *,
    month: str | None = None,
    season: str | None = None,
) -> ScheduleQuery:
    if sum(1 for v in (date, month, season) if v) > 1:
        raise InvalidQueryError("Give at most one of a date, a month or a season.")
    if (month or season) and not team_code:
        raise InvalidQueryError("Month and season schedules need a team code.")
    return ScheduleQuery(
        team_code=parse_team_code(team_code) if team_code else None,
        date=parse_date(date) if date else None,
        month=parse_month(month) if month else None,
        season=parse_season(season) if season else None,
    )
