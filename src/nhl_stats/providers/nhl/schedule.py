from __future__ import annotations

from typing import Any

from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.descriptors import EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import extract_int, extract_list, extract_str, mappings
from nhl_stats.reconcile.queries import EntityKind, ScheduleQuery
from nhl_stats.reconcile.records import Schedule, ScheduledGame


def scheduled_game(item: Any, day: str | None = None) -> ScheduledGame:
    return ScheduledGame(
        game_id=extract_int(item, "id", "gamePk"),
        game_date=extract_str(item, "gameDate") or day,
        start_time_utc=extract_str(item, "startTimeUTC"),
        venue=extract_str(item, "venue"),
        home_abbrev=extract_str(item, "homeTeam.abbrev", "homeTeam.triCode"),
        away_abbrev=extract_str(item, "awayTeam.abbrev", "awayTeam.triCode"),
        home_score=extract_int(item, "homeTeam.score"),
        away_score=extract_int(item, "awayTeam.score"),
        game_state=extract_str(item, "gameState"),
    )


def _involves(game: ScheduledGame, team_code: str | None) -> bool:
    return team_code is None or team_code in (game.home_abbrev, game.away_abbrev)


def _schedule(games: list[ScheduledGame], query: ScheduleQuery) -> Schedule:
    kept = tuple(g for g in games if _involves(g, query.team_code))
    return Schedule(games=kept)


def parse_club_schedule(document: Json, query: ScheduleQuery) -> Schedule:
    """Week, month and season club schedules share one shape: top-level games."""
    games = [scheduled_game(item) for item in mappings(extract_list(document, "games"))]
    return _schedule(games, query)


def parse_league_schedule(document: Json, query: ScheduleQuery) -> Schedule:
    games: list[ScheduledGame] = []
    for day in mappings(extract_list(document, "gameWeek")):
        date = extract_str(day, "date")
        games.extend(scheduled_game(item, date) for item in mappings(extract_list(day, "games")))
    return _schedule(games, query)


def parse_scoreboard(document: Json, query: ScheduleQuery) -> Schedule:
    date = extract_str(document, "currentDate")
    games = [scheduled_game(item, date) for item in mappings(extract_list(document, "games"))]
    return _schedule(games, query)


def seed_schedule(query: ScheduleQuery) -> Schedule:
    return Schedule(
        team_code=query.team_code,
        date=query.date,
        month=query.month,
        season=query.season,
    )


def _by_day(query: ScheduleQuery) -> bool:
    return query.month is None and query.season is None


def _team_week(query: ScheduleQuery) -> bool:
    return query.team_code is not None and _by_day(query)


def _team_month(query: ScheduleQuery) -> bool:
    return query.team_code is not None and query.month is not None


def _team_season(query: ScheduleQuery) -> bool:
    return query.team_code is not None and query.season is not None


SCHEDULE_SOURCES: tuple[SourceDescriptor[Schedule], ...] = (
    SourceDescriptor(
        "club-schedule-season",
        "{web}/club-schedule/{team_code}/season/{season}",
        parse_club_schedule,
        applies=_team_season,
    ),
    SourceDescriptor(
        "club-schedule-month",
        "{web}/club-schedule/{team_code}/month/{month}",
        parse_club_schedule,
        applies=_team_month,
    ),
    SourceDescriptor(
        "club-schedule-week",
        "{web}/club-schedule/{team_code}/week/{date}",
        parse_club_schedule,
        applies=_team_week,
    ),
    # Day-based sources cannot serve a month or season span.
    SourceDescriptor("league-schedule", "{web}/schedule/{date}", parse_league_schedule, applies=_by_day),
    SourceDescriptor("scoreboard", "{web}/score/{date}", parse_scoreboard, applies=_by_day),
)

SCHEDULE_PROFILE: EntityProfile[Schedule] = EntityProfile(
    kind=EntityKind.SCHEDULE,
    seed=seed_schedule,
    sources=SCHEDULE_SOURCES,
    complete_when=("games",),
    identity=("games",),
)
