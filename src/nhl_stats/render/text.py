"""Turns canonical records into display lines.

Renderers never see a missing record: the resolver returns a record or
raises NotFoundError, which renders through `render_not_found`. Unknown
numbers print as 0 here and only here.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from nhl_stats.core.text import format_height, format_season, format_weight
from nhl_stats.providers.nhl.leaders import category_label
from nhl_stats.reconcile.extract import safe_display
from nhl_stats.reconcile.queries import (
    GAME_TYPES,
    REGULAR_SEASON,
    LeadersQuery,
    PlayerQuery,
    RosterQuery,
    ScheduleQuery,
    StandingsQuery,
    TeamQuery,
)
from nhl_stats.reconcile.records import (
    LeaderBoard,
    Player,
    PlayerStats,
    Roster,
    RosterPlayer,
    Schedule,
    ScheduledGame,
    Standings,
    StandingsRow,
    Team,
)
from nhl_stats.reconcile.resolver import Resolution


def _n(value: int | float | None) -> int | float:
    return 0 if value is None else value


def _parse_iso_z(value: str) -> datetime | None:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(v)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


# -----------------------------
# Team
# -----------------------------


def render_team(team: Team) -> list[str]:
    name = team.name
    if not name and team.location_name and team.common_name:
        name = f"{team.location_name} {team.common_name}"
    lines = [
        f"Team: {name or f'{team.team_code} (name unavailable)'}",
        f"Abbreviation: {safe_display(team.team_code)}",
        f"Division: {safe_display(team.division, 'Not available')}",
        f"Conference: {safe_display(team.conference, 'Not available')}",
    ]
    if team.roster_size:
        lines.append(f"Roster Size: {team.roster_size}")

    stats = team.record
    if stats is not None:
        lines += [
            "Stats:",
            f"  Record: {_n(stats.wins)}-{_n(stats.losses)}-{_n(stats.ot_losses)}",
            f"  Points: {_n(stats.points)}",
        ]
        if stats.goals_for is not None or stats.goals_against is not None:
            lines += [
                f"  Goals For: {_n(stats.goals_for)}",
                f"  Goals Against: {_n(stats.goals_against)}",
            ]
        if stats.home_record or stats.away_record:
            lines += [
                f"  Home Record: {safe_display(stats.home_record)}",
                f"  Away Record: {safe_display(stats.away_record)}",
            ]
    return lines


# -----------------------------
# Player
# -----------------------------


def _skater_lines(stats: PlayerStats) -> list[str]:
    shooting = f"{stats.shooting_pct * 100:.1f}%" if stats.shooting_pct is not None else "0%"
    return [
        f"  Games Played: {_n(stats.games_played)}",
        f"  Goals: {_n(stats.goals)}",
        f"  Assists: {_n(stats.assists)}",
        f"  Points: {_n(stats.points)}",
        f"  Plus/Minus: {_n(stats.plus_minus)}",
        f"  Penalty Minutes: {_n(stats.penalty_minutes)}",
        f"  Power Play Goals: {_n(stats.power_play_goals)}",
        f"  Game Winning Goals: {_n(stats.game_winning_goals)}",
        f"  Shots: {_n(stats.shots)}",
        f"  Shooting Percentage: {shooting}",
    ]


def _goalie_lines(stats: PlayerStats) -> list[str]:
    return [
        f"  Games Played: {_n(stats.games_played)}",
        f"  Wins: {_n(stats.wins)}",
        f"  Losses: {_n(stats.losses)}",
        f"  OT Losses: {_n(stats.ot_losses)}",
        f"  Save Percentage: {_n(stats.save_pct):.3f}",
        f"  Goals Against Average: {_n(stats.goals_against_avg):.2f}",
        f"  Shutouts: {_n(stats.shutouts)}",
    ]


def render_player(player: Player) -> list[str]:
    birth_place = ", ".join(
        p for p in (player.birth_city, player.birth_state_province, player.birth_country) if p
    )
    lines = [
        f"Name: {player.full_name or f'Player #{player.player_id}'}",
        f"Position: {safe_display(player.position, 'Unknown')}",
        f"Jersey Number: {safe_display(player.sweater_number)}",
        f"Team: {safe_display(player.team_name, 'Unknown Team')}",
        f"Birth Date: {safe_display(player.birth_date, 'Unknown')}",
        f"Birth Place: {birth_place or 'Unknown'}",
        f"Height: {format_height(player.height_in, player.height_cm) or 'N/A'}",
        f"Weight: {format_weight(player.weight_lb, player.weight_kg) or 'N/A'}",
        f"Shoots/Catches: {safe_display(player.shoots_catches)}",
    ]

    draft = player.draft
    if draft is not None and draft.year:
        lines.append(
            f"Draft: {draft.year} Round {safe_display(draft.round)}, "
            f"Pick {safe_display(draft.overall_pick)} ({safe_display(draft.team_abbrev)})"
        )

    if player.season_stats is not None:
        if player.position == "G":
            lines += ["Season Stats (Goalie):", *_goalie_lines(player.season_stats)]
        else:
            lines += ["Season Stats (Skater):", *_skater_lines(player.season_stats)]

    career = player.career_stats
    if career is not None:
        lines += [
            "Career Stats:",
            f"  Games Played: {_n(career.games_played)}",
            f"  Goals: {_n(career.goals)}",
            f"  Assists: {_n(career.assists)}",
            f"  Points: {_n(career.points)}",
        ]

    if player.awards:
        lines.append("Awards:")
        lines += [f"  {award}" for award in player.awards]
    return lines


# -----------------------------
# Standings
# -----------------------------


def _games_played(row: StandingsRow) -> int:
    if row.games_played is not None:
        return row.games_played
    return int(_n(row.wins) + _n(row.losses) + _n(row.ot_losses))


def render_standings(standings: Standings) -> list[str]:
    by_division: dict[str, list[StandingsRow]] = {}
    for row in standings.rows:
        by_division.setdefault(row.division or "League", []).append(row)

    lines: list[str] = []
    if standings.as_of:
        lines.append(f"Standings as of {standings.as_of}")
    for division, rows in by_division.items():
        heading = division if division == "League" else f"{division} Division"
        lines += [
            f"## {heading}",
            "Team | GP | W | L | OTL | PTS | GF | GA",
            "-----|----|---|---|-----|-----|----|---",
        ]
        for row in sorted(rows, key=lambda r: _n(r.points), reverse=True):
            lines.append(
                " | ".join(
                    str(v)
                    for v in (
                        row.team_name or row.team_code or "Unknown",
                        _games_played(row),
                        _n(row.wins),
                        _n(row.losses),
                        _n(row.ot_losses),
                        _n(row.points),
                        _n(row.goals_for),
                        _n(row.goals_against),
                    )
                )
            )
        lines.append("")
    return lines


# -----------------------------
# Roster
# -----------------------------


def _roster_line(player: RosterPlayer) -> str:
    number = f" #{player.sweater_number}" if player.sweater_number is not None else ""
    height = format_height(player.height_in) or "N/A"
    weight = format_weight(player.weight_lb) or "N/A"
    return (
        f"{player.full_name or f'Player #{player.player_id}'}{number} "
        f"({safe_display(player.position)}) - {height}, {weight}"
    )


def render_roster(roster: Roster) -> list[str]:
    lines = [f"# {roster.team_code} Roster - {roster.season or 'Current'} Season", ""]
    for heading, players in (
        ("Forwards", roster.forwards),
        ("Defensemen", roster.defensemen),
        ("Goalies", roster.goalies),
    ):
        if players:
            lines += [f"## {heading}", *(_roster_line(p) for p in players), ""]
    lines.append(f"Total players: {roster.size}")
    return lines


# -----------------------------
# Leaders
# -----------------------------


def _leader_value(value: int | float | None, category: str | None) -> str:
    if value is None:
        return "0"
    if category == "savePctg":
        return f"{value:.3f}"
    if category == "goalsAgainstAverage":
        return f"{value:.2f}"
    return str(value)


def render_leaders(board: LeaderBoard) -> list[str]:
    label = board.category_label or category_label(board.category or "")
    group = "Goalie" if board.group == "goalie" else "Skater"
    when = board.season or "current"
    if board.game_type is not None and board.game_type != REGULAR_SEASON:
        game_type = GAME_TYPES.get(board.game_type, f"Game Type {board.game_type}")
        when = f"{when} {game_type}"
    header = f"NHL {group} Leaders - {label} ({when})"
    lines = [header, "=" * len(header)]
    for row in board.rows:
        name = row.name or f"Player #{row.player_id or row.rank}"
        lines.append(
            f"{_n(row.rank):>2}. {name:<25} | {row.team_abbrev or 'N/A':<4} | "
            f"{_leader_value(row.value, board.category)}"
        )
    return lines


# -----------------------------
# Schedule
# -----------------------------


def _game_line(game: ScheduledGame) -> str:
    start = _parse_iso_z(game.start_time_utc) if game.start_time_utc else None
    when = start.astimezone(UTC).strftime("%H:%M UTC") if start else "TBD"
    line = f"{safe_display(game.away_abbrev, 'TBD')} @ {safe_display(game.home_abbrev, 'TBD')} - {when}"
    state = (game.game_state or "").upper()
    if state in {"LIVE", "CRIT"}:
        line += f" ({_n(game.away_score)} - {_n(game.home_score)}) LIVE"
    elif state in {"FINAL", "OFF"}:
        line += f" ({_n(game.away_score)} - {_n(game.home_score)}) FINAL"
    return line


def render_schedule(schedule: Schedule) -> list[str]:
    by_day: dict[str, list[ScheduledGame]] = {}
    for game in schedule.games:
        by_day.setdefault(game.game_date or "Unknown date", []).append(game)

    lines: list[str] = []
    for day, games in by_day.items():
        lines.append(f"{day} - {len(games)} games:")
        lines += [_game_line(g) for g in games]
        lines.append("")
    return lines


# -----------------------------
# Dispatch
# -----------------------------

_RENDERERS: dict[type, Callable[[Any], list[str]]] = {
    Team: render_team,
    Player: render_player,
    Standings: render_standings,
    Roster: render_roster,
    LeaderBoard: render_leaders,
    Schedule: render_schedule,
}


def render_record(record: Any) -> list[str]:
    renderer = _RENDERERS.get(type(record))
    if renderer is None:
        raise TypeError(f"No renderer for {type(record).__name__}")
    return renderer(record)


def render_resolution(resolution: Resolution) -> list[str]:
    lines = render_record(resolution.record)
    if not resolution.complete and resolution.warnings:
        failed = sorted({w.split(":", 1)[0] for w in resolution.warnings})
        lines.append(f"Note: partial data; unavailable sources: {', '.join(failed)}")
    return lines


def _describe(query: Any) -> str:
    if isinstance(query, TeamQuery):
        return f"team: {query.team_code}"
    if isinstance(query, PlayerQuery):
        return f"player ID: {query.player_id}"
    if isinstance(query, StandingsQuery):
        return f"standings ({query.division})" if query.division else "standings"
    if isinstance(query, RosterQuery):
        return f"roster: {query.team_code} ({format_season(query.season) or 'current'})"
    if isinstance(query, LeadersQuery):
        scope = f" ({format_season(query.season)})" if query.season else ""
        return f"{query.group.value} leaders in category: {query.category}{scope}"
    if isinstance(query, ScheduleQuery):
        span = query.date or query.month or format_season(query.season)
        parts = " ".join(p for p in (query.team_code, span) if p)
        return f"schedule ({parts})" if parts else "schedule"
    return "query"


def render_not_found(query: Any) -> list[str]:
    return [
        f"Could not retrieve data for {_describe(query)}. "
        "The source may be invalid or the upstream NHL API may be unavailable."
    ]
