"""Canonical records returned by the resolver.

Every field is optional: a record only has to satisfy its entity kind's
completeness predicate once resolution finishes. Numeric fields stay
``None`` when unknown; zero is injected only when rendering.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class TeamStats:
    games_played: int | None = None
    wins: int | None = None
    losses: int | None = None
    ot_losses: int | None = None
    points: int | None = None
    goals_for: int | None = None
    goals_against: int | None = None
    home_record: str | None = None
    away_record: str | None = None


@dataclass(frozen=True)
class Team:
    team_code: str | None = None
    team_id: int | None = None
    name: str | None = None
    location_name: str | None = None
    common_name: str | None = None
    division: str | None = None
    division_abbrev: str | None = None
    conference: str | None = None
    conference_abbrev: str | None = None
    roster_size: int | None = None
    record: TeamStats | None = None


@dataclass(frozen=True)
class PlayerStats:
    games_played: int | None = None
    goals: int | None = None
    assists: int | None = None
    points: int | None = None
    plus_minus: int | None = None
    penalty_minutes: int | None = None
    power_play_goals: int | None = None
    game_winning_goals: int | None = None
    shots: int | None = None
    shooting_pct: float | None = None
    wins: int | None = None
    losses: int | None = None
    ot_losses: int | None = None
    save_pct: float | None = None
    goals_against_avg: float | None = None
    shutouts: int | None = None


@dataclass(frozen=True)
class DraftDetails:
    year: int | None = None
    team_abbrev: str | None = None
    round: int | None = None
    pick_in_round: int | None = None
    overall_pick: int | None = None


@dataclass(frozen=True)
class Player:
    player_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    sweater_number: int | None = None
    team_id: int | None = None
    team_abbrev: str | None = None
    team_name: str | None = None
    birth_date: str | None = None
    birth_city: str | None = None
    birth_state_province: str | None = None
    birth_country: str | None = None
    height_in: int | None = None
    height_cm: int | None = None
    weight_lb: int | None = None
    weight_kg: int | None = None
    shoots_catches: str | None = None
    is_active: bool | None = None
    draft: DraftDetails | None = None
    season_stats: PlayerStats | None = None
    career_stats: PlayerStats | None = None
    awards: tuple[str, ...] = ()

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None


@dataclass(frozen=True)
class StandingsRow:
    team_code: str | None = None
    team_name: str | None = None
    division: str | None = None
    conference: str | None = None
    games_played: int | None = None
    wins: int | None = None
    losses: int | None = None
    ot_losses: int | None = None
    points: int | None = None
    goals_for: int | None = None
    goals_against: int | None = None


@dataclass(frozen=True)
class Standings:
    division: str | None = None
    as_of: str | None = None
    rows: tuple[StandingsRow, ...] = ()


@dataclass(frozen=True)
class RosterPlayer:
    player_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    sweater_number: int | None = None
    position: str | None = None
    shoots_catches: str | None = None
    height_in: int | None = None
    weight_lb: int | None = None
    birth_date: str | None = None

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None


@dataclass(frozen=True)
class Roster:
    team_code: str | None = None
    season: str | None = None
    forwards: tuple[RosterPlayer, ...] = ()
    defensemen: tuple[RosterPlayer, ...] = ()
    goalies: tuple[RosterPlayer, ...] = ()

    @property
    def size(self) -> int:
        return len(self.forwards) + len(self.defensemen) + len(self.goalies)


@dataclass(frozen=True)
class LeaderRow:
    rank: int | None = None
    player_id: int | None = None
    name: str | None = None
    team_abbrev: str | None = None
    position: str | None = None
    value: int | float | None = None
    games_played: int | None = None


@dataclass(frozen=True)
class LeaderBoard:
    category: str | None = None
    group: str | None = None
    category_label: str | None = None
    season: str | None = None
    game_type: int | None = None
    rows: tuple[LeaderRow, ...] = ()


@dataclass(frozen=True)
class ScheduledGame:
    game_id: int | None = None
    game_date: str | None = None
    start_time_utc: str | None = None
    venue: str | None = None
    home_abbrev: str | None = None
    away_abbrev: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    game_state: str | None = None


@dataclass(frozen=True)
class Schedule:
    team_code: str | None = None
    date: str | None = None
    month: str | None = None
    season: str | None = None
    games: tuple[ScheduledGame, ...] = ()


def record_to_dict(record: Any) -> dict[str, Any]:
    return asdict(record)


def record_to_json(record: Any) -> str:
    """Stable JSON view of a record; identical records give identical bytes."""
    return json.dumps(record_to_dict(record), sort_keys=True, separators=(",", ":"))
