from __future__ import annotations

from typing import Any

from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.descriptors import Enrichment, EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import (
    extract_bool,
    extract_int,
    extract_list,
    extract_mapping,
    extract_number,
    extract_str,
    mappings,
)
from nhl_stats.reconcile.queries import EntityKind, PlayerQuery
from nhl_stats.reconcile.records import DraftDetails, Player, PlayerStats


def parse_player_stats(block: Any) -> PlayerStats | None:
    if block is None:
        return None
    return PlayerStats(
        games_played=extract_int(block, "gamesPlayed"),
        goals=extract_int(block, "goals"),
        assists=extract_int(block, "assists"),
        points=extract_int(block, "points"),
        plus_minus=extract_int(block, "plusMinus"),
        penalty_minutes=extract_int(block, "pim", "penaltyMinutes"),
        power_play_goals=extract_int(block, "powerPlayGoals"),
        game_winning_goals=extract_int(block, "gameWinningGoals"),
        shots=extract_int(block, "shots"),
        shooting_pct=extract_number(block, "shootingPctg"),
        wins=extract_int(block, "wins"),
        losses=extract_int(block, "losses"),
        ot_losses=extract_int(block, "otLosses"),
        save_pct=extract_number(block, "savePctg"),
        goals_against_avg=extract_number(block, "goalsAgainstAvg", "goalsAgainstAverage"),
        shutouts=extract_int(block, "shutouts"),
    )


def _draft(document: Any) -> DraftDetails | None:
    block = extract_mapping(document, "draftDetails")
    if block is None:
        return None
    return DraftDetails(
        year=extract_int(block, "year"),
        team_abbrev=extract_str(block, "teamAbbrev"),
        round=extract_int(block, "round"),
        pick_in_round=extract_int(block, "pickInRound"),
        overall_pick=extract_int(block, "overallPick"),
    )


def _awards(document: Any) -> tuple[str, ...]:
    names = (extract_str(a, "trophy", "title") for a in mappings(extract_list(document, "awards")))
    return tuple(n for n in names if n)


def parse_player_landing(document: Json, query: PlayerQuery) -> Player:
    return Player(
        first_name=extract_str(document, "firstName"),
        last_name=extract_str(document, "lastName"),
        position=extract_str(document, "position", "positionCode"),
        sweater_number=extract_int(document, "sweaterNumber"),
        team_id=extract_int(document, "currentTeamId"),
        team_abbrev=extract_str(document, "currentTeamAbbrev"),
        team_name=extract_str(document, "fullTeamName"),
        birth_date=extract_str(document, "birthDate"),
        birth_city=extract_str(document, "birthCity"),
        birth_state_province=extract_str(document, "birthStateProvince"),
        birth_country=extract_str(document, "birthCountry"),
        height_in=extract_int(document, "heightInInches"),
        height_cm=extract_int(document, "heightInCentimeters"),
        weight_lb=extract_int(document, "weightInPounds"),
        weight_kg=extract_int(document, "weightInKilograms"),
        shoots_catches=extract_str(document, "shootsCatches"),
        is_active=extract_bool(document, "isActive"),
        draft=_draft(document),
        season_stats=parse_player_stats(
            extract_mapping(document, "featuredStats.regularSeason.subSeason")
        ),
        career_stats=parse_player_stats(
            extract_mapping(document, "featuredStats.regularSeason.career", "careerTotals.regularSeason")
        ),
        awards=_awards(document),
    )


def parse_team_name_by_id(document: Json, record: Player) -> Player:
    for item in mappings(extract_list(document, "data")):
        if extract_int(item, "id", "teamId") == record.team_id:
            return Player(team_name=extract_str(item, "fullName", "name"))
    return Player()


_GAME_LOG_SUMS = (
    ("goals", "goals"),
    ("assists", "assists"),
    ("points", "points"),
    ("plus_minus", "plusMinus"),
    ("penalty_minutes", "pim"),
    ("power_play_goals", "powerPlayGoals"),
    ("game_winning_goals", "gameWinningGoals"),
    ("shots", "shots"),
)


def parse_game_log(document: Json, record: Player) -> Player:
    games = mappings(extract_list(document, "gameLog"))
    if not games:
        return Player()

    totals: dict[str, int | None] = {}
    for field_name, key in _GAME_LOG_SUMS:
        values = [v for v in (extract_int(g, key) for g in games) if v is not None]
        totals[field_name] = sum(values) if values else None
    return Player(season_stats=PlayerStats(games_played=len(games), **totals))


def seed_player(query: PlayerQuery) -> Player:
    return Player(player_id=query.player_id)


PLAYER_SOURCES: tuple[SourceDescriptor[Player], ...] = (
    SourceDescriptor("player-landing", "{web}/player/{player_id}/landing", parse_player_landing),
)

PLAYER_PROFILE: EntityProfile[Player] = EntityProfile(
    kind=EntityKind.PLAYER,
    seed=seed_player,
    sources=PLAYER_SOURCES,
    complete_when=("first_name", "last_name", "team_name"),
    identity=("last_name", "first_name"),
    enrichments=(
        Enrichment(
            "team-directory",
            "{stats}/team",
            parse_team_name_by_id,
            fills=("team_name",),
            requires=("team_id",),
        ),
        Enrichment(
            "player-game-log",
            "{web}/player/{player_id}/game-log/now",
            parse_game_log,
            fills=("season_stats",),
        ),
    ),
)
