from __future__ import annotations

from typing import Any

from nhl_stats.core.text import format_season
from nhl_stats.providers.base.types import Json
from nhl_stats.reconcile.descriptors import EntityProfile, SourceDescriptor
from nhl_stats.reconcile.extract import extract_int, extract_list, extract_str, mappings
from nhl_stats.reconcile.queries import EntityKind, RosterQuery
from nhl_stats.reconcile.records import Roster, RosterPlayer

_DEFENCE = {"D"}
_GOALIE = {"G"}


def roster_player(item: Any) -> RosterPlayer:
    return RosterPlayer(
        player_id=extract_int(item, "id", "playerId"),
        first_name=extract_str(item, "firstName"),
        last_name=extract_str(item, "lastName"),
        sweater_number=extract_int(item, "sweaterNumber"),
        position=extract_str(item, "positionCode", "position"),
        shoots_catches=extract_str(item, "shootsCatches"),
        height_in=extract_int(item, "heightInInches"),
        weight_lb=extract_int(item, "weightInPounds"),
        birth_date=extract_str(item, "birthDate"),
    )


def _players(items: Any) -> tuple[RosterPlayer, ...]:
    return tuple(roster_player(item) for item in mappings(items))


def parse_roster_listing(document: Json, query: RosterQuery) -> Roster:
    return Roster(
        forwards=_players(extract_list(document, "forwards")),
        defensemen=_players(extract_list(document, "defensemen")),
        goalies=_players(extract_list(document, "goalies")),
    )


def parse_club_stats_roster(document: Json, query: RosterQuery) -> Roster:
    """
    Club stats list everyone who dressed, skaters in one list. Positions
    split them back into forwards and defensemen; players without a
    position code are left out.
    """
    skaters = _players(extract_list(document, "skaters"))
    return Roster(
        season=format_season(extract_str(document, "season") or extract_int(document, "season")),
        forwards=tuple(p for p in skaters if p.position and p.position not in _DEFENCE | _GOALIE),
        defensemen=tuple(p for p in skaters if p.position in _DEFENCE),
        goalies=_players(extract_list(document, "goalies")),
    )


def seed_roster(query: RosterQuery) -> Roster:
    return Roster(team_code=query.team_code, season=format_season(query.season))


ROSTER_SOURCES: tuple[SourceDescriptor[Roster], ...] = (
    SourceDescriptor("team-roster", "{web}/roster/{team_code}/{roster_season}", parse_roster_listing),
    SourceDescriptor("club-stats", "{web}/club-stats/{team_code}/{stats_season}", parse_club_stats_roster),
)

ROSTER_PROFILE: EntityProfile[Roster] = EntityProfile(
    kind=EntityKind.ROSTER,
    seed=seed_roster,
    sources=ROSTER_SOURCES,
    complete_when=("forwards", "defensemen", "goalies"),
    identity=("forwards", "defensemen", "goalies"),
)
