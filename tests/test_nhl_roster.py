from __future__ import annotations

import httpx
import pytest

from conftest import WEB
from nhl_stats.providers.base.errors import NotFoundError
from nhl_stats.reconcile.queries import roster_query
from nhl_stats.reconcile.resolver import AttemptOutcome
from nhl_stats.render.text import render_resolution


def _player(pid: int, first: str, last: str, position: str, number: int | None = None) -> dict[str, object]:
    item: dict[str, object] = {
        "id": pid,
        "firstName": {"default": first},
        "lastName": {"default": last},
        "positionCode": position,
        "heightInInches": 73,
        "weightInPounds": 208,
    }
    if number is not None:
        item["sweaterNumber"] = number
    return item


ROSTER = {
    "forwards": [_player(8479318, "Auston", "Matthews", "C", 34)],
    "defensemen": [_player(8476853, "Morgan", "Rielly", "D", 44)],
    "goalies": [_player(8479361, "Joseph", "Woll", "G", 60)],
}


def test_season_roster_from_roster_listing(nhl_resolver) -> None:
    resolver, seen = nhl_resolver({f"{WEB}/roster/TOR/20232024": ROSTER})

    resolution = resolver.resolve(roster_query("tor", "20232024"))
    roster = resolution.record

    assert resolution.complete
    assert roster.team_code == "TOR"
    assert roster.season == "2023-2024"
    assert roster.size == 3
    assert roster.forwards[0].full_name == "Auston Matthews"
    assert seen == [f"{WEB}/roster/TOR/20232024"]

    lines = render_resolution(resolution)
    assert lines[0] == "# TOR Roster - 2023-2024 Season"
    assert "Auston Matthews #34 (C) - 6'1\" (185 cm), 208 lbs (94 kg)" in lines
    assert lines[-1] == "Total players: 3"


def test_current_roster_falls_back_to_club_stats(nhl_resolver) -> None:
    resolver, seen = nhl_resolver(
        {
            f"{WEB}/roster/TOR/current": httpx.ReadTimeout("timed out"),
            f"{WEB}/club-stats/TOR/now": {
                "season": "20242025",
                "skaters": [
                    {"playerId": 8479318, "firstName": {"default": "Auston"}, "lastName": {"default": "Matthews"}, "positionCode": "C"},
                    {"playerId": 8476853, "firstName": {"default": "Morgan"}, "lastName": {"default": "Rielly"}, "positionCode": "D"},
                    {"playerId": 1, "lastName": {"default": "Unknown"}},
                ],
                "goalies": [{"playerId": 8479361, "firstName": {"default": "Joseph"}, "lastName": {"default": "Woll"}}],
            },
        }
    )

    resolution = resolver.resolve(roster_query("TOR"))
    roster = resolution.record

    assert resolution.attempts[0].outcome is AttemptOutcome.FAILED
    assert [p.last_name for p in roster.forwards] == ["Matthews"]
    assert [p.last_name for p in roster.defensemen] == ["Rielly"]
    assert [p.player_id for p in roster.goalies] == [8479361]
    assert roster.season == "2024-2025"
    assert seen[-1] == f"{WEB}/club-stats/TOR/now"


def test_partial_listing_is_completed_from_club_stats(nhl_resolver) -> None:
    resolver, _ = nhl_resolver(
        {
            f"{WEB}/roster/TOR/current": {"forwards": ROSTER["forwards"], "defensemen": [], "goalies": []},
            f"{WEB}/club-stats/TOR/now": {
                "skaters": [{"playerId": 9, "lastName": {"default": "Other"}, "positionCode": "L"}],
                "goalies": [{"playerId": 8479361, "lastName": {"default": "Woll"}}],
            },
        }
    )

    roster = resolver.resolve(roster_query("TOR")).record

    # Forwards came from the listing first and are kept.
    assert [p.last_name for p in roster.forwards] == ["Matthews"]
    assert roster.defensemen == ()
    assert [p.last_name for p in roster.goalies] == ["Woll"]


def test_unknown_roster_is_not_found(nhl_resolver) -> None:
    resolver, _ = nhl_resolver({})

    with pytest.raises(NotFoundError):
        resolver.resolve(roster_query("ZZZ", "20232024"))
