from __future__ import annotations

import pytest

from conftest import STATS, WEB
from nhl_stats.providers.base.errors import NotFoundError
from nhl_stats.reconcile.queries import player_query
from nhl_stats.reconcile.records import DraftDetails, PlayerStats

LANDING = {
    "playerId": 8478402,
    "isActive": True,
    "currentTeamId": 22,
    "currentTeamAbbrev": "EDM",
    "firstName": {"default": "Connor"},
    "lastName": {"default": "McDavid"},
    "sweaterNumber": 97,
    "position": "C",
    "heightInInches": 73,
    "weightInPounds": 194,
    "birthDate": "1997-01-13",
    "birthCity": {"default": "Richmond Hill"},
    "birthStateProvince": {"default": "Ontario"},
    "birthCountry": "CAN",
    "shootsCatches": "L",
    "draftDetails": {"year": 2015, "teamAbbrev": "EDM", "round": 1, "pickInRound": 1, "overallPick": 1},
    "featuredStats": {
        "season": 20232024,
        "regularSeason": {
            "subSeason": {"gamesPlayed": 76, "goals": 32, "assists": 100, "points": 132, "plusMinus": 35},
            "career": {"gamesPlayed": 645, "goals": 335, "assists": 647, "points": 982},
        },
    },
    "awards": [{"trophy": {"default": "Hart Memorial Trophy"}}, {"trophy": {"fr": "Trophée"}}],
}

TEAM_DIRECTORY = {
    "data": [
        {"id": 10, "fullName": "Toronto Maple Leafs", "triCode": "TOR"},
        {"id": 22, "fullName": "Edmonton Oilers", "triCode": "EDM"},
    ]
}


def test_player_team_name_is_enriched_from_team_id(nhl_resolver) -> None:
    resolver, seen = nhl_resolver(
        {
            f"{WEB}/player/8478402/landing": LANDING,
            f"{STATS}/team": TEAM_DIRECTORY,
        }
    )

    resolution = resolver.resolve(player_query(8478402))
    player = resolution.record

    assert resolution.complete
    assert player.player_id == 8478402
    assert player.full_name == "Connor McDavid"
    assert player.team_id == 22
    assert player.team_name == "Edmonton Oilers"
    assert player.draft == DraftDetails(year=2015, team_abbrev="EDM", round=1, pick_in_round=1, overall_pick=1)
    assert player.season_stats is not None and player.season_stats.points == 132
    assert player.career_stats is not None and player.career_stats.goals == 335
    assert player.awards == ("Hart Memorial Trophy",)
    # Featured stats were present, so the game log is never fetched.
    assert seen == [f"{WEB}/player/8478402/landing", f"{STATS}/team"]


def test_player_season_stats_fall_back_to_game_log(nhl_resolver) -> None:
    landing = {k: v for k, v in LANDING.items() if k != "featuredStats"}
    landing["fullTeamName"] = {"default": "Edmonton Oilers"}
    resolver, seen = nhl_resolver(
        {
            f"{WEB}/player/8478402/landing": landing,
            f"{WEB}/player/8478402/game-log/now": {
                "gameLog": [
                    {"goals": 1, "assists": 2, "points": 3, "shots": 4},
                    {"goals": 0, "assists": 1, "points": 1, "shots": 2},
                ]
            },
        }
    )

    player = resolver.resolve(player_query("8478402")).record

    assert player.team_name == "Edmonton Oilers"
    assert player.season_stats == PlayerStats(games_played=2, goals=1, assists=3, points=4, shots=6)
    assert player.career_stats is None
    assert f"{STATS}/team" not in seen


def test_player_not_found_on_404(nhl_resolver) -> None:
    resolver, _ = nhl_resolver({})

    with pytest.raises(NotFoundError):
        resolver.resolve(player_query(1))
