from __future__ import annotations

from nhl_stats.reconcile.queries import leaders_query, player_query, roster_query, standings_query
from nhl_stats.reconcile.records import (
    LeaderBoard,
    LeaderRow,
    Player,
    Roster,
    RosterPlayer,
    Schedule,
    ScheduledGame,
    Standings,
    StandingsRow,
    Team,
    TeamStats,
)
from nhl_stats.reconcile.resolver import AttemptOutcome, Resolution, SourceAttempt
from nhl_stats.render.text import render_not_found, render_record, render_resolution


def test_team_renders_unknown_numbers_as_zero_and_missing_text_as_default() -> None:
    lines = render_record(Team(team_code="TOR", name="Toronto Maple Leafs", record=TeamStats(points=1)))

    assert lines[0] == "Team: Toronto Maple Leafs"
    assert "Division: Not available" in lines
    assert "  Record: 0-0-0" in lines
    assert "  Points: 1" in lines


def test_player_renders_structured_values_as_defaults() -> None:
    player = Player(player_id=8478402, first_name="Connor", last_name="McDavid", height_in=73, weight_lb=193)

    lines = render_record(player)

    assert lines[0] == "Name: Connor McDavid"
    assert "Team: Unknown Team" in lines
    assert "Height: 6'1\" (185 cm)" in lines
    assert "Weight: 193 lbs (88 kg)" in lines
    assert not any("[object" in line or "{" in line for line in lines)


def test_standings_group_by_division_and_sort_by_points() -> None:
    standings = Standings(
        rows=(
            StandingsRow(team_name="Boston Bruins", division="Atlantic", wins=40, losses=20, ot_losses=8, points=88),
            StandingsRow(team_name="Florida Panthers", division="Atlantic", points=95),
            StandingsRow(team_name="New York Rangers", points=100),
        )
    )

    lines = render_record(standings)

    assert lines[0] == "## Atlantic Division"
    assert lines[3].startswith("Florida Panthers | 0 |")
    assert lines[4] == "Boston Bruins | 68 | 40 | 20 | 8 | 88 | 0 | 0"
    assert "## League" in lines


def test_leaders_header_and_rows() -> None:
    board = LeaderBoard(
        category="savePctg",
        group="goalie",
        season="2023-2024",
        rows=(LeaderRow(rank=1, name="Thatcher Demko", team_abbrev="VAN", value=0.9172),),
    )

    lines = render_record(board)

    assert lines[0] == "NHL Goalie Leaders - Save Percentage (2023-2024)"
    assert set(lines[1]) == {"="}
    assert lines[2] == f" 1. {'Thatcher Demko':<25} | VAN  | 0.917"


def test_schedule_marks_final_games() -> None:
    schedule = Schedule(
        games=(
            ScheduledGame(
                game_date="2024-03-15",
                start_time_utc="2024-03-15T23:00:00Z",
                home_abbrev="TOR",
                away_abbrev="BOS",
                home_score=4,
                away_score=2,
                game_state="OFF",
            ),
        )
    )

    lines = render_record(schedule)

    assert lines[0] == "2024-03-15 - 1 games:"
    assert lines[1] == "BOS @ TOR - 23:00 UTC (2 - 4) FINAL"


def test_partial_resolution_notes_failed_sources() -> None:
    resolution = Resolution(
        query=standings_query(),
        record=Standings(rows=(StandingsRow(team_name="New York Rangers"),)),
        attempts=(
            SourceAttempt("standings", "https://x/standings/now", AttemptOutcome.FAILED, error="HTTP 502"),
        ),
        complete=False,
    )

    lines = render_resolution(resolution)

    assert lines[-1] == "Note: partial data; unavailable sources: standings"


def test_not_found_is_a_single_descriptive_line() -> None:
    assert render_not_found(player_query(8478402)) == [
        "Could not retrieve data for player ID: 8478402. "
        "The source may be invalid or the upstream NHL API may be unavailable."
    ]
    assert "skater leaders in category: goals" in render_not_found(leaders_query("goals"))[0]


def test_roster_groups_players_by_position() -> None:
    roster = Roster(
        team_code="TOR",
        forwards=(RosterPlayer(first_name="Auston", last_name="Matthews", sweater_number=34, position="C"),),
        goalies=(RosterPlayer(player_id=8479361, position="G"),),
    )

    lines = render_record(roster)

    assert lines[0] == "# TOR Roster - Current Season"
    assert "## Defensemen" not in lines
    assert "Auston Matthews #34 (C) - N/A, N/A" in lines
    assert "Player #8479361 (G) - N/A, N/A" in lines
    assert lines[-1] == "Total players: 2"


def test_not_found_names_the_roster_season() -> None:
    assert "roster: TOR (2023-2024)" in render_not_found(roster_query("TOR", "20232024"))[0]
