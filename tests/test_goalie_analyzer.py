"""Tests for goalie week analysis."""

from datetime import date

import pytest

from src.goalie_analyzer import (
    NotAGoalieError,
    analyze_goalie_week,
    back_to_back_sets,
    estimated_goalie_starts,
    team_has_back_to_back,
)
from src.models import Game, Player
from src.schedule import build_week_schedule

WEEK_START = date(2025, 1, 13)


def _day(i):
    return date(2025, 1, 13 + i)


def _schedule(team_days: dict[str, list[int]]):
    games = []
    for team, days in team_days.items():
        for i in days:
            games.append(Game(id=f"{team}{i}", date=_day(i), home_team=team, away_team="OPP"))
    return build_week_schedule(WEEK_START, games)


def _goalie(team="TOR", status="Healthy", positions=("G",), custom=None):
    return Player(
        id="g1", name="Test Goalie", team=team, positions=positions,
        injury_status=status, custom_positions=custom,
    )


class TestAnalyzeGoalieWeek:
    def test_adjacent_games_flag_second_night(self):
        """Games on days 2 and 3: X then ||."""
        schedule = _schedule({"TOR": [1, 2]})
        analysis = analyze_goalie_week(_goalie(), schedule, WEEK_START)
        assert analysis.indicators == ["-", "X", "||", "-", "-", "-", "-"]
        assert analysis.back_to_back_count == 1
        assert analysis.total_games == 2
        assert analysis.likely_starts == 1

    def test_first_night_marked(self):
        schedule = _schedule({"TOR": [1, 2]})
        analysis = analyze_goalie_week(_goalie(), schedule, WEEK_START)
        assert analysis.days[1].is_first_of_back_to_back
        assert not analysis.days[2].is_first_of_back_to_back
        assert analysis.days[2].is_back_to_back

    def test_three_in_a_row(self):
        schedule = _schedule({"TOR": [0, 1, 2]})
        analysis = analyze_goalie_week(_goalie(), schedule, WEEK_START)
        assert analysis.indicators[:3] == ["X", "||", "||"]
        assert analysis.back_to_back_count == 2

    def test_day_to_day_goalie(self):
        schedule = _schedule({"TOR": [0, 3]})
        analysis = analyze_goalie_week(_goalie(status="DTD"), schedule, WEEK_START)
        assert analysis.indicators == ["?", "-", "-", "?", "-", "-", "-"]
        assert analysis.likely_starts == 0
        assert analysis.total_games == 2

    def test_back_to_back_wins_over_injury(self):
        schedule = _schedule({"TOR": [4, 5]})
        analysis = analyze_goalie_week(_goalie(status="DTD"), schedule, WEEK_START)
        assert analysis.indicators[4] == "?"
        assert analysis.indicators[5] == "||"

    def test_opponent_and_home(self):
        schedule = _schedule({"TOR": [0]})
        day = analyze_goalie_week(_goalie(), schedule, WEEK_START).days[0]
        assert day.opponent == "OPP"
        assert day.is_home is True

    def test_team_missing_from_schedule(self):
        schedule = _schedule({"BOS": [0, 1]})
        analysis = analyze_goalie_week(_goalie(team="TOR"), schedule, WEEK_START)
        assert analysis.indicators == ["-"] * 7
        assert analysis.total_games == 0

    def test_non_goalie_raises(self):
        schedule = _schedule({"TOR": [0]})
        skater = _goalie(positions=("C",))
        with pytest.raises(NotAGoalieError):
            analyze_goalie_week(skater, schedule, WEEK_START)

    def test_override_removing_goalie_raises(self):
        """Effective positions decide, not the native list."""
        schedule = _schedule({"TOR": [0]})
        with pytest.raises(ValueError):
            analyze_goalie_week(_goalie(custom=("D",)), schedule, WEEK_START)

    def test_override_adding_goalie_allowed(self):
        schedule = _schedule({"TOR": [0]})
        analysis = analyze_goalie_week(_goalie(positions=("D",), custom=("G",)), schedule, WEEK_START)
        assert analysis.indicators[0] == "X"


class TestGoalieHelpers:
    def test_estimated_starts(self):
        schedule = _schedule({"TOR": [0, 1, 3, 5]})
        assert estimated_goalie_starts(_goalie(), schedule, WEEK_START) == 3

    def test_team_has_back_to_back(self):
        schedule = _schedule({"TOR": [0, 1], "BOS": [0, 2]})
        assert team_has_back_to_back(schedule, "TOR")
        assert not team_has_back_to_back(schedule, "BOS")

    def test_back_to_back_sets(self):
        schedule = _schedule({"TOR": [0, 1, 5, 6]})
        assert back_to_back_sets(schedule, "TOR", WEEK_START) == [
            (_day(0), _day(1)),
            (_day(5), _day(6)),
        ]
