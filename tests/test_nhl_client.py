"""Tests for the NHL API client (HTTP mocked)."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from src import nhl_client

WEEK_START = date(2025, 1, 13)

SCHEDULE_PAYLOAD = {
    "gameWeek": [
        {
            "date": "2025-01-13",
            "games": [
                {"id": 1, "homeTeam": {"abbrev": "TOR"}, "awayTeam": {"abbrev": "BOS"}},
                {"id": 2, "homeTeam": {"abbrev": "EDM"}, "awayTeam": {"abbrev": "CGY"}},
            ],
        },
        {
            "date": "2025-01-14",
            "games": [{"id": 3, "homeTeam": {"abbrev": "BOS"}, "awayTeam": {"abbrev": "MTL"}}],
        },
    ]
}


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestGetWeekSchedule:
    def test_builds_schedule(self):
        with patch("src.nhl_client.requests.get", return_value=_response(SCHEDULE_PAYLOAD)) as mock_get:
            schedule = nhl_client.get_week_schedule(WEEK_START)
        url = mock_get.call_args[0][0]
        assert url.endswith("/schedule/2025-01-13")
        assert mock_get.call_args.kwargs["timeout"] == 30
        assert len(schedule.games) == 3
        assert schedule.back_to_back_dates("BOS") == {date(2025, 1, 14)}

    def test_accepts_iso_string(self):
        with patch("src.nhl_client.requests.get", return_value=_response(SCHEDULE_PAYLOAD)):
            schedule = nhl_client.get_week_schedule("2025-01-13")
        assert schedule.start == WEEK_START

    def test_http_error_propagates(self):
        resp = _response({})
        resp.raise_for_status.side_effect = requests.HTTPError("503")
        with patch("src.nhl_client.requests.get", return_value=resp):
            with pytest.raises(requests.HTTPError):
                nhl_client.get_week_schedule(WEEK_START)


class TestGetTeamWeekGames:
    def test_parses_club_games(self):
        payload = {
            "games": [
                {"id": 10, "gameDate": "2025-01-15", "homeTeam": {"abbrev": "TOR"}, "awayTeam": {"abbrev": "NYR"}},
                {"id": 11, "gameDate": "2025-01-18", "homeTeam": {"abbrev": "OTT"}, "awayTeam": {"abbrev": "TOR"}},
            ]
        }
        with patch("src.nhl_client.requests.get", return_value=_response(payload)) as mock_get:
            games = nhl_client.get_team_week_games("TOR", WEEK_START)
        assert mock_get.call_args[0][0].endswith("/club-schedule-week/TOR/2025-01-13")
        assert [g.date for g in games] == [date(2025, 1, 15), date(2025, 1, 18)]
        assert games[1].opponent_of("TOR") == "OTT"


def test_team_codes():
    assert len(nhl_client.NHL_TEAMS) == 32
    assert nhl_client.NHL_TEAMS["TOR"] == "Toronto Maple Leafs"
