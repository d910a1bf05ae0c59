"""Client for the public NHL web API (api-web.nhle.com) schedule endpoints."""

from datetime import date

import requests

from src.config import get_nhl_api_base
from src.models import Game
from src.schedule import WeekSchedule, as_date, parse_nhl_game, parse_nhl_week

NHL_TEAMS = {
    "ANA": "Anaheim Ducks",
    "BOS": "Boston Bruins",
    "BUF": "Buffalo Sabres",
    "CGY": "Calgary Flames",
    "CAR": "Carolina Hurricanes",
    "CHI": "Chicago Blackhawks",
    "COL": "Colorado Avalanche",
    "CBJ": "Columbus Blue Jackets",
    "DAL": "Dallas Stars",
    "DET": "Detroit Red Wings",
    "EDM": "Edmonton Oilers",
    "FLA": "Florida Panthers",
    "LAK": "Los Angeles Kings",
    "MIN": "Minnesota Wild",
    "MTL": "Montreal Canadiens",
    "NSH": "Nashville Predators",
    "NJD": "New Jersey Devils",
    "NYI": "New York Islanders",
    "NYR": "New York Rangers",
    "OTT": "Ottawa Senators",
    "PHI": "Philadelphia Flyers",
    "PIT": "Pittsburgh Penguins",
    "SJS": "San Jose Sharks",
    "SEA": "Seattle Kraken",
    "STL": "St. Louis Blues",
    "TBL": "Tampa Bay Lightning",
    "TOR": "Toronto Maple Leafs",
    "UTA": "Utah Hockey Club",
    "VAN": "Vancouver Canucks",
    "VGK": "Vegas Golden Knights",
    "WPG": "Winnipeg Jets",
    "WSH": "Washington Capitals",
}


def _get(path: str, params: dict | None = None) -> dict:
    """Make a GET request to the NHL API."""
    resp = requests.get(f"{get_nhl_api_base()}{path}", params=params, timeout=30)
    resp.raise_for_status()
    return resp.json()


def get_week_schedule(start: date | str) -> WeekSchedule:
    """Fetch every game in the 7 days starting at ``start``."""
    start = as_date(start)
    payload = _get(f"/schedule/{start.isoformat()}")
    return parse_nhl_week(payload, start)


def get_team_week_games(team: str, start: date | str) -> list[Game]:
    """Fetch one team's games for the week starting at ``start``."""
    start = as_date(start)
    payload = _get(f"/club-schedule-week/{team}/{start.isoformat()}")
    return [
        parse_nhl_game(raw, raw["gameDate"])
        for raw in payload.get("games", [])
        if raw.get("gameDate")
    ]
