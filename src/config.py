"""Load planner configuration from config.toml with hardcoded fallbacks."""

import tomllib
from datetime import date
from pathlib import Path

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.toml"

_FALLBACK_ROSTER: dict[str, int] = {
    "C": 2,
    "LW": 2,
    "RW": 2,
    "D": 4,
    "U": 2,
    "G": 2,
    "B": 4,
    "IR": 1,
    "IR+": 1,
}

_FALLBACK_SEASON = (date(2024, 10, 7), date(2025, 4, 17))
_FALLBACK_TEAM = "Five Hole Heroes"
_FALLBACK_NHL_API = "https://api-web.nhle.com/v1"


def _load_config() -> dict:
    """Load and return the parsed config.toml, or empty dict if missing."""
    try:
        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def get_roster_config() -> dict[str, int]:
    """Return slot counts per slot type (config.toml [roster] overrides individual counts)."""
    cfg = _load_config()
    result = dict(_FALLBACK_ROSTER)
    for slot_type, count in cfg.get("roster", {}).items():
        result[slot_type] = int(count)
    return result


def get_season_bounds() -> tuple[date, date]:
    """Return (season_start_monday, season_end)."""
    season = _load_config().get("season", {})
    start = season.get("start")
    end = season.get("end")
    return (
        date.fromisoformat(str(start)) if start else _FALLBACK_SEASON[0],
        date.fromisoformat(str(end)) if end else _FALLBACK_SEASON[1],
    )


def get_my_team() -> str:
    """Return the user's fantasy team name."""
    cfg = _load_config()
    return cfg.get("league", {}).get("team", _FALLBACK_TEAM)


def get_nhl_api_base() -> str:
    """Return the NHL web API base URL."""
    cfg = _load_config()
    return cfg.get("nhl", {}).get("api_base", _FALLBACK_NHL_API)
