"""Week calendar helpers and the read-only week schedule index.

A WeekSchedule is built once per week from the schedule provider and answers
the two questions the planner needs: does a team play on a date, and which
dates are the second night of a back-to-back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from src.config import get_season_bounds
from src.models import Game

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DAYS_PER_WEEK = 7


def as_date(value: date | str) -> date:
    """Accept a date or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


# ── Week calendar ───────────────────────────────────────────────────────

def week_dates(start: date | str) -> list[date]:
    """Return the 7 consecutive dates starting at ``start``."""
    first = as_date(start)
    return [first + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def week_start_for(d: date | str) -> date:
    """Monday of the week containing ``d``."""
    d = as_date(d)
    return d - timedelta(days=d.weekday())


def weekday_index(d: date | str) -> int:
    """0 = Mon ... 6 = Sun."""
    return as_date(d).weekday()


def weekday_name(d: date | str) -> str:
    return WEEKDAYS[weekday_index(d)]


def format_week_range(start: date, end: date) -> str:
    """Format a week span, e.g. "Jan 13 - 19" or "Jan 27 - Feb 2"."""
    start_month = start.strftime("%b")
    end_month = end.strftime("%b")
    if start_month == end_month:
        return f"{start_month} {start.day} - {end.day}"
    return f"{start_month} {start.day} - {end_month} {end.day}"


@dataclass(frozen=True)
class Week:
    """A fantasy week (Monday through Sunday)."""
    number: int
    start: date
    end: date
    label: str


def make_week(start: date | str, number: int) -> Week:
    start = as_date(start)
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return Week(
        number=number,
        start=start,
        end=end,
        label=f"Week {number}: {format_week_range(start, end)}",
    )


def week_number_for(d: date | str) -> int:
    """Season week number for a date (1-based, floored at 1)."""
    season_start, _ = get_season_bounds()
    diff_days = (week_start_for(d) - season_start).days
    return max(1, diff_days // DAYS_PER_WEEK + 1)


def week_for_date(d: date | str) -> Week:
    return make_week(week_start_for(d), week_number_for(d))


def current_week(today: date | None = None) -> Week:
    return week_for_date(today or date.today())


def season_weeks() -> list[Week]:
    season_start, season_end = get_season_bounds()
    weeks = []
    start = season_start
    number = 1
    while start <= season_end:
        weeks.append(make_week(start, number))
        start += timedelta(days=DAYS_PER_WEEK)
        number += 1
    return weeks


def next_week(week: Week) -> Week:
    return make_week(week.start + timedelta(days=DAYS_PER_WEEK), week.number + 1)


def previous_week(week: Week) -> Week:
    return make_week(week.start - timedelta(days=DAYS_PER_WEEK), max(1, week.number - 1))


def is_within_season(d: date | str) -> bool:
    season_start, season_end = get_season_bounds()
    return season_start <= as_date(d) <= season_end


# ── Schedule index ──────────────────────────────────────────────────────

@dataclass
class TeamWeekSchedule:
    """One team's games for the week, keyed by date."""
    team: str
    games_by_date: dict[date, Game] = field(default_factory=dict)

    @property
    def total_games(self) -> int:
        return len(self.games_by_date)


@dataclass
class WeekSchedule:
    """All games for a 7-day span, indexed by team and date.

    Queries for unknown teams or dates outside the span answer "no game".
    """
    start: date
    end: date
    games: list[Game] = field(default_factory=list)
    by_team: dict[str, TeamWeekSchedule] = field(default_factory=dict)
    _b2b_cache: dict[str, frozenset[date]] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )

    @property
    def dates(self) -> list[date]:
        return week_dates(self.start)

    @property
    def teams(self) -> list[str]:
        return sorted(self.by_team)

    def game_on(self, team: str, d: date | str) -> Game | None:
        team_schedule = self.by_team.get(team)
        if team_schedule is None:
            return None
        return team_schedule.games_by_date.get(as_date(d))

    def has_game_on(self, team: str, d: date | str) -> bool:
        return self.game_on(team, d) is not None

    def opponent_on(self, team: str, d: date | str) -> tuple[str, bool] | None:
        """Return (opponent, is_home) or None when the team is idle."""
        game = self.game_on(team, d)
        if game is None:
            return None
        return game.opponent_of(team), game.is_home(team)

    def team_game_dates(self, team: str) -> list[date]:
        team_schedule = self.by_team.get(team)
        if team_schedule is None:
            return []
        return sorted(team_schedule.games_by_date)

    def games_for_team(self, team: str) -> int:
        team_schedule = self.by_team.get(team)
        return team_schedule.total_games if team_schedule else 0

    def back_to_back_dates(self, team: str) -> frozenset[date]:
        """Second date of every pair of games on consecutive days."""
        if team not in self._b2b_cache:
            game_dates = self.team_game_dates(team)
            self._b2b_cache[team] = frozenset(
                nxt for cur, nxt in zip(game_dates, game_dates[1:])
                if (nxt - cur).days == 1
            )
        return self._b2b_cache[team]

    def has_back_to_back(self, team: str) -> bool:
        return bool(self.back_to_back_dates(team))

    def is_back_to_back(self, team: str, d: date | str) -> bool:
        return as_date(d) in self.back_to_back_dates(team)

    def back_to_back_sets(self, team: str) -> list[tuple[date, date]]:
        """(first, second) date pairs for every back-to-back in the week."""
        return [
            (second - timedelta(days=1), second)
            for second in sorted(self.back_to_back_dates(team))
        ]


def build_week_schedule(start: date | str, games: list[Game]) -> WeekSchedule:
    """Index games by team and date; games outside the 7-day span are dropped."""
    start = as_date(start)
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    schedule = WeekSchedule(start=start, end=end)

    for game in games:
        if not start <= game.date <= end:
            continue
        schedule.games.append(game)
        for team in (game.home_team, game.away_team):
            team_schedule = schedule.by_team.setdefault(team, TeamWeekSchedule(team=team))
            team_schedule.games_by_date[game.date] = game

    return schedule


# ── Provider payloads and cache form ────────────────────────────────────

def parse_nhl_game(raw: dict, game_date: date | str) -> Game:
    """Convert one game from the NHL web API into a Game."""
    return Game(
        id=str(raw.get("id", "")),
        date=as_date(game_date),
        home_team=raw.get("homeTeam", {}).get("abbrev", ""),
        away_team=raw.get("awayTeam", {}).get("abbrev", ""),
        start_time=raw.get("startTimeUTC"),
        venue=raw.get("venue", {}).get("default"),
    )


def parse_nhl_week(payload: dict, start: date | str) -> WeekSchedule:
    """Build a WeekSchedule from an NHL ``/schedule/{date}`` response."""
    games = []
    for day in payload.get("gameWeek", []):
        day_date = day.get("date")
        if not day_date:
            continue
        for raw in day.get("games", []):
            games.append(parse_nhl_game(raw, day_date))
    return build_week_schedule(start, games)


def schedule_to_dict(schedule: WeekSchedule) -> dict:
    """JSON-friendly form used for the on-disk cache."""
    return {
        "start": str(schedule.start),
        "end": str(schedule.end),
        "games": [
            {
                "id": g.id,
                "date": str(g.date),
                "home": g.home_team,
                "away": g.away_team,
                "start_time": g.start_time,
                "venue": g.venue,
            }
            for g in schedule.games
        ],
    }


def schedule_from_dict(data: dict) -> WeekSchedule:
    games = [
        Game(
            id=str(g.get("id", "")),
            date=as_date(g["date"]),
            home_team=g["home"],
            away_team=g["away"],
            start_time=g.get("start_time"),
            venue=g.get("venue"),
        )
        for g in data.get("games", [])
    ]
    return build_week_schedule(data["start"], games)
