"""Goalie week analysis: which game days are likely starts.

The second night of a back-to-back is flagged as uncertain, since teams
usually start their backup goalie in one of the two games. The first night
of the pair is treated as a normal likely start.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from src.models import BACK_TO_BACK, NO_GAME, START, UNCERTAIN, Player
from src.schedule import WeekSchedule, week_dates


class NotAGoalieError(ValueError):
    """Raised when goalie analysis is requested for a non-goalie."""


@dataclass
class GoalieDay:
    """One day of a goalie's week."""
    date: date
    has_game: bool
    is_back_to_back: bool
    is_first_of_back_to_back: bool
    indicator: str
    opponent: Optional[str] = None
    is_home: Optional[bool] = None


@dataclass
class GoalieWeekAnalysis:
    """Per-day indicators and counts for one goalie's week."""
    player: Player
    days: list[GoalieDay] = field(default_factory=list)
    total_games: int = 0
    back_to_back_count: int = 0
    likely_starts: int = 0

    @property
    def indicators(self) -> list[str]:
        return [d.indicator for d in self.days]


def is_goalie(player: Player) -> bool:
    return player.is_goalie


def analyze_goalie_week(
    player: Player,
    schedule: WeekSchedule,
    week_start: date | str,
) -> GoalieWeekAnalysis:
    """Classify each day of a goalie's week.

    No game -> "-", second game of a back-to-back -> "||", day-to-day -> "?",
    otherwise "X" (a likely start). The back-to-back check wins over the
    injury check when both apply.
    """
    if not is_goalie(player):
        raise NotAGoalieError(f"{player.name} is not a goalie")

    dates = week_dates(week_start)
    b2b_dates = schedule.back_to_back_dates(player.team)
    analysis = GoalieWeekAnalysis(player=player)

    for i, d in enumerate(dates):
        game = schedule.game_on(player.team, d)
        has_game = game is not None
        is_b2b = has_game and d in b2b_dates
        is_first_of_b2b = (
            has_game
            and i < len(dates) - 1
            and dates[i + 1] in b2b_dates
        )

        opponent = None
        is_home = None
        if not has_game:
            indicator = NO_GAME
        else:
            analysis.total_games += 1
            opponent = game.opponent_of(player.team)
            is_home = game.is_home(player.team)
            if is_b2b:
                indicator = BACK_TO_BACK
                analysis.back_to_back_count += 1
            elif player.is_day_to_day:
                indicator = UNCERTAIN
            else:
                indicator = START
                analysis.likely_starts += 1

        analysis.days.append(GoalieDay(
            date=d,
            has_game=has_game,
            is_back_to_back=is_b2b,
            is_first_of_back_to_back=is_first_of_b2b,
            indicator=indicator,
            opponent=opponent,
            is_home=is_home,
        ))

    return analysis


def estimated_goalie_starts(
    player: Player,
    schedule: WeekSchedule,
    week_start: date | str,
) -> int:
    """Likely starts for the week, excluding back-to-back uncertainty."""
    return analyze_goalie_week(player, schedule, week_start).likely_starts


def team_has_back_to_back(schedule: WeekSchedule, team: str) -> bool:
    return schedule.has_back_to_back(team)


def back_to_back_sets(
    schedule: WeekSchedule,
    team: str,
    week_start: date | str,
) -> list[tuple[date, date]]:
    """Pairs of consecutive game days inside the week."""
    dates = week_dates(week_start)
    return [
        (cur, nxt)
        for cur, nxt in zip(dates, dates[1:])
        if schedule.has_game_on(team, cur) and schedule.has_game_on(team, nxt)
    ]
