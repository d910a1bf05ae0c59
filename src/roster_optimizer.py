"""Roster optimizer: daily indicators for every slot plus week summary.

Combines the goalie analyzer (goalies in starting slots) and the bench
cascade (bench slots) into one grid of 7 indicators per slot. Missing
schedule data for a player's team degrades to "-" for that slot; this
module never raises on schedule gaps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from src.bench_cascade import WeekCascadeResult, calculate_week_cascade
from src.goalie_analyzer import analyze_goalie_week
from src.models import (
    BACK_TO_BACK,
    CONFLICT,
    NO_GAME,
    START,
    UNCERTAIN,
    Slot,
)
from src.schedule import DAYS_PER_WEEK, WeekSchedule, week_dates

ACTIVE_INDICATORS = (START, BACK_TO_BACK, UNCERTAIN)


@dataclass
class SlotSchedule:
    """A slot's 7 daily indicators."""
    slot: Slot
    indicators: list[str] = field(default_factory=list)
    total_games: int = 0
    active_games: int = 0


@dataclass
class RosterSummary:
    total_games: int = 0
    starting_games: int = 0
    bench_virtual_starts: int = 0
    bench_conflicts: int = 0
    goalie_starts: int = 0
    goalie_b2b_uncertain: int = 0
    uncertain_games: int = 0

    @property
    def efficiency(self) -> int:
        return calculate_efficiency(self)


@dataclass
class OptimizedRoster:
    dates: list[date]
    slots: list[SlotSchedule]
    cascade: WeekCascadeResult
    summary: RosterSummary

    def slot_schedule(self, slot_id: str) -> SlotSchedule | None:
        for s in self.slots:
            if s.slot.id == slot_id:
                return s
        return None


def calculate_efficiency(summary: RosterSummary) -> int:
    """Share of usable games that turn into starts, 0-100.

    round(100 * (starting + virtual) / (starting + virtual + conflicts)),
    halves rounded up; 100 when there is nothing to count.
    """
    actual = summary.starting_games + summary.bench_virtual_starts
    possible = actual + summary.bench_conflicts
    if possible == 0:
        return 100
    return (200 * actual + possible) // (2 * possible)


def _bench_indicators(
    slot: SlotSchedule,
    cascade: WeekCascadeResult,
    summary: RosterSummary,
) -> None:
    cascade_row = cascade.slot_indicators.get(slot.slot.id, [])
    for day_index, indicator in enumerate(slot.indicators):
        if indicator == NO_GAME:
            continue
        cascaded = cascade_row[day_index] if day_index < len(cascade_row) else NO_GAME
        slot.indicators[day_index] = cascaded
        if cascaded == START:
            slot.active_games += 1
            summary.bench_virtual_starts += 1
        elif cascaded == CONFLICT:
            summary.bench_conflicts += 1


def _goalie_indicators(
    slot: SlotSchedule,
    schedule: WeekSchedule,
    week_start: date,
    summary: RosterSummary,
) -> None:
    analysis = analyze_goalie_week(slot.slot.player, schedule, week_start)
    for day_index, indicator in enumerate(analysis.indicators):
        slot.indicators[day_index] = indicator
        if indicator == START:
            slot.active_games += 1
            summary.starting_games += 1
            summary.goalie_starts += 1
        elif indicator == BACK_TO_BACK:
            summary.goalie_b2b_uncertain += 1
        elif indicator == UNCERTAIN:
            slot.active_games += 1
            summary.uncertain_games += 1


def _skater_indicators(slot: SlotSchedule, summary: RosterSummary) -> None:
    player = slot.slot.player
    for day_index, indicator in enumerate(slot.indicators):
        if indicator == NO_GAME:
            continue
        slot.active_games += 1
        if player.is_day_to_day:
            slot.indicators[day_index] = UNCERTAIN
            summary.uncertain_games += 1
        else:
            slot.indicators[day_index] = START
            summary.starting_games += 1


def optimize_roster(
    roster: list[Slot],
    schedule: WeekSchedule,
    week_start: date | str,
) -> OptimizedRoster:
    """Compute every slot's week of indicators and the roster summary.

    ``roster`` should be the read-time view from the roster store (position
    overrides and bench priority already merged in).
    """
    dates = week_dates(week_start)
    cascade = calculate_week_cascade(roster, schedule, dates[0])
    summary = RosterSummary()
    slots = []

    for slot in roster:
        slot_schedule = SlotSchedule(slot=slot, indicators=[NO_GAME] * DAYS_PER_WEEK)
        slots.append(slot_schedule)
        player = slot.player
        if player is None:
            continue

        # Placeholder marks game days; each branch below rewrites them
        for day_index, d in enumerate(dates):
            if schedule.has_game_on(player.team, d):
                slot_schedule.indicators[day_index] = START
                slot_schedule.total_games += 1
        summary.total_games += slot_schedule.total_games

        if slot.is_ir:
            slot_schedule.indicators = [NO_GAME] * DAYS_PER_WEEK
        elif slot.is_bench:
            _bench_indicators(slot_schedule, cascade, summary)
        elif player.is_goalie:
            _goalie_indicators(slot_schedule, schedule, dates[0], summary)
        else:
            _skater_indicators(slot_schedule, summary)

    return OptimizedRoster(dates=dates, slots=slots, cascade=cascade, summary=summary)


def games_per_day(optimized: OptimizedRoster) -> list[int]:
    """Active games (X, ||, ?) per day across non-IR slots."""
    counts = [0] * DAYS_PER_WEEK
    for slot_schedule in optimized.slots:
        if slot_schedule.slot.is_ir:
            continue
        for i, indicator in enumerate(slot_schedule.indicators):
            if indicator in ACTIVE_INDICATORS:
                counts[i] += 1
    return counts


def max_games_per_position(roster: list[Slot]) -> dict[str, int]:
    """Number of starting slots per slot type (max daily starts at that type)."""
    counts: dict[str, int] = {}
    for slot in roster:
        if slot.is_starting:
            counts[slot.type] = counts.get(slot.type, 0) + 1
    return counts
