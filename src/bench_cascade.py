"""Bench cascade: move bench games into starting slots left open that day.

Each day is computed independently. A starting slot is open when it is empty
or its occupant has no game. Bench players are processed in rank order
(B1, B2, ...) and each claims the first open slot it is eligible for that
nobody has claimed yet. Bench players with a game and no claim are
conflicts. Claims never carry over to another day and are never written back
to the roster.

This is a greedy first-fit pass, not a maximum matching: a higher-ranked
bench player may take a slot that a lower-ranked one needed more.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from src.models import CONFLICT, NO_GAME, START, Player, Slot
from src.position_matcher import can_player_fill_slot
from src.schedule import WeekSchedule, week_dates

STARTING = "starting"
CONFLICTED = "conflict"
IDLE = "no-game"


@dataclass(frozen=True)
class BenchClaim:
    bench_slot: Slot
    target_slot: Slot
    player: Player


@dataclass(frozen=True)
class BenchConflict:
    bench_slot: Slot
    player: Player


@dataclass
class DayCascadeResult:
    """Open slots, claims and conflicts for one day."""
    date: date
    open_slots: list[Slot] = field(default_factory=list)
    claims: list[BenchClaim] = field(default_factory=list)
    conflicts: list[BenchConflict] = field(default_factory=list)

    def claim_for(self, bench_slot_id: str) -> BenchClaim | None:
        for claim in self.claims:
            if claim.bench_slot.id == bench_slot_id:
                return claim
        return None


@dataclass
class WeekCascadeResult:
    """Cascade results for all 7 days plus per-slot indicators."""
    days: list[DayCascadeResult] = field(default_factory=list)
    slot_indicators: dict[str, list[str]] = field(default_factory=dict)
    virtual_starts: int = 0
    total_conflicts: int = 0


@dataclass
class CascadeSummary:
    total_bench_games: int
    virtual_starts: int
    conflicts: int
    utilization_rate: float


def _has_game(slot: Slot, schedule: WeekSchedule, d: date) -> bool:
    return slot.player is not None and schedule.has_game_on(slot.player.team, d)


def open_slots_for_day(
    starting_slots: list[Slot],
    schedule: WeekSchedule,
    d: date,
) -> list[Slot]:
    """Starting slots that are empty or whose occupant is idle on ``d``."""
    return [s for s in starting_slots if not _has_game(s, schedule, d)]


def process_day_cascade(
    bench_slots: list[Slot],
    starting_slots: list[Slot],
    schedule: WeekSchedule,
    d: date,
) -> DayCascadeResult:
    """Run the cascade for one day. ``bench_slots`` must already be in rank order."""
    result = DayCascadeResult(date=d)
    result.open_slots = open_slots_for_day(starting_slots, schedule, d)
    claimed: set[str] = set()

    for bench_slot in bench_slots:
        player = bench_slot.player
        if player is None or not schedule.has_game_on(player.team, d):
            continue

        target = next(
            (
                s for s in result.open_slots
                if s.id not in claimed and can_player_fill_slot(player, s)
            ),
            None,
        )
        if target is not None:
            claimed.add(target.id)
            result.claims.append(BenchClaim(bench_slot, target, player))
        else:
            result.conflicts.append(BenchConflict(bench_slot, player))

    return result


def calculate_week_cascade(
    roster: list[Slot],
    schedule: WeekSchedule,
    week_start: date | str,
) -> WeekCascadeResult:
    """Run the bench cascade for each of the 7 days of the week."""
    dates = week_dates(week_start)
    starting_slots = [s for s in roster if s.is_starting]
    # sorted() is stable, so equal ranks keep roster order
    bench_slots = sorted((s for s in roster if s.is_bench), key=lambda s: s.rank)

    result = WeekCascadeResult()
    result.slot_indicators = {s.id: [] for s in roster}

    for d in dates:
        day = process_day_cascade(bench_slots, starting_slots, schedule, d)
        result.days.append(day)

        for slot in starting_slots:
            indicator = START if _has_game(slot, schedule, d) else NO_GAME
            result.slot_indicators[slot.id].append(indicator)

        for slot in bench_slots:
            if not _has_game(slot, schedule, d):
                result.slot_indicators[slot.id].append(NO_GAME)
            elif day.claim_for(slot.id) is not None:
                result.slot_indicators[slot.id].append(START)
                result.virtual_starts += 1
            else:
                result.slot_indicators[slot.id].append(CONFLICT)
                result.total_conflicts += 1

        # IR slots never take part in the cascade
        for slot in roster:
            if slot.is_ir:
                result.slot_indicators[slot.id].append(NO_GAME)

    return result


def bench_slot_status(result: WeekCascadeResult, slot_id: str, day_index: int) -> str:
    """"starting", "conflict" or "no-game" for a bench slot on a day."""
    indicators = result.slot_indicators.get(slot_id)
    if not indicators or not 0 <= day_index < len(indicators):
        return IDLE
    indicator = indicators[day_index]
    if indicator == START:
        return STARTING
    if indicator == CONFLICT:
        return CONFLICTED
    return IDLE


def cascade_summary(result: WeekCascadeResult) -> CascadeSummary:
    total = result.virtual_starts + result.total_conflicts
    return CascadeSummary(
        total_bench_games=total,
        virtual_starts=result.virtual_starts,
        conflicts=result.total_conflicts,
        utilization_rate=result.virtual_starts / total if total > 0 else 0.0,
    )
