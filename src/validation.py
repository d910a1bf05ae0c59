"""Roster sanity checks run before a week is planned.

The optimizer itself tolerates all of these problems (it degrades to "-"),
so this report is how a user finds out why a slot shows no games.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.position_matcher import can_player_fill_slot
from src.roster_store import RosterSnapshot
from src.schedule import WeekSchedule


@dataclass
class DataQualityReport:
    """Summary of data quality checks."""
    checks: list[dict] = field(default_factory=list)

    def add(self, name: str, passed: bool, detail: str = ""):
        self.checks.append({"name": name, "passed": passed, "detail": detail})

    @property
    def all_passed(self) -> bool:
        return all(c["passed"] for c in self.checks)

    @property
    def failed(self) -> list[dict]:
        return [c for c in self.checks if not c["passed"]]

    @property
    def summary(self) -> str:
        passed = sum(1 for c in self.checks if c["passed"])
        total = len(self.checks)
        return f"{passed}/{total} checks passed"


def run_roster_quality(snapshot: RosterSnapshot, schedule: WeekSchedule | None = None) -> DataQualityReport:
    """Check the merged roster view (and optionally the week's schedule coverage)."""
    report = DataQualityReport()
    roster = snapshot.roster()
    occupied = [s for s in roster if s.player is not None]

    # Check 1: every occupant has at least one effective position
    no_positions = [s.player.name for s in occupied if not s.player.effective_positions]
    report.add(
        "Every rostered player has positions",
        not no_positions,
        f"No positions: {no_positions}" if no_positions else f"{len(occupied)} players",
    )

    # Check 2: a player occupies at most one slot
    seen: dict[str, str] = {}
    duplicates = []
    for s in occupied:
        if s.player.id in seen:
            duplicates.append(f"{s.player.name} ({seen[s.player.id]}, {s.id})")
        else:
            seen[s.player.id] = s.id
    report.add(
        "No player in two slots",
        not duplicates,
        f"Duplicates: {duplicates}" if duplicates else "Clean",
    )

    # Check 3: starters are eligible for their slot
    ineligible = [
        f"{s.player.name} in {s.label} ({s.player.format_positions() or 'none'})"
        for s in occupied
        if s.is_starting and not can_player_fill_slot(s.player, s)
    ]
    report.add(
        "Starters eligible for their slots",
        not ineligible,
        f"Ineligible: {ineligible}" if ineligible else "Clean",
    )

    # Check 4: every rostered team is in the week's schedule
    if schedule is not None:
        missing = sorted({s.player.team for s in occupied if s.player.team not in schedule.by_team})
        report.add(
            f"All rostered teams scheduled ({schedule.start} - {schedule.end})",
            not missing,
            f"No games found for: {missing}" if missing else "All teams have games",
        )

    return report


def print_quality_report(report: DataQualityReport, log=print) -> None:
    """Print a human-readable quality report."""
    log(f"Roster checks: {report.summary}")
    for check in report.checks:
        mark = "ok  " if check["passed"] else "FAIL"
        log(f"  [{mark}] {check['name']}: {check['detail']}")
