"""Flatten an optimized roster into a table and print/save it."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd

from src.roster_optimizer import OptimizedRoster, RosterSummary, games_per_day
from src.schedule import weekday_name

DATA_DIR = Path(__file__).parent.parent / "data"


def day_columns(optimized: OptimizedRoster) -> list[str]:
    """Column headers for the 7 days, e.g. "Mon 01-13"."""
    return [f"{weekday_name(d)} {d.strftime('%m-%d')}" for d in optimized.dates]


def roster_report_frame(optimized: OptimizedRoster) -> pd.DataFrame:
    """One row per slot: slot, player, team, positions, 7 indicators, games, active."""
    days = day_columns(optimized)
    rows = []
    for s in optimized.slots:
        player = s.slot.player
        row = {
            "slot": s.slot.label,
            "player": player.name if player else "",
            "team": player.team if player else "",
            "positions": player.format_positions() if player else "",
        }
        row.update(dict(zip(days, s.indicators)))
        row["games"] = s.total_games
        row["active"] = s.active_games
        rows.append(row)
    return pd.DataFrame(rows, columns=["slot", "player", "team", "positions", *days, "games", "active"])


def summary_dict(summary: RosterSummary) -> dict:
    return {
        "total_games": summary.total_games,
        "starting_games": summary.starting_games,
        "bench_virtual_starts": summary.bench_virtual_starts,
        "bench_conflicts": summary.bench_conflicts,
        "goalie_starts": summary.goalie_starts,
        "goalie_b2b_uncertain": summary.goalie_b2b_uncertain,
        "uncertain_games": summary.uncertain_games,
        "efficiency": summary.efficiency,
    }


def save_report(optimized: OptimizedRoster, path: Path | None = None) -> Path:
    """Write the slot grid to CSV (data/week_<start>.csv by default)."""
    if path is None:
        path = DATA_DIR / f"week_{optimized.dates[0].isoformat()}.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    roster_report_frame(optimized).to_csv(path, index=False)
    return path


def print_roster_report(optimized: OptimizedRoster, log=print) -> None:
    """Print the slot grid and summary."""
    df = roster_report_frame(optimized)
    log(df.to_string(index=False))
    log("")
    log("Games per day: " + "  ".join(
        f"{col.split()[0]} {n}" for col, n in zip(day_columns(optimized), games_per_day(optimized))
    ))
    s = summary_dict(optimized.summary)
    log(
        f"Starts: {s['starting_games']} | Bench virtual starts: {s['bench_virtual_starts']} | "
        f"Conflicts: {s['bench_conflicts']} | Goalie starts: {s['goalie_starts']} "
        f"(B2B uncertain: {s['goalie_b2b_uncertain']}) | Efficiency: {s['efficiency']}%"
    )


def run_report(week_start: date | str) -> OptimizedRoster:
    """Load the saved roster and cached schedule, optimize, print and save."""
    from src.collect_data import load_week_schedule
    from src.roster_optimizer import optimize_roster
    from src.roster_store import load_roster
    from src.schedule import as_date

    start = as_date(week_start)
    snapshot = load_roster()
    schedule = load_week_schedule(start)
    optimized = optimize_roster(snapshot.roster(), schedule, start)
    print_roster_report(optimized)
    path = save_report(optimized)
    print(f"\nSaved report to {path}")
    return optimized


if __name__ == "__main__":
    from src.schedule import current_week
    run_report(current_week().start)
