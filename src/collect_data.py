"""Pull and cache week schedules from the NHL API."""

import json
from datetime import date, timedelta
from pathlib import Path

from src import nhl_client
from src.schedule import (
    WeekSchedule,
    as_date,
    schedule_from_dict,
    schedule_to_dict,
    week_start_for,
)

DATA_DIR = Path(__file__).parent.parent / "data"


def schedule_filename(start: date) -> str:
    return f"nhl_schedule_{start.isoformat()}.json"


def save_json(data, filename: str, log=print):
    DATA_DIR.mkdir(exist_ok=True)
    with open(DATA_DIR / filename, "w") as f:
        json.dump(data, f, indent=2, default=str)
    log(f"  Saved {filename}")


def collect_week_schedule(start: date | str, log=print) -> WeekSchedule:
    """Fetch the NHL schedule for the week starting at ``start`` and cache it."""
    start = as_date(start)
    log(f"Collecting NHL schedule for week of {start}...")
    schedule = nhl_client.get_week_schedule(start)
    log(f"  {len(schedule.games)} games, {len(schedule.by_team)} teams playing")
    save_json(schedule_to_dict(schedule), schedule_filename(start), log=log)
    return schedule


def load_week_schedule(start: date | str) -> WeekSchedule:
    """Load a cached week schedule. Raises FileNotFoundError if not collected yet."""
    start = as_date(start)
    with open(DATA_DIR / schedule_filename(start)) as f:
        return schedule_from_dict(json.load(f))


def collect_upcoming_weeks(weeks: int = 2, today: date | None = None, log=print) -> list[WeekSchedule]:
    """Collect the current week and the ``weeks - 1`` weeks after it."""
    first = week_start_for(today or date.today())
    return [
        collect_week_schedule(first + timedelta(days=7 * i), log=log)
        for i in range(weeks)
    ]


if __name__ == "__main__":
    print("=" * 60)
    print("NHL Schedule Collection")
    print("=" * 60)
    collect_upcoming_weeks()
    print("\nDone! Schedules saved to data/")
