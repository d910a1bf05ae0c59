"""Data Refresh screen: fetches week schedules and checks the roster, with live logging."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from textual.app import ComposeResult
from textual.widgets import Button, Footer, Header, RichLog, Static
from textual import work

from src.schedule import current_week, next_week
from src.tui.screens.base import BaseScreen
from src.tui.screens.help import HelpScreen

DATA_DIR = Path(__file__).resolve().parent.parent.parent.parent / "data"

HELP_TEXT = """\
Data Refresh Screen

Runs the collection steps:
  1. NHL schedule for the current week
  2. NHL schedule for next week
  3. Roster checks against this week's schedule

Keybindings:
  Enter  Start collection
  ?      Show this help
  Esc    Return to previous screen

Notes:
  - A failure in one step does not block the rest
  - Data freshness shows file modification times
"""


def _age_str(path: Path) -> str:
    mtime = datetime.fromtimestamp(os.path.getmtime(path))
    age = datetime.now() - mtime
    if age.days > 0:
        return f"{age.days}d ago"
    if age.seconds > 3600:
        return f"{age.seconds // 3600}h ago"
    return f"{age.seconds // 60}m ago"


class DataRefreshScreen(BaseScreen):
    """Screen for refreshing cached schedule files."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._freshness_text(), id="data-freshness")
        yield Button("Start Collection", id="start-collection", variant="primary")
        yield RichLog(highlight=True, markup=True, id="refresh-log")
        yield Footer()

    def _data_files(self) -> list[tuple[str, str]]:
        from src.collect_data import schedule_filename
        from src.roster_store import ROSTER_FILE

        this_week = current_week()
        return [
            (ROSTER_FILE, "Roster"),
            (schedule_filename(this_week.start), "This Week"),
            (schedule_filename(next_week(this_week).start), "Next Week"),
        ]

    def _freshness_text(self) -> str:
        parts = []
        for filename, label in self._data_files():
            path = DATA_DIR / filename
            if path.exists():
                parts.append(f"{label}: {_age_str(path)}")
            else:
                parts.append(f"{label}: [red]missing[/red]")
        return " | ".join(parts)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start-collection":
            event.button.disabled = True
            self._run_collection()

    @work(exclusive=True, thread=True)
    def _run_collection(self) -> None:
        log = self.query_one("#refresh-log", RichLog)

        def log_fn(msg: str) -> None:
            self.app.call_from_thread(log.write, msg)

        steps = [
            ("This Week's Schedule", self._step_this_week),
            ("Next Week's Schedule", self._step_next_week),
            ("Roster Checks", self._step_roster_checks),
        ]

        log_fn("[bold]Starting data collection...[/bold]")
        for name, step_fn in steps:
            log_fn(f"\n[bold blue]>>> {name}[/bold blue]")
            try:
                step_fn(log_fn)
                log_fn(f"[green]  ✓ {name} complete[/green]")
            except Exception as e:
                log_fn(f"[red]  ✗ {name} failed: {e}[/red]")

        log_fn("\n[bold green]Collection finished.[/bold green]")
        self.app.call_from_thread(self._on_collection_done)

    def _on_collection_done(self) -> None:
        btn = self.query_one("#start-collection", Button)
        btn.disabled = False
        freshness = self.query_one("#data-freshness", Static)
        freshness.update(self._freshness_text())
        self.notify("Data collection complete", severity="information")

    def _step_this_week(self, log_fn):
        from src.collect_data import collect_week_schedule
        collect_week_schedule(current_week().start, log=log_fn)

    def _step_next_week(self, log_fn):
        from src.collect_data import collect_week_schedule
        collect_week_schedule(next_week(current_week()).start, log=log_fn)

    def _step_roster_checks(self, log_fn):
        from src.collect_data import load_week_schedule
        from src.roster_store import load_roster
        from src.validation import print_quality_report, run_roster_quality

        report = run_roster_quality(load_roster(), load_week_schedule(current_week().start))
        print_quality_report(report, log=log_fn)

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Data Refresh Help", HELP_TEXT, show_legend=False))
