"""Week Grid screen: roster slots x days with start/conflict indicators."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import DataTable, Footer, Header, Label, LoadingIndicator, Static
from textual import work

from src.collect_data import load_week_schedule
from src.models import BACK_TO_BACK, CONFLICT, NO_GAME, START, UNCERTAIN
from src.report import day_columns
from src.roster_optimizer import OptimizedRoster, games_per_day, optimize_roster
from src.roster_store import RosterSnapshot, load_roster
from src.schedule import Week, WeekSchedule, current_week, next_week, previous_week
from src.tui.screens.base import BaseScreen
from src.tui.screens.help import HelpScreen
from src.tui.widgets.summary_table import SummaryTable
from src.validation import run_roster_quality

HELP_TEXT = """\
Week Grid

One row per roster slot, one column per day of the week.

Starting slots show X on game days. Goalies show || on the
second night of a back-to-back. Day-to-day players show ?.

Bench players with a game cascade into starting slots left open
that day (empty, or the starter has no game). Bench slots are
processed B1 first; each takes the first open slot it is eligible
for. A bench game with no open slot shows O.

IR slots never count as starts.

Keybindings:
  n      Next week
  p      Previous week
  ?      Show this help
"""

INDICATOR_STYLES = {
    START: "[green]X[/green]",
    CONFLICT: "[red]O[/red]",
    BACK_TO_BACK: "[yellow]||[/yellow]",
    UNCERTAIN: "[yellow]?[/yellow]",
    NO_GAME: "[dim]-[/dim]",
}


class WeekGridScreen(BaseScreen):
    """Roster grid for one week."""

    BINDINGS = [
        ("n", "next_week", "Next Week"),
        ("p", "previous_week", "Prev Week"),
    ]

    DEFAULT_CSS = """
    #week-label {
        padding: 0 1;
    }
    #grid-table {
        height: 1fr;
        margin: 0 1;
    }
    #grid-status {
        padding: 0 1;
    }
    #grid-loading {
        height: 100%;
    }
    #grid-error {
        height: 100%;
        content-align: center middle;
        color: $error;
    }
    """

    def __init__(self, week: Week | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._week = week or current_week()
        self._snapshot: RosterSnapshot | None = None
        self._schedule: WeekSchedule | None = None
        self._optimized: OptimizedRoster | None = None
        self._layout_ready = False
        self._loaded_once = False
        self._stale = False

    @property
    def week(self) -> Week:
        return self._week

    @property
    def optimized(self) -> OptimizedRoster | None:
        return self._optimized

    def compose(self) -> ComposeResult:
        yield Header()
        yield LoadingIndicator(id="grid-loading")
        yield Footer()

    def on_mount(self) -> None:
        self._load_data()

    @work(exclusive=True, thread=True)
    def _load_data(self) -> None:
        week = self._week
        try:
            snapshot = load_roster()
            schedule = load_week_schedule(week.start)
            self.app.call_from_thread(self._on_data_loaded, snapshot, schedule)
        except Exception as e:
            self.app.call_from_thread(self._on_data_error, str(e))

    def _clear_placeholders(self) -> None:
        for widget in self.query("#grid-loading, #grid-error"):
            widget.remove()

    def _on_data_error(self, error: str) -> None:
        for widget in self.query("#grid-loading"):
            widget.remove()
        self._optimized = None
        self._loaded_once = True
        if self._layout_ready:
            self.query_one("#grid-table", DataTable).clear(columns=True)
            self.query_one("#grid-summary", SummaryTable).clear_summary()
            self.query_one("#week-label", Label).update(f"[bold]{self._week.label}[/bold]")
            self.query_one("#grid-status", Static).update(
                f"[red]No schedule for this week, press [bold]d[/bold] to refresh[/red]\n{error}"
            )
        else:
            message = f"Schedule data missing, press [bold]d[/bold] to refresh\n\n{error}"
            existing = self.query("#grid-error")
            if existing:
                existing.first(Static).update(message)
            else:
                self.mount(Static(message, id="grid-error"))
        self.notify(f"Week grid data error: {error}", severity="error")

    def _on_data_loaded(self, snapshot: RosterSnapshot, schedule: WeekSchedule) -> None:
        self._snapshot = snapshot
        self._schedule = schedule
        self._loaded_once = True
        self._clear_placeholders()
        optimized = optimize_roster(snapshot.roster(), schedule, self._week.start)

        if not self._layout_ready:
            self.mount(Label("", id="week-label"))
            self.mount(DataTable(id="grid-table"))
            self.mount(SummaryTable(optimized.summary, id="grid-summary"))
            self.mount(Static("", id="grid-status"))
            self._layout_ready = True
        else:
            self.query_one("#grid-summary", SummaryTable).update_summary(optimized.summary)

        self._render_grid(optimized)

    def _render_grid(self, optimized: OptimizedRoster) -> None:
        self._optimized = optimized

        self.query_one("#week-label", Label).update(
            f"[bold]{self._week.label}[/bold]  ({self._schedule.start} to {self._schedule.end})"
        )

        table = self.query_one("#grid-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Slot", "Player", "Team", "Pos", *day_columns(optimized), "GP")
        for s in optimized.slots:
            player = s.slot.player
            cells = [INDICATOR_STYLES.get(ind, ind) for ind in s.indicators]
            table.add_row(
                s.slot.label,
                player.name if player else "[dim]empty[/dim]",
                player.team if player else "",
                player.format_positions() if player else "",
                *cells,
                str(s.total_games),
            )
        per_day = games_per_day(optimized)
        table.add_row("", "[bold]Active[/bold]", "", "", *[str(n) for n in per_day], "")

        report = run_roster_quality(self._snapshot, self._schedule)
        status = self.query_one("#grid-status", Static)
        if report.all_passed:
            status.update(f"[green]Roster checks: {report.summary}[/green]")
        else:
            problems = "; ".join(c["detail"] for c in report.failed)
            status.update(f"[yellow]Roster checks: {report.summary}[/yellow]: {problems}")

    def mark_stale(self) -> None:
        """Reload the next time this screen is shown (the roster was edited)."""
        if self._loaded_once:
            self._stale = True

    def on_screen_resume(self) -> None:
        if self._stale:
            self._stale = False
            self._load_data()

    def _change_week(self, week: Week) -> None:
        self._week = week
        self._load_data()

    def action_next_week(self) -> None:
        self._change_week(next_week(self._week))

    def action_previous_week(self) -> None:
        self._change_week(previous_week(self._week))

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Week Grid Help", HELP_TEXT))
