"""Reusable week summary DataTable for the roster grid."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import DataTable

from src.roster_optimizer import RosterSummary

SUMMARY_ROWS = [
    ("Total games", "total_games"),
    ("Starting games", "starting_games"),
    ("Bench virtual starts", "bench_virtual_starts"),
    ("Bench conflicts", "bench_conflicts"),
    ("Goalie starts", "goalie_starts"),
    ("Goalie B2B uncertain", "goalie_b2b_uncertain"),
    ("Uncertain (DTD)", "uncertain_games"),
]


def _efficiency_style(efficiency: int) -> str:
    if efficiency >= 90:
        return "green"
    if efficiency >= 75:
        return "yellow"
    return "red"


class SummaryTable(Widget):
    """A DataTable showing the week's counters and efficiency score."""

    DEFAULT_CSS = """
    SummaryTable {
        height: auto;
    }
    """

    def __init__(self, summary: RosterSummary | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._summary = summary

    def compose(self) -> ComposeResult:
        yield DataTable(id="summary-table")

    def on_mount(self) -> None:
        table = self.query_one("#summary-table", DataTable)
        table.add_columns("Metric", "Value")
        if self._summary is not None:
            self.update_summary(self._summary)

    def update_summary(self, summary: RosterSummary) -> None:
        """Populate or refresh the table with a new RosterSummary."""
        self._summary = summary
        table = self.query_one("#summary-table", DataTable)
        table.clear()
        for label, attr in SUMMARY_ROWS:
            table.add_row(label, str(getattr(summary, attr)))
        style = _efficiency_style(summary.efficiency)
        table.add_row("[bold]Efficiency[/bold]", f"[{style}]{summary.efficiency}%[/{style}]")

    def clear_summary(self) -> None:
        """Show placeholders when no week is loaded."""
        self._summary = None
        table = self.query_one("#summary-table", DataTable)
        table.clear()
        for label, _ in SUMMARY_ROWS:
            table.add_row(label, "-")
        table.add_row("[bold]Efficiency[/bold]", "-")

    @property
    def summary(self) -> RosterSummary | None:
        return self._summary
