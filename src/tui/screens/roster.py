"""Roster screen: assign players, edit eligibility, order the bench."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Input, LoadingIndicator, Static
from textual import work

from src.models import Player, Slot, parse_positions
from src.nhl_client import NHL_TEAMS
from src.position_matcher import can_player_fill_slot, eligibility_display
from src.roster_store import (
    RosterSnapshot,
    assign_player,
    assigned_player_ids,
    auto_assign,
    bench_slots,
    clear_position_override,
    ir_slots,
    load_roster,
    player_id_for,
    reset_roster,
    save_roster,
    set_bench_priority,
    set_position_override,
    starting_slots,
    unassign_player,
)
from src.tui.screens.base import BaseScreen
from src.tui.screens.help import HelpScreen

HELP_TEXT = """\
Roster

Every change is saved to data/roster.json right away.

Adding a player:
  Fill in name, team (e.g. TOR) and positions (e.g. C, LW),
  then press Add. The player goes into the highlighted slot
  if it is empty and eligible, otherwise the best open slot.

Keybindings (with the table focused):
  x       Remove player from highlighted slot
  e       Set eligibility from the positions box
          (empty box clears the override)
  u / b   Move highlighted bench slot up / down
  ctrl+r  Empty every slot (eligibility edits are kept)
  ?       Show this help
"""


class RosterScreen(BaseScreen):
    """Roster editor backed by the roster store."""

    BINDINGS = [
        ("x", "unassign", "Remove"),
        ("e", "edit_eligibility", "Eligibility"),
        ("u", "bench_up", "Bench Up"),
        ("b", "bench_down", "Bench Down"),
        ("ctrl+r", "reset", "Reset"),
    ]

    DEFAULT_CSS = """
    #roster-form {
        height: 3;
        padding: 0 1;
    }
    #roster-form Input {
        width: 1fr;
    }
    #roster-table {
        height: 1fr;
        margin: 0 1;
    }
    #roster-status {
        padding: 0 1;
    }
    #roster-loading {
        height: 100%;
    }
    #roster-error {
        height: 100%;
        content-align: center middle;
        color: $error;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._snapshot: RosterSnapshot | None = None
        self._row_ids: list[str] = []

    @property
    def snapshot(self) -> RosterSnapshot | None:
        return self._snapshot

    def compose(self) -> ComposeResult:
        yield Header()
        yield LoadingIndicator(id="roster-loading")
        yield Footer()

    def on_mount(self) -> None:
        self._load_data()

    @work(exclusive=True, thread=True)
    def _load_data(self) -> None:
        try:
            snapshot = load_roster()
            self.app.call_from_thread(self._on_data_loaded, snapshot)
        except Exception as e:
            self.app.call_from_thread(self._on_data_error, str(e))

    def _on_data_error(self, error: str) -> None:
        self.query_one("#roster-loading").remove()
        self.mount(Static(f"Could not read the saved roster\n\n{error}", id="roster-error"))
        self.notify(f"Roster data error: {error}", severity="error")

    def _on_data_loaded(self, snapshot: RosterSnapshot) -> None:
        self._snapshot = snapshot
        self.query_one("#roster-loading").remove()

        form = Horizontal(id="roster-form")
        self.mount(form)
        form.mount(
            Input(placeholder="Player name", id="player-name"),
            Input(placeholder="Team", id="player-team"),
            Input(placeholder="Positions", id="player-positions"),
            Button("Add", id="add-player", variant="primary"),
        )

        table = DataTable(id="roster-table", cursor_type="row")
        self.mount(table)
        table.add_columns("Slot", "Player", "Team", "Native", "Eligible")
        self.mount(Static("", id="roster-status"))

        self._refresh_table()
        table.focus()

    # ── Table ───────────────────────────────────────────────────────────

    def _display_slots(self) -> list[Slot]:
        """Starters, then bench in processing order, then IR."""
        snap = self._snapshot
        return starting_slots(snap) + bench_slots(snap) + ir_slots(snap)

    def _refresh_table(self) -> None:
        table = self.query_one("#roster-table", DataTable)
        cursor = table.cursor_row
        table.clear()
        self._row_ids = []
        for slot in self._display_slots():
            player = slot.player
            self._row_ids.append(slot.id)
            table.add_row(
                slot.label,
                player.name if player else "[dim]empty[/dim]",
                player.team if player else "",
                ", ".join(player.positions) if player else "",
                self._eligible_text(player) if player else "",
            )
        if self._row_ids:
            table.move_cursor(row=min(max(cursor, 0), len(self._row_ids) - 1))

    @staticmethod
    def _eligible_text(player: Player) -> str:
        text = eligibility_display(player)
        return f"[yellow]{text}[/yellow] (edited)" if player.has_override else text

    def _selected_slot(self) -> Slot | None:
        if self._snapshot is None or not self._row_ids:
            return None
        row = self.query_one("#roster-table", DataTable).cursor_row
        if not 0 <= row < len(self._row_ids):
            return None
        slot_id = self._row_ids[row]
        return next(s for s in self._display_slots() if s.id == slot_id)

    def _apply(self, snapshot: RosterSnapshot, message: str) -> None:
        """Save the new snapshot and redraw."""
        self._snapshot = snapshot
        save_roster(snapshot)
        self._refresh_table()
        self.query_one("#roster-status", Static).update(message)
        self.app.get_screen("week_grid").mark_stale()

    # ── Adding players ──────────────────────────────────────────────────

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-player":
            self._add_player()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in ("player-name", "player-team", "player-positions"):
            self._add_player()

    def _add_player(self) -> None:
        name = self.query_one("#player-name", Input).value.strip()
        team = self.query_one("#player-team", Input).value.strip().upper()
        positions_text = self.query_one("#player-positions", Input).value

        if not name:
            self.notify("Enter a player name", severity="error")
            return
        if team not in NHL_TEAMS:
            self.notify(f"Unknown team: {team or '(blank)'}", severity="error")
            return
        try:
            positions = parse_positions(positions_text)
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        player = Player(id=player_id_for(name, team), name=name, team=team, positions=positions)
        if player.id in assigned_player_ids(self._snapshot):
            self.notify(f"{name} is already on the roster", severity="warning")
            return

        selected = self._selected_slot()
        if (
            selected is not None
            and selected.is_empty
            and can_player_fill_slot(self._snapshot.player_view(player), selected)
        ):
            snapshot, slot_id = assign_player(self._snapshot, player, selected.id), selected.id
        else:
            snapshot, slot_id = auto_assign(self._snapshot, player)
        if slot_id is None:
            self.notify(f"No open slot for {name}", severity="error")
            return

        self._apply(snapshot, f"Added {name} to {slot_id}")
        for input_id in ("#player-name", "#player-team", "#player-positions"):
            self.query_one(input_id, Input).value = ""

    # ── Slot actions ────────────────────────────────────────────────────

    def action_unassign(self) -> None:
        slot = self._selected_slot()
        if slot is None or slot.is_empty:
            return
        self._apply(unassign_player(self._snapshot, slot.id), f"Removed {slot.player.name} from {slot.id}")

    def action_edit_eligibility(self) -> None:
        slot = self._selected_slot()
        if slot is None or slot.is_empty:
            self.notify("Highlight a slot with a player first", severity="warning")
            return
        player = slot.player
        text = self.query_one("#player-positions", Input).value
        try:
            if text.strip():
                positions = parse_positions(text)
                snapshot = set_position_override(self._snapshot, player.id, list(positions))
                message = f"{player.name} now eligible at {', '.join(positions)}"
            else:
                snapshot = clear_position_override(self._snapshot, player.id)
                message = f"{player.name} back to native positions"
        except ValueError as e:
            self.notify(str(e), severity="error")
            return
        self._apply(snapshot, message)

    def _move_bench(self, offset: int) -> None:
        slot = self._selected_slot()
        if slot is None or not slot.is_bench:
            self.notify("Highlight a bench slot to reorder", severity="warning")
            return
        order = [s.id for s in bench_slots(self._snapshot)]
        i = order.index(slot.id)
        j = i + offset
        if not 0 <= j < len(order):
            return
        order[i], order[j] = order[j], order[i]
        self._apply(set_bench_priority(self._snapshot, order), "Bench order: " + ", ".join(order))
        self.query_one("#roster-table", DataTable).move_cursor(row=self._row_ids.index(slot.id))

    def action_bench_up(self) -> None:
        self._move_bench(-1)

    def action_bench_down(self) -> None:
        self._move_bench(1)

    def action_reset(self) -> None:
        if self._snapshot is None:
            return
        self._apply(reset_roster(self._snapshot), "Roster emptied")

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Roster Help", HELP_TEXT, show_legend=False))
