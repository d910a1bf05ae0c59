"""Reusable help modal overlay for TUI screens."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

INDICATOR_LEGEND = """\
Grid legend:
  X   Will start
  O   Bench game with no open slot (conflict)
  ||  Goalie back-to-back, second night
  ?   Day-to-day, start uncertain
  -   No game
"""


class HelpScreen(ModalScreen[None]):
    """A modal help overlay that closes on Escape or button click."""

    BINDINGS = [("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help-dialog {
        width: 64;
        height: auto;
        max-height: 80%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #help-legend {
        margin-top: 1;
        color: $text-muted;
    }
    #help-close {
        width: 100%;
        margin-top: 1;
    }
    """

    def __init__(self, title: str, body: str, show_legend: bool = True) -> None:
        super().__init__()
        self._title = title
        self._body = body
        self._show_legend = show_legend

    def compose(self) -> ComposeResult:
        with Vertical(id="help-dialog"):
            yield Static(self._title, id="help-title")
            yield Static(self._body, id="help-body")
            if self._show_legend:
                yield Static(INDICATOR_LEGEND, id="help-legend")
            yield Button("Close [Esc]", id="help-close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close":
            self.dismiss()
