"""Hockey Week Planner TUI: main application."""

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static

from src.config import get_my_team
from src.tui.screens.data_refresh import DataRefreshScreen
from src.tui.screens.roster import RosterScreen
from src.tui.screens.week_grid import WeekGridScreen


class PlannerApp(App):
    """A keyboard-driven TUI for planning a fantasy hockey week."""

    TITLE = "Hockey Week Planner"

    BINDINGS = [
        ("g", "goto('week_grid')", "Week Grid"),
        ("r", "goto('roster')", "Roster"),
        ("d", "goto('data_refresh')", "Data Refresh"),
        ("q", "quit", "Quit"),
        ("question_mark", "help", "Help"),
    ]

    SCREEN_TITLES = {
        "week_grid": "Week Grid",
        "roster": "Roster",
        "data_refresh": "Data Refresh",
    }

    def on_mount(self) -> None:
        self.sub_title = get_my_team()
        # install_screen preserves instances between switches
        self.install_screen(WeekGridScreen(), name="week_grid")
        self.install_screen(RosterScreen(), name="roster")
        self.install_screen(DataRefreshScreen(), name="data_refresh")

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Press [bold]g[/bold] for the week grid, [bold]r[/bold] to edit the roster, [bold]d[/bold] to refresh schedules.")
        yield Footer()

    def action_goto(self, screen_name: str) -> None:
        # Pop back to default screen first, then push the target
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.sub_title = self.SCREEN_TITLES.get(screen_name, screen_name)
        self.push_screen(screen_name)

    def action_help(self) -> None:
        from src.tui.screens.help import HelpScreen
        self.push_screen(
            HelpScreen(
                "Hockey Week Planner Help",
                (
                    "Keybindings:\n"
                    "  g  Week Grid\n"
                    "  r  Roster\n"
                    "  d  Data Refresh\n"
                    "  q  Quit\n"
                    "  ?  This help screen\n"
                ),
            )
        )


def main() -> None:
    app = PlannerApp()
    app.run()


if __name__ == "__main__":
    main()
