"""Tests for app instantiation, screen switching, keybindings."""

from unittest.mock import patch

import pytest
from textual.widgets import Footer

from src.roster_store import empty_snapshot
from src.tui.app import PlannerApp
from src.tui.screens.data_refresh import DataRefreshScreen
from src.tui.screens.help import HelpScreen
from src.tui.screens.roster import RosterScreen
from src.tui.screens.week_grid import WeekGridScreen


@pytest.mark.asyncio
async def test_app_instantiates():
    """PlannerApp instantiates without error using run_test pilot."""
    app = PlannerApp()
    async with app.run_test() as pilot:
        assert app.title == "Hockey Week Planner"
        assert app.sub_title == "Five Hole Heroes"


@pytest.mark.asyncio
async def test_keybinding_g_switches_to_week_grid():
    app = PlannerApp()
    async with app.run_test() as pilot:
        await pilot.press("g")
        assert isinstance(app.screen, WeekGridScreen)
        assert app.sub_title == "Week Grid"


@pytest.mark.asyncio
async def test_keybinding_r_switches_to_roster():
    app = PlannerApp()
    async with app.run_test() as pilot:
        with patch("src.tui.screens.roster.load_roster", return_value=empty_snapshot({"C": 1})):
            await pilot.press("r")
            await app.workers.wait_for_complete()
        assert isinstance(app.screen, RosterScreen)
        assert app.sub_title == "Roster"


@pytest.mark.asyncio
async def test_keybinding_d_switches_to_data_refresh():
    """Pressing d switches to DataRefreshScreen."""
    app = PlannerApp()
    async with app.run_test() as pilot:
        await pilot.press("d")
        assert isinstance(app.screen, DataRefreshScreen)


@pytest.mark.asyncio
async def test_switch_between_screens():
    """Screens switch from each other without stacking up."""
    app = PlannerApp()
    async with app.run_test() as pilot:
        await pilot.press("g")
        await app.workers.wait_for_complete()
        await pilot.press("d")
        assert isinstance(app.screen, DataRefreshScreen)
        assert len(app.screen_stack) == 2
        await pilot.press("escape")
        assert len(app.screen_stack) == 1


@pytest.mark.asyncio
async def test_keybinding_q_quits():
    """Pressing q exits the app."""
    app = PlannerApp()
    async with app.run_test() as pilot:
        await pilot.press("q")


@pytest.mark.asyncio
async def test_help_overlay_from_app():
    """Pressing ? on the app shows a help modal."""
    app = PlannerApp()
    async with app.run_test() as pilot:
        await pilot.press("question_mark")
        assert isinstance(app.screen, HelpScreen)
        await pilot.press("escape")
        assert not isinstance(app.screen, HelpScreen)


@pytest.mark.asyncio
async def test_footer_shows_keybindings():
    app = PlannerApp()
    async with app.run_test() as pilot:
        assert app.query_one(Footer) is not None
