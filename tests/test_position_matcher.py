"""Tests for positional eligibility."""

import pytest

from src.models import Player, Slot, make_slot, parse_positions
from src.position_matcher import (
    available_slots,
    can_fill_slot,
    can_player_fill_slot,
    eligibility_display,
    eligible_slots,
    find_best_slot,
    players_for_slot,
)

ALL_POSITION_SETS = [
    (),
    ("C",),
    ("LW",),
    ("RW",),
    ("D",),
    ("G",),
    ("C", "LW"),
    ("LW", "RW", "D"),
    ("C", "G"),
]


def _make_player(pid="p1", positions=("C",), team="TOR", custom=None):
    return Player(id=pid, name=f"Player {pid}", team=team, positions=positions, custom_positions=custom)


class TestCanFillSlot:
    @pytest.mark.parametrize("slot_type", ["B", "IR", "IR+"])
    @pytest.mark.parametrize("positions", ALL_POSITION_SETS)
    def test_bench_and_ir_accept_anyone(self, slot_type, positions):
        assert can_fill_slot(slot_type, positions)

    @pytest.mark.parametrize("positions", [("C",), ("LW",), ("RW",), ("D",), ("C", "RW"), ("D", "LW")])
    def test_utility_accepts_skaters(self, positions):
        assert can_fill_slot("U", positions)

    def test_utility_rejects_goalie(self):
        assert not can_fill_slot("U", ("G",))

    def test_utility_rejects_empty(self):
        assert not can_fill_slot("U", ())

    def test_utility_accepts_goalie_with_skater_position(self):
        assert can_fill_slot("U", ("G", "D"))

    def test_exact_match(self):
        assert can_fill_slot("LW", ("C", "LW"))
        assert not can_fill_slot("RW", ("C", "LW"))

    def test_goalie_slot(self):
        assert can_fill_slot("G", ("G",))
        assert not can_fill_slot("G", ("D",))

    def test_empty_positions_only_fill_bench_and_ir(self):
        for slot_type in ["C", "LW", "RW", "D", "G", "U"]:
            assert not can_fill_slot(slot_type, [])

    def test_unknown_slot_type_raises(self):
        with pytest.raises(ValueError):
            can_fill_slot("F", ("C",))


class TestEffectivePositions:
    def test_override_used_over_native(self):
        """A manual dual-eligibility edit is what the matcher sees."""
        player = _make_player(positions=("C",), custom=("C", "LW"))
        assert can_player_fill_slot(player, make_slot("LW", 1))

    def test_override_can_remove_eligibility(self):
        player = _make_player(positions=("C", "LW"), custom=("LW",))
        assert not can_player_fill_slot(player, make_slot("C", 1))

    def test_empty_override_is_respected(self):
        player = _make_player(positions=("C",), custom=())
        assert not can_player_fill_slot(player, make_slot("C", 1))
        assert can_player_fill_slot(player, make_slot("B", 1))


class TestSlotHelpers:
    def _slots(self):
        return [
            make_slot("C", 1, _make_player("occupant")),
            make_slot("C", 2),
            make_slot("LW", 1),
            make_slot("U", 1),
            make_slot("G", 1),
            make_slot("B", 1),
            make_slot("IR", 1),
        ]

    def test_eligible_slots(self):
        player = _make_player(positions=("C",))
        ids = [s.id for s in eligible_slots(player, self._slots())]
        assert ids == ["C1", "C2", "U1", "B1", "IR1"]

    def test_available_slots_skip_occupied(self):
        player = _make_player(positions=("C",))
        ids = [s.id for s in available_slots(player, self._slots())]
        assert "C1" not in ids
        assert ids[0] == "C2"

    def test_find_best_slot_prefers_direct_match(self):
        player = _make_player(positions=("LW", "C"))
        assert find_best_slot(player, self._slots()).id == "LW1"

    def test_find_best_slot_falls_back_to_utility(self):
        player = _make_player(positions=("D",))
        assert find_best_slot(player, self._slots()).id == "U1"

    def test_find_best_slot_goalie_skips_utility(self):
        slots = [make_slot("U", 1), make_slot("B", 1)]
        goalie = _make_player(positions=("G",))
        assert find_best_slot(goalie, slots).id == "B1"

    def test_find_best_slot_ir_last(self):
        slots = [make_slot("IR", 1)]
        assert find_best_slot(_make_player(positions=("G",)), slots).id == "IR1"

    def test_find_best_slot_none_when_full(self):
        slots = [make_slot("C", 1, _make_player("x"))]
        assert find_best_slot(_make_player(), slots) is None

    def test_eligibility_display(self):
        assert eligibility_display(_make_player(positions=("C", "LW"))) == "C, LW, U"
        assert eligibility_display(_make_player(positions=("G",))) == "G"

    def test_players_for_slot(self):
        pool = [
            _make_player("a", positions=("C",)),
            _make_player("b", positions=("G",)),
            _make_player("c", positions=("D",)),
        ]
        assert [p.id for p in players_for_slot("U", pool)] == ["a", "c"]
        assert [p.id for p in players_for_slot("G", pool)] == ["b"]


class TestSlotTypes:
    def test_unknown_slot_type_rejected(self):
        with pytest.raises(ValueError, match="Unknown slot type"):
            Slot(id="F1", type="F", rank=1)

    def test_make_slot_unknown_type(self):
        with pytest.raises(ValueError):
            make_slot("F", 1)

    @pytest.mark.parametrize("slot_type", ["C", "LW", "RW", "D", "U", "G", "B", "IR", "IR+"])
    def test_known_slot_types(self, slot_type):
        assert make_slot(slot_type, 2).id == f"{slot_type}2"


class TestParsePositions:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("c, lw", ("C", "LW")),
            ("C/LW", ("C", "LW")),
            ("D", ("D",)),
            ("rw rw c", ("RW", "C")),
            ("", ()),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_positions(text) == expected

    @pytest.mark.parametrize("text", ["C/F", "U", "B", "goalie"])
    def test_rejects_non_player_positions(self, text):
        with pytest.raises(ValueError, match="Unknown positions"):
            parse_positions(text)
