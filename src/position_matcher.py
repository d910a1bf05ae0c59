"""Positional eligibility: which players may occupy which roster slots.

Everything here reads a player's effective positions, so a manual
eligibility override changes every downstream computation the same way.
"""

from __future__ import annotations

from typing import Iterable, Optional

from src.models import (
    BENCH,
    IR_SLOT_TYPES,
    SLOT_TYPES,
    UTILITY,
    Player,
    Slot,
    is_skater_position,
)


def can_fill_slot(slot_type: str, positions: Iterable[str]) -> bool:
    """Can a player with ``positions`` occupy a slot of ``slot_type``.

    Precedence:
    1. B / IR / IR+ accept anyone (even an empty position list)
    2. U accepts anyone with at least one skater position
    3. Everything else needs the slot type in the position list
    """
    if slot_type not in SLOT_TYPES:
        raise ValueError(f"Unknown slot type: {slot_type!r}")
    if slot_type == BENCH or slot_type in IR_SLOT_TYPES:
        return True
    positions = tuple(positions)
    if slot_type == UTILITY:
        return any(is_skater_position(p) for p in positions)
    return slot_type in positions


def can_player_fill_slot(player: Player, slot: Slot) -> bool:
    return can_fill_slot(slot.type, player.effective_positions)


def eligible_slots(player: Player, slots: list[Slot]) -> list[Slot]:
    """All slots the player could occupy, in roster order."""
    return [s for s in slots if can_player_fill_slot(player, s)]


def available_slots(player: Player, slots: list[Slot]) -> list[Slot]:
    """Eligible slots that are currently empty."""
    return [s for s in eligible_slots(player, slots) if s.player is None]


def find_best_slot(player: Player, slots: list[Slot]) -> Optional[Slot]:
    """Pick the most specific empty slot for a player.

    Order: direct position match (in the player's position order), then
    utility for skaters, then bench, then IR/IR+.
    """
    available = available_slots(player, slots)
    if not available:
        return None

    for pos in player.effective_positions:
        for slot in available:
            if slot.type == pos:
                return slot

    if player.is_skater:
        for slot in available:
            if slot.type == UTILITY:
                return slot

    for slot in available:
        if slot.type == BENCH:
            return slot

    for slot in available:
        if slot.type in IR_SLOT_TYPES:
            return slot

    return available[0]


def eligibility_display(player: Player) -> str:
    """Positions as shown in the roster grid, e.g. "C, LW, U"."""
    positions = list(player.effective_positions)
    if player.is_skater and UTILITY not in positions:
        positions.append(UTILITY)
    return ", ".join(positions)


def players_for_slot(slot_type: str, players: list[Player]) -> list[Player]:
    """Players from a pool who could fill a slot type."""
    return [p for p in players if can_fill_slot(slot_type, p.effective_positions)]
