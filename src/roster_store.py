"""Roster store: an explicit, immutable snapshot of slot assignments.

User edits (position overrides, bench priority) live in separate tables
keyed by player / slot id and are merged into the slot view at read time, so
they survive roster rebuilds and never mutate the canonical records.
Every operation returns a new snapshot.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from src.config import get_roster_config
from src.models import PLAYER_POSITIONS, Player, Slot, generate_roster_slots
from src.position_matcher import find_best_slot

DATA_DIR = Path(__file__).parent.parent / "data"
ROSTER_FILE = "roster.json"


@dataclass(frozen=True)
class RosterSnapshot:
    """Slots with their canonical occupants plus the user override tables."""
    slots: tuple[Slot, ...]
    roster_config: dict[str, int] = field(default_factory=dict)
    position_overrides: dict[str, tuple[str, ...]] = field(default_factory=dict)
    bench_priority: tuple[str, ...] = ()

    def slot(self, slot_id: str) -> Slot:
        for s in self.slots:
            if s.id == slot_id:
                return s
        raise KeyError(f"No slot with id {slot_id!r}")

    def player_view(self, player: Player) -> Player:
        """Player with its override (if any) merged in."""
        override = self.position_overrides.get(player.id)
        if override is None:
            return player
        return player.with_positions(override)

    def roster(self) -> list[Slot]:
        """The merged slot list passed to the optimizer.

        Bench slots named in ``bench_priority`` are re-ranked 1..n in list
        order; other bench slots follow in their original rank order.
        """
        bench_ranks = {slot_id: i for i, slot_id in enumerate(self.bench_priority, 1)}
        unlisted = sorted(
            (s for s in self.slots if s.is_bench and s.id not in bench_ranks),
            key=lambda s: s.rank,
        )
        for i, s in enumerate(unlisted, len(bench_ranks) + 1):
            bench_ranks[s.id] = i

        view = []
        for s in self.slots:
            player = self.player_view(s.player) if s.player is not None else None
            rank = bench_ranks.get(s.id, s.rank) if s.is_bench else s.rank
            view.append(replace(s, player=player, rank=rank))
        return view


# ── Construction ────────────────────────────────────────────────────────

def empty_snapshot(config: Optional[dict[str, int]] = None) -> RosterSnapshot:
    config = dict(config) if config is not None else get_roster_config()
    return RosterSnapshot(slots=tuple(generate_roster_slots(config)), roster_config=config)


def reset_roster(snapshot: RosterSnapshot) -> RosterSnapshot:
    """Empty every slot; position overrides are kept, bench priority is cleared."""
    fresh = empty_snapshot(snapshot.roster_config)
    return replace(fresh, position_overrides=dict(snapshot.position_overrides))


# ── Assignment ──────────────────────────────────────────────────────────

def _replace_slots(snapshot: RosterSnapshot, slots) -> RosterSnapshot:
    return replace(snapshot, slots=tuple(slots))


def assign_player(snapshot: RosterSnapshot, player: Player, slot_id: str) -> RosterSnapshot:
    """Put ``player`` in ``slot_id``, removing them from any other slot first."""
    snapshot.slot(slot_id)
    slots = []
    for s in snapshot.slots:
        if s.id == slot_id:
            slots.append(s.with_player(player))
        elif s.player is not None and s.player.id == player.id:
            slots.append(s.with_player(None))
        else:
            slots.append(s)
    return _replace_slots(snapshot, slots)


def player_id_for(name: str, team: str) -> str:
    """Id for a manually entered player, e.g. "tor-auston-matthews"."""
    return "-".join([team.lower(), *name.lower().split()])


def unassign_player(snapshot: RosterSnapshot, slot_id: str) -> RosterSnapshot:
    snapshot.slot(slot_id)
    return _replace_slots(
        snapshot,
        (s.with_player(None) if s.id == slot_id else s for s in snapshot.slots),
    )


def auto_assign(snapshot: RosterSnapshot, player: Player) -> tuple[RosterSnapshot, Optional[str]]:
    """Assign a player to the best open slot. Returns (snapshot, slot_id or None)."""
    best = find_best_slot(snapshot.player_view(player), snapshot.roster())
    if best is None:
        return snapshot, None
    return assign_player(snapshot, player, best.id), best.id


# ── Override tables ─────────────────────────────────────────────────────

def set_position_override(
    snapshot: RosterSnapshot,
    player_id: str,
    positions: list[str],
) -> RosterSnapshot:
    bad = [p for p in positions if p not in PLAYER_POSITIONS]
    if bad:
        raise ValueError(f"Unknown positions: {bad}")
    overrides = dict(snapshot.position_overrides)
    overrides[player_id] = tuple(positions)
    return replace(snapshot, position_overrides=overrides)


def clear_position_override(snapshot: RosterSnapshot, player_id: str) -> RosterSnapshot:
    overrides = {k: v for k, v in snapshot.position_overrides.items() if k != player_id}
    return replace(snapshot, position_overrides=overrides)


def set_bench_priority(snapshot: RosterSnapshot, slot_ids: list[str]) -> RosterSnapshot:
    """Set bench processing order as a list of bench slot ids."""
    bench_ids = {s.id for s in snapshot.slots if s.is_bench}
    bad = [sid for sid in slot_ids if sid not in bench_ids]
    if bad:
        raise ValueError(f"Not bench slots: {bad}")
    if len(set(slot_ids)) != len(slot_ids):
        raise ValueError("Bench priority lists a slot more than once")
    return replace(snapshot, bench_priority=tuple(slot_ids))


# ── Selectors ───────────────────────────────────────────────────────────

def starting_slots(snapshot: RosterSnapshot) -> list[Slot]:
    return [s for s in snapshot.roster() if s.is_starting]


def bench_slots(snapshot: RosterSnapshot) -> list[Slot]:
    return sorted((s for s in snapshot.roster() if s.is_bench), key=lambda s: s.rank)


def ir_slots(snapshot: RosterSnapshot) -> list[Slot]:
    return [s for s in snapshot.roster() if s.is_ir]


def assigned_player_ids(snapshot: RosterSnapshot) -> set[str]:
    return {s.player.id for s in snapshot.slots if s.player is not None}


def unassigned_players(snapshot: RosterSnapshot, pool: list[Player]) -> list[Player]:
    """Players from ``pool`` not on the roster, with overrides merged in."""
    assigned = assigned_player_ids(snapshot)
    return [snapshot.player_view(p) for p in pool if p.id not in assigned]


# ── JSON load/save ──────────────────────────────────────────────────────

def _player_to_dict(player: Player) -> dict:
    return {
        "id": player.id,
        "name": player.name,
        "team": player.team,
        "positions": list(player.positions),
        "injury_status": player.injury_status,
        "injury_note": player.injury_note,
    }


def _player_from_dict(data: dict) -> Player:
    return Player(
        id=str(data["id"]),
        name=data.get("name", ""),
        team=data.get("team", ""),
        positions=tuple(data.get("positions", [])),
        injury_status=data.get("injury_status", "Healthy"),
        injury_note=data.get("injury_note"),
    )


def snapshot_to_dict(snapshot: RosterSnapshot) -> dict:
    return {
        "roster_config": dict(snapshot.roster_config),
        "assignments": {
            s.id: _player_to_dict(s.player) for s in snapshot.slots if s.player is not None
        },
        "position_overrides": {k: list(v) for k, v in snapshot.position_overrides.items()},
        "bench_priority": list(snapshot.bench_priority),
    }


def snapshot_from_dict(data: dict) -> RosterSnapshot:
    snapshot = empty_snapshot(data.get("roster_config") or None)
    for slot_id, player_data in data.get("assignments", {}).items():
        snapshot = assign_player(snapshot, _player_from_dict(player_data), slot_id)
    for player_id, positions in data.get("position_overrides", {}).items():
        snapshot = set_position_override(snapshot, player_id, positions)
    if data.get("bench_priority"):
        snapshot = set_bench_priority(snapshot, data["bench_priority"])
    return snapshot


def load_roster(path: Optional[Path] = None) -> RosterSnapshot:
    """Load data/roster.json, or an empty roster if it does not exist."""
    path = path or DATA_DIR / ROSTER_FILE
    if not path.exists():
        return empty_snapshot()
    with open(path) as f:
        return snapshot_from_dict(json.load(f))


def save_roster(snapshot: RosterSnapshot, path: Optional[Path] = None) -> Path:
    path = path or DATA_DIR / ROSTER_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2)
    return path
