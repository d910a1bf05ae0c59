"""Core data model for the week planner: players, roster slots, games.

All records are frozen dataclasses. Changing an assignment or a position
override produces a new record rather than mutating one in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

# ── Positions and slot types ────────────────────────────────────────────
SKATER_POSITIONS = ("C", "LW", "RW", "D")
FORWARD_POSITIONS = ("C", "LW", "RW")
GOALIE = "G"
PLAYER_POSITIONS = SKATER_POSITIONS + (GOALIE,)

UTILITY = "U"
BENCH = "B"
IR_SLOT_TYPES = ("IR", "IR+")

# Roster display order
SLOT_TYPES = ("C", "LW", "RW", "D", "U", "G", "B", "IR", "IR+")

INJURY_STATUSES = ("Healthy", "DTD", "O", "IR", "IR+", "NA")
DAY_TO_DAY = "DTD"

# ── Day indicators ──────────────────────────────────────────────────────
START = "X"
CONFLICT = "O"
BACK_TO_BACK = "||"
UNCERTAIN = "?"
NO_GAME = "-"

DAY_INDICATORS = (START, CONFLICT, BACK_TO_BACK, UNCERTAIN, NO_GAME)


def is_skater_position(position: str) -> bool:
    return position in SKATER_POSITIONS


def parse_positions(text: str) -> tuple[str, ...]:
    """Parse user input like "c, lw" or "C/LW" into position codes.

    Raises ValueError on anything that is not a player position.
    """
    positions = tuple(dict.fromkeys(
        p.upper() for p in text.replace("/", ",").replace(" ", ",").split(",") if p
    ))
    bad = [p for p in positions if p not in PLAYER_POSITIONS]
    if bad:
        raise ValueError(f"Unknown positions: {bad}")
    return positions


# ── Players ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Player:
    """A rostered or available player.

    ``positions`` holds the native eligibility fetched from the provider;
    ``custom_positions`` holds a user override when one exists.
    """
    id: str
    name: str
    team: str
    positions: tuple[str, ...] = ()
    injury_status: str = "Healthy"
    custom_positions: Optional[tuple[str, ...]] = None
    injury_note: Optional[str] = None

    def __post_init__(self):
        # Accept lists from JSON / callers but store tuples so records stay hashable
        object.__setattr__(self, "positions", tuple(self.positions))
        if self.custom_positions is not None:
            object.__setattr__(self, "custom_positions", tuple(self.custom_positions))

    @property
    def effective_positions(self) -> tuple[str, ...]:
        """Override if present, else native positions."""
        if self.custom_positions is not None:
            return self.custom_positions
        return self.positions

    @property
    def has_override(self) -> bool:
        return self.custom_positions is not None

    @property
    def is_goalie(self) -> bool:
        return GOALIE in self.effective_positions

    @property
    def is_skater(self) -> bool:
        return any(is_skater_position(p) for p in self.effective_positions)

    @property
    def is_day_to_day(self) -> bool:
        return self.injury_status == DAY_TO_DAY

    @property
    def primary_position(self) -> Optional[str]:
        positions = self.effective_positions
        return positions[0] if positions else None

    def with_positions(self, positions) -> Player:
        """Copy with a position override applied (``None`` clears it)."""
        return replace(
            self,
            custom_positions=tuple(positions) if positions is not None else None,
        )

    def format_positions(self) -> str:
        return ", ".join(self.effective_positions)


# ── Roster slots ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Slot:
    """A labeled roster position holding at most one player."""
    id: str
    type: str
    rank: int
    player: Optional[Player] = None

    def __post_init__(self):
        if self.type not in SLOT_TYPES:
            raise ValueError(f"Unknown slot type: {self.type!r}")

    @property
    def label(self) -> str:
        """Display label: "C" for the first slot of a type, "C2" after that."""
        if self.rank == 1:
            return self.type
        return f"{self.type}{self.rank}"

    @property
    def is_bench(self) -> bool:
        return self.type == BENCH

    @property
    def is_ir(self) -> bool:
        return self.type in IR_SLOT_TYPES

    @property
    def is_starting(self) -> bool:
        return not self.is_bench and not self.is_ir

    @property
    def is_empty(self) -> bool:
        return self.player is None

    def with_player(self, player: Optional[Player]) -> Slot:
        return replace(self, player=player)


def make_slot(slot_type: str, rank: int, player: Optional[Player] = None) -> Slot:
    """Create a slot with the conventional id (type + rank, e.g. "B2")."""
    return Slot(id=f"{slot_type}{rank}", type=slot_type, rank=rank, player=player)


def generate_roster_slots(config: dict[str, int]) -> list[Slot]:
    """Build empty slots from per-type counts, in roster display order."""
    unknown = set(config) - set(SLOT_TYPES)
    if unknown:
        raise ValueError(f"Unknown slot types in roster config: {sorted(unknown)}")
    slots = []
    for slot_type in SLOT_TYPES:
        for rank in range(1, config.get(slot_type, 0) + 1):
            slots.append(make_slot(slot_type, rank))
    return slots


# ── Games ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Game:
    """A single scheduled NHL game."""
    id: str
    date: date
    home_team: str
    away_team: str
    start_time: Optional[str] = None
    venue: Optional[str] = None

    def involves(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)

    def is_home(self, team: str) -> bool:
        return self.home_team == team

    def opponent_of(self, team: str) -> str:
        return self.away_team if self.home_team == team else self.home_team
