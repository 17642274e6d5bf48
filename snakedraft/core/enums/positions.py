"""Position and roster slot definitions for the draft."""

from enum import Enum


class Position(Enum):
    """Draftable positions (the closed category set)."""

    QB = "QB"  # Quarterback
    RB = "RB"  # Running Back
    WR = "WR"  # Wide Receiver
    TE = "TE"  # Tight End


class RosterSlot(Enum):
    """Roster slots. Every position has a dedicated slot plus one SUPERFLEX."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    SUPERFLEX = "SUPERFLEX"  # Accepts any position


# Dedicated slot for each position
POSITION_SLOTS: dict[Position, RosterSlot] = {
    Position.QB: RosterSlot.QB,
    Position.RB: RosterSlot.RB,
    Position.WR: RosterSlot.WR,
    Position.TE: RosterSlot.TE,
}

ALL_POSITIONS: tuple[Position, ...] = tuple(Position)
ALL_SLOTS: tuple[RosterSlot, ...] = tuple(RosterSlot)
