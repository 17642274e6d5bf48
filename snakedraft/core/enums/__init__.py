"""Draft enumerations."""

from snakedraft.core.enums.archetypes import (
    Archetype,
    DraftPhase,
    ShiftCategory,
    ShiftSeverity,
)
from snakedraft.core.enums.positions import (
    ALL_POSITIONS,
    ALL_SLOTS,
    POSITION_SLOTS,
    Position,
    RosterSlot,
)

__all__ = [
    "ALL_POSITIONS",
    "ALL_SLOTS",
    "Archetype",
    "DraftPhase",
    "POSITION_SLOTS",
    "Position",
    "RosterSlot",
    "ShiftCategory",
    "ShiftSeverity",
]
