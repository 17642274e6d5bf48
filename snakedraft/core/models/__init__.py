"""Core draft data models."""

from snakedraft.core.models.draft import (
    BoardState,
    CurrentPick,
    DraftSettings,
    DraftSnapshot,
    PersonaAssignment,
    Pick,
    Roster,
    SLOT_ATTRIBUTES,
    default_team_name,
)
from snakedraft.core.models.player import Player, tier_for_rank
from snakedraft.core.models.shift import (
    ReasoningSummary,
    ShiftDetection,
    StrategyShift,
    TeamShiftSummary,
)

__all__ = [
    "BoardState",
    "CurrentPick",
    "DraftSettings",
    "DraftSnapshot",
    "PersonaAssignment",
    "Pick",
    "Player",
    "ReasoningSummary",
    "Roster",
    "SLOT_ATTRIBUTES",
    "ShiftDetection",
    "StrategyShift",
    "TeamShiftSummary",
    "default_team_name",
    "tier_for_rank",
]
