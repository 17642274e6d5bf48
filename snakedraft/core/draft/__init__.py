"""Draft state machine and pick commit protocol."""

from snakedraft.core.draft.fallback import (
    FALLBACK_CONFIDENCE,
    ValidatedPick,
    best_eligible_player,
    build_fallback_reasoning,
    validate_advice,
)
from snakedraft.core.draft.order import (
    cursor_for,
    next_cursor,
    pick_number_for,
    team_pick_numbers,
    total_picks,
    turn_for,
)
from snakedraft.core.draft.recorder import CommitResult, PickProposal, PickRecorder
from snakedraft.core.draft.roster import (
    assign_slot,
    available_slots,
    can_accept,
    eligible_categories,
    eligible_players,
)
from snakedraft.core.draft.state import (
    initial_board,
    initial_state_items,
    load_settings,
    load_snapshot,
    try_load_snapshot,
)

__all__ = [
    "CommitResult",
    "FALLBACK_CONFIDENCE",
    "PickProposal",
    "PickRecorder",
    "ValidatedPick",
    "assign_slot",
    "available_slots",
    "best_eligible_player",
    "build_fallback_reasoning",
    "can_accept",
    "cursor_for",
    "eligible_categories",
    "eligible_players",
    "initial_board",
    "initial_state_items",
    "load_settings",
    "load_snapshot",
    "next_cursor",
    "pick_number_for",
    "team_pick_numbers",
    "total_picks",
    "try_load_snapshot",
    "turn_for",
    "validate_advice",
]
