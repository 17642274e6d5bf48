"""
Deterministic fallback picks and advisor proposal validation.

When an advisor fails, times out or proposes something unusable, the
draft falls back to the best-ranked player that fits an open slot so a
single turn can never stall the draft.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from snakedraft.core.draft.roster import can_accept, eligible_players
from snakedraft.core.errors import DraftExhaustionError
from snakedraft.core.models import Player, Roster


# Confidence recorded for fallback picks
FALLBACK_CONFIDENCE = 0.3


@dataclass(frozen=True)
class ValidatedPick:
    """An advisor proposal resolved to a real, draftable player."""
    player: Player
    match_type: str  # "id" or "name"


def best_eligible_player(roster: Roster, available: Iterable[Player]) -> Player:
    """
    Best-ranked available player that fits an open roster slot.

    Raises DraftExhaustionError if nothing fits.
    """
    candidates = eligible_players(roster, available)
    if not candidates:
        raise DraftExhaustionError(
            f"No eligible player remains for {roster.team_name}"
        )
    return min(candidates, key=lambda p: p.rank)


def build_fallback_reasoning(player: Player, error_context: Optional[str] = None) -> str:
    """Rationale text for a deterministic pick."""
    suffix = f" {error_context}" if error_context else ""
    return (
        f"Fallback pick: {player.name} is the highest-ranked available player "
        f"(Rank {player.rank}) that fits an open roster slot.{suffix}"
    )


def validate_advice(
    player_id: str,
    player_name: str,
    available: list[Player],
    roster: Roster,
) -> Optional[ValidatedPick]:
    """
    Resolve an advisor proposal against the pool and roster.

    Resolution order:
        1. Exact player_id match
        2. Case-insensitive name match
        3. Roster-fit check

    Returns None if the proposal is unusable.
    """
    selected = next((p for p in available if p.player_id == player_id), None)
    match_type = "id"
    if selected is None and player_name:
        wanted = player_name.strip().lower()
        selected = next((p for p in available if p.name.lower() == wanted), None)
        match_type = "name"

    if selected is None or not can_accept(roster, selected.position):
        return None

    return ValidatedPick(player=selected, match_type=match_type)
