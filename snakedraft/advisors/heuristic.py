"""
Deterministic advisors.

BestAvailableAdvisor takes the top-ranked eligible player. ArchetypeAdvisor
leans toward its archetype's preferred positions while staying close to
the top of the board.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from snakedraft.advisors.base import Advice, Advisor, AdvisorError, AdvisorRequest
from snakedraft.core.enums import Archetype, Position
from snakedraft.core.models import Player


class BestAvailableAdvisor(Advisor):
    """Always drafts the highest-ranked player that fits."""

    name = "best-available"

    async def propose(self, request: AdvisorRequest) -> Advice:
        candidates = request.candidates
        if not candidates:
            raise AdvisorError(f"No eligible candidates at pick #{request.pick_number}")
        player = candidates[0]
        return Advice(
            player_id=player.player_id,
            player_name=player.name,
            position=player.position,
            reasoning=(
                f"{player.name} ({player.position.value}, Rank {player.rank}) is the "
                "best-ranked player that fits an open slot."
            ),
            confidence=0.6,
        )


@dataclass(frozen=True)
class Preference:
    """When and what an archetype prefers."""
    description: str
    max_round: int
    matches: Callable[[Player], bool]


# Preferred picks must rank within this many spots of the best candidate
PREFERENCE_RANK_WINDOW = 12

ARCHETYPE_PREFERENCES: dict[Archetype, Preference] = {
    Archetype.QB_FIRST: Preference("an early QB", 2, lambda p: p.position == Position.QB),
    Archetype.STUD_RB: Preference("a round-one RB", 1, lambda p: p.position == Position.RB),
    Archetype.ZERO_RB: Preference("anything but RB early", 3, lambda p: p.position != Position.RB),
    Archetype.TE_PREMIUM: Preference(
        "an elite TE", 2, lambda p: p.position == Position.TE and p.tier <= 2
    ),
    Archetype.STACK_BUILDER: Preference(
        "an elite QB to stack around", 2, lambda p: p.position == Position.QB and p.rank <= 18
    ),
    Archetype.YOUTH_MOVEMENT: Preference("young talent", 5, lambda p: p.age < 28),
    Archetype.BOLD: Preference("upside youth", 3, lambda p: p.age < 29),
}


class ArchetypeAdvisor(Advisor):
    """Best available, nudged toward an archetype's preferred players."""

    def __init__(self, archetype: Archetype, preference: Optional[Preference] = None):
        self.archetype = archetype
        self.preference = preference or ARCHETYPE_PREFERENCES.get(archetype)
        self.name = f"archetype:{archetype.value}"

    async def propose(self, request: AdvisorRequest) -> Advice:
        candidates = request.candidates
        if not candidates:
            raise AdvisorError(f"No eligible candidates at pick #{request.pick_number}")

        best = candidates[0]
        pref = self.preference
        if pref is not None and request.round <= pref.max_round:
            in_window = [
                p for p in candidates
                if pref.matches(p) and p.rank - best.rank <= PREFERENCE_RANK_WINDOW
            ]
            if in_window:
                player = in_window[0]
                return Advice(
                    player_id=player.player_id,
                    player_name=player.name,
                    position=player.position,
                    reasoning=(
                        f"{self.archetype.value} plan calls for {pref.description}: "
                        f"{player.name} ({player.position.value}, Rank {player.rank})."
                    ),
                    confidence=0.75,
                )

        return Advice(
            player_id=best.player_id,
            player_name=best.name,
            position=best.position,
            reasoning=(
                f"Taking the board's best fit, {best.name} "
                f"({best.position.value}, Rank {best.rank})."
            ),
            confidence=0.6,
        )
