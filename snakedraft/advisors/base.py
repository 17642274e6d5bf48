"""
Advisor interface.

An advisor proposes the player a team should draft. Its answer is only a
suggestion: the service validates it against the pool and roster, and the
pick recorder re-validates it against fresh state at commit time.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from snakedraft.core.enums import Position
from snakedraft.core.models import Pick, Player, Roster


# How many eligible players an advisor is shown
CANDIDATE_LIMIT = 25
# Recent picks shown, roughly one round
RECENT_PICK_LIMIT = 12


@dataclass
class AdvisorRequest:
    """Everything an advisor sees when its team is on the clock."""
    draft_id: str
    pick_number: int
    round: int
    team_index: int
    persona: str
    roster: Roster
    eligible_positions: set[Position]
    available: list[Player]
    recent_picks: list[Pick] = field(default_factory=list)
    board_summary: str = ""

    @property
    def candidates(self) -> list[Player]:
        """Eligible players by rank, capped at CANDIDATE_LIMIT."""
        eligible = [p for p in self.available if p.position in self.eligible_positions]
        return sorted(eligible, key=lambda p: p.rank)[:CANDIDATE_LIMIT]


@dataclass
class Advice:
    """An advisor's proposal."""
    player_id: str
    player_name: str
    reasoning: str
    confidence: float = 0.5
    position: Optional[Position] = None


class AdvisorError(Exception):
    """An advisor could not produce a proposal."""
    pass


class Advisor(ABC):
    """Base class for pick advisors."""

    name: str = "advisor"

    @abstractmethod
    async def propose(self, request: AdvisorRequest) -> Advice:
        """
        Propose a pick.

        Raises:
            AdvisorError: if no proposal can be made
        """
