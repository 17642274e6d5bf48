"""Event types published as a draft progresses."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from snakedraft.core.models import Pick, StrategyShift


@dataclass
class DraftEvent:
    """Base class for all draft events."""

    timestamp: datetime = field(default_factory=datetime.now)
    draft_id: str = ""

    # Board context at time of event
    pick_number: int = 0
    round: int = 0


@dataclass
class DraftStartedEvent(DraftEvent):
    """Fired when a draft is created and seeded."""

    num_teams: int = 0
    num_rounds: int = 0
    human_team_index: Optional[int] = None
    pool_size: int = 0


@dataclass
class PickCommittedEvent(DraftEvent):
    """Fired after a pick is durably committed."""

    pick: "Pick" = None
    persona: str = ""
    used_fallback: bool = False
    draft_complete: bool = False


@dataclass
class ShiftDetectedEvent(DraftEvent):
    """Fired when a committed pick deviated from its persona."""

    shift: "StrategyShift" = None


@dataclass
class DraftCompletedEvent(DraftEvent):
    """Fired when the final pick is committed."""

    total_picks: int = 0
