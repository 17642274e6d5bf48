"""
Draft state models.

The pick list, available pool, rosters and turn cursor form one logical
unit. They are read together as a DraftSnapshot and written together by
the pick recorder.
"""

from dataclasses import dataclass, field
from typing import Optional

from snakedraft.core.enums import (
    Archetype,
    DraftPhase,
    Position,
    RosterSlot,
)
from snakedraft.core.models.player import Player


# Roster attribute for each slot
SLOT_ATTRIBUTES: dict[RosterSlot, str] = {
    RosterSlot.QB: "qb",
    RosterSlot.RB: "rb",
    RosterSlot.WR: "wr",
    RosterSlot.TE: "te",
    RosterSlot.SUPERFLEX: "superflex",
}


def default_team_name(team_index: int) -> str:
    return f"Team {team_index + 1}"


@dataclass
class Roster:
    """
    A participant's roster: one dedicated slot per position plus SUPERFLEX.

    Slots are filled once and never reassigned.
    """
    team_index: int
    team_name: str = ""
    qb: Optional[Player] = None
    rb: Optional[Player] = None
    wr: Optional[Player] = None
    te: Optional[Player] = None
    superflex: Optional[Player] = None

    def __post_init__(self) -> None:
        if not self.team_name:
            self.team_name = default_team_name(self.team_index)

    def get_slot(self, slot: RosterSlot) -> Optional[Player]:
        return getattr(self, SLOT_ATTRIBUTES[slot])

    def is_open(self, slot: RosterSlot) -> bool:
        return self.get_slot(slot) is None

    def fill(self, slot: RosterSlot, player: Player) -> None:
        """Place a player in a slot. Raises ValueError if it is already taken."""
        current = self.get_slot(slot)
        if current is not None:
            raise ValueError(
                f"{self.team_name} slot {slot.value} already holds {current.name}"
            )
        setattr(self, SLOT_ATTRIBUTES[slot], player)

    @property
    def players(self) -> list[Player]:
        """Drafted players in slot order."""
        return [p for p in (self.get_slot(s) for s in RosterSlot) if p is not None]

    @property
    def is_full(self) -> bool:
        return all(not self.is_open(slot) for slot in RosterSlot)

    def to_dict(self) -> dict:
        data = {
            "team_index": self.team_index,
            "team_name": self.team_name,
        }
        for slot, attr in SLOT_ATTRIBUTES.items():
            player = self.get_slot(slot)
            data[attr] = player.to_dict() if player else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Roster":
        roster = cls(
            team_index=data["team_index"],
            team_name=data.get("team_name", ""),
        )
        for attr in SLOT_ATTRIBUTES.values():
            if data.get(attr):
                setattr(roster, attr, Player.from_dict(data[attr]))
        return roster


@dataclass(frozen=True)
class Pick:
    """A committed pick. Immutable once recorded."""
    pick_number: int
    round: int
    team_index: int
    player_id: str
    player_name: str
    position: Position
    reasoning: str = ""
    confidence: float = 1.0

    def to_dict(self) -> dict:
        return {
            "pick_number": self.pick_number,
            "round": self.round,
            "team_index": self.team_index,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "position": self.position.value,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Pick":
        return cls(
            pick_number=data["pick_number"],
            round=data["round"],
            team_index=data["team_index"],
            player_id=data["player_id"],
            player_name=data["player_name"],
            position=Position(data["position"]),
            reasoning=data.get("reasoning", ""),
            confidence=data.get("confidence", 1.0),
        )


@dataclass(frozen=True)
class CurrentPick:
    """The turn cursor: who is on the clock."""
    pick_number: int
    round: int
    team_index: int
    is_human: bool = False

    def to_dict(self) -> dict:
        return {
            "pick_number": self.pick_number,
            "round": self.round,
            "team_index": self.team_index,
            "is_human": self.is_human,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CurrentPick":
        return cls(
            pick_number=data["pick_number"],
            round=data["round"],
            team_index=data["team_index"],
            is_human=data.get("is_human", False),
        )


@dataclass(frozen=True)
class DraftSettings:
    """Draft configuration, fixed for the life of a draft."""
    num_teams: int = 8
    num_rounds: int = 5
    human_team_index: Optional[int] = None  # None = all archetype drafters

    @property
    def total_picks(self) -> int:
        return self.num_teams * self.num_rounds

    def is_valid_team(self, team_index: int) -> bool:
        return 0 <= team_index < self.num_teams

    def to_dict(self) -> dict:
        return {
            "num_teams": self.num_teams,
            "num_rounds": self.num_rounds,
            "human_team_index": self.human_team_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DraftSettings":
        return cls(
            num_teams=data.get("num_teams", 8),
            num_rounds=data.get("num_rounds", 5),
            human_team_index=data.get("human_team_index"),
        )


@dataclass
class BoardState:
    """
    Authoritative draft board: pick history plus the turn cursor.

    `version` equals the number of committed picks and is the token
    used to detect concurrent writers.
    """
    draft_id: str
    settings: DraftSettings
    current_pick: CurrentPick
    picks: list[Pick] = field(default_factory=list)
    draft_complete: bool = False

    @property
    def version(self) -> int:
        return len(self.picks)

    @property
    def phase(self) -> DraftPhase:
        if self.draft_complete:
            return DraftPhase.COMPLETED
        if not self.picks:
            return DraftPhase.NOT_STARTED
        return DraftPhase.IN_PROGRESS

    def to_dict(self) -> dict:
        return {
            "draft_id": self.draft_id,
            "settings": self.settings.to_dict(),
            "current_pick": self.current_pick.to_dict(),
            "picks": [p.to_dict() for p in self.picks],
            "draft_complete": self.draft_complete,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BoardState":
        return cls(
            draft_id=data["draft_id"],
            settings=DraftSettings.from_dict(data["settings"]),
            current_pick=CurrentPick.from_dict(data["current_pick"]),
            picks=[Pick.from_dict(p) for p in data.get("picks", [])],
            draft_complete=data.get("draft_complete", False),
        )


@dataclass(frozen=True)
class PersonaAssignment:
    """Archetype assigned to a team slot."""
    team_index: int
    persona: str

    @property
    def is_human(self) -> bool:
        return self.persona == Archetype.HUMAN.value

    def to_dict(self) -> dict:
        return {"team_index": self.team_index, "persona": self.persona}

    @classmethod
    def from_dict(cls, data: dict) -> "PersonaAssignment":
        return cls(team_index=data["team_index"], persona=data["persona"])


@dataclass
class DraftSnapshot:
    """Board, pool, rosters and personas as read together from the store."""
    board: BoardState
    available: list[Player] = field(default_factory=list)
    rosters: list[Roster] = field(default_factory=list)
    personas: list[PersonaAssignment] = field(default_factory=list)

    def roster_for(self, team_index: int) -> Roster:
        for roster in self.rosters:
            if roster.team_index == team_index:
                return roster
        # Lazily treat a missing roster as empty
        return Roster(team_index=team_index)

    def persona_for(self, team_index: int) -> Optional[str]:
        for assignment in self.personas:
            if assignment.team_index == team_index:
                return assignment.persona
        return None

    def find_available(self, player_id: str) -> Optional[Player]:
        for player in self.available:
            if player.player_id == player_id:
                return player
        return None

    def to_dict(self) -> dict:
        return {
            "board": self.board.to_dict(),
            "available_count": len(self.available),
            "rosters": [r.to_dict() for r in self.rosters],
            "personas": [a.to_dict() for a in self.personas],
        }
