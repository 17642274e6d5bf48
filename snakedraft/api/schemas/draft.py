"""Pydantic schemas for draft requests and responses."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from snakedraft.config import MAX_ROUNDS, MAX_TEAMS, MIN_TEAMS


# === Requests ===


class PositionFilter(str, Enum):
    """Position filter for player listings."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"


class StartDraftRequest(BaseModel):
    """Start a new draft."""

    human_team_index: Optional[int] = Field(default=None, ge=0)
    num_teams: Optional[int] = Field(default=None, ge=MIN_TEAMS, le=MAX_TEAMS)
    num_rounds: Optional[int] = Field(default=None, ge=1, le=MAX_ROUNDS)


class HumanPickRequest(BaseModel):
    """The human team's selection."""

    player_id: str = Field(..., min_length=1)
    pick_number: Optional[int] = Field(default=None, ge=1)


# === Models ===


class PlayerSchema(BaseModel):
    """A draftable player."""

    player_id: str
    name: str
    position: str
    team: str
    rank: int
    tier: int
    age: int
    bye_week: int

    @classmethod
    def from_model(cls, player) -> "PlayerSchema":
        """Create from Player model."""
        return cls(**player.to_dict())


class RosterSchema(BaseModel):
    """One team's roster, slot by slot."""

    team_index: int
    team_name: str
    qb: Optional[PlayerSchema] = None
    rb: Optional[PlayerSchema] = None
    wr: Optional[PlayerSchema] = None
    te: Optional[PlayerSchema] = None
    superflex: Optional[PlayerSchema] = None
    is_full: bool = False

    @classmethod
    def from_model(cls, roster) -> "RosterSchema":
        """Create from Roster model."""

        def slot(player):
            return PlayerSchema.from_model(player) if player else None

        return cls(
            team_index=roster.team_index,
            team_name=roster.team_name,
            qb=slot(roster.qb),
            rb=slot(roster.rb),
            wr=slot(roster.wr),
            te=slot(roster.te),
            superflex=slot(roster.superflex),
            is_full=roster.is_full,
        )


class PickSchema(BaseModel):
    """A committed pick."""

    pick_number: int
    round: int
    team_index: int
    player_id: str
    player_name: str
    position: str
    reasoning: str = ""
    confidence: float = 1.0

    @classmethod
    def from_model(cls, pick) -> "PickSchema":
        return cls(**pick.to_dict())


class CurrentPickSchema(BaseModel):
    """Who is on the clock."""

    pick_number: int
    round: int
    team_index: int
    is_human: bool


class SettingsSchema(BaseModel):
    num_teams: int
    num_rounds: int
    human_team_index: Optional[int] = None
    total_picks: int


class PersonaSchema(BaseModel):
    team_index: int
    persona: str


class DraftStateSchema(BaseModel):
    """Board, rosters and pool size."""

    draft_id: str
    phase: str
    version: int
    settings: SettingsSchema
    current_pick: CurrentPickSchema
    picks: list[PickSchema]
    draft_complete: bool
    rosters: list[RosterSchema]
    available_count: int

    @classmethod
    def from_model(cls, snapshot) -> "DraftStateSchema":
        """Create from DraftSnapshot."""
        board = snapshot.board
        return cls(
            draft_id=board.draft_id,
            phase=board.phase.value,
            version=board.version,
            settings=SettingsSchema(
                total_picks=board.settings.total_picks,
                **board.settings.to_dict(),
            ),
            current_pick=CurrentPickSchema(**board.current_pick.to_dict()),
            picks=[PickSchema.from_model(p) for p in board.picks],
            draft_complete=board.draft_complete,
            rosters=[RosterSchema.from_model(r) for r in snapshot.rosters],
            available_count=len(snapshot.available),
        )


class StartDraftResponse(BaseModel):
    """A newly started draft."""

    message: str
    state: DraftStateSchema
    personas: list[PersonaSchema]


class ShiftSchema(BaseModel):
    """A detected strategy shift."""

    pick_number: int
    team_index: int
    persona: str
    trigger: str
    reasoning: str
    player_picked: str
    position: str
    category: str
    severity: str

    @classmethod
    def from_model(cls, shift) -> "ShiftSchema":
        return cls(**shift.to_dict())


class PickResponse(BaseModel):
    """Result of an advance or human pick."""

    message: str
    pick: PickSchema
    shift: Optional[ShiftSchema] = None
    used_fallback: bool = False
    draft_complete: bool
    state: DraftStateSchema

    @classmethod
    def from_result(cls, result) -> "PickResponse":
        return cls(
            message=result.message,
            pick=PickSchema.from_model(result.pick),
            shift=ShiftSchema.from_model(result.shift) if result.shift else None,
            used_fallback=result.used_fallback,
            draft_complete=result.draft_complete,
            state=DraftStateSchema.from_model(result.snapshot),
        )


class AvailablePlayersResponse(BaseModel):
    players: list[PlayerSchema]
    total: int


class TeamShiftSummarySchema(BaseModel):
    team_index: int
    total_shifts: int
    last3_team_picks_shift_count: int
    major_shift_count: int
    top_category: Optional[str] = None

    @classmethod
    def from_model(cls, summary) -> "TeamShiftSummarySchema":
        return cls(**summary.to_dict())


class PositionRunSchema(BaseModel):
    position: str
    count: int
    window: int


class ValueDropSchema(BaseModel):
    player: PlayerSchema
    adp_diff: int


class ScarcitySchema(BaseModel):
    position: str
    remaining: int


class BoardAnalysisSchema(BaseModel):
    """Board signals as of the current pick."""

    pick_number: int
    position_runs: list[PositionRunSchema]
    value_drops: list[ValueDropSchema]
    scarcity: list[ScarcitySchema]
    summary: str

    @classmethod
    def from_model(cls, analysis, pick_number: int) -> "BoardAnalysisSchema":
        return cls(pick_number=pick_number, **analysis.to_dict())


class ReasoningSchema(BaseModel):
    """Audit record for one pick."""

    pick_number: int
    team_index: int
    persona: str
    advisor: str
    player_id: str
    player_name: str
    position: str
    summary: str
    board_summary: str
    confidence: float
    used_fallback: bool
    timestamp: float

    @classmethod
    def from_model(cls, summary) -> "ReasoningSchema":
        return cls(**summary.to_dict())


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str
    state: Optional[DraftStateSchema] = None
