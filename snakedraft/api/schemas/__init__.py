"""Pydantic schemas for API request/response models."""

from snakedraft.api.schemas.draft import (
    AvailablePlayersResponse,
    BoardAnalysisSchema,
    DraftStateSchema,
    ErrorResponse,
    HumanPickRequest,
    PersonaSchema,
    PickResponse,
    PickSchema,
    PlayerSchema,
    PositionFilter,
    ReasoningSchema,
    RosterSchema,
    ShiftSchema,
    StartDraftRequest,
    StartDraftResponse,
    TeamShiftSummarySchema,
)

__all__ = [
    "AvailablePlayersResponse",
    "BoardAnalysisSchema",
    "DraftStateSchema",
    "ErrorResponse",
    "HumanPickRequest",
    "PersonaSchema",
    "PickResponse",
    "PickSchema",
    "PlayerSchema",
    "PositionFilter",
    "ReasoningSchema",
    "RosterSchema",
    "ShiftSchema",
    "StartDraftRequest",
    "StartDraftResponse",
    "TeamShiftSummarySchema",
]
