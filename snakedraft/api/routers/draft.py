"""Draft API router - REST endpoints for running drafts."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from snakedraft.api.schemas.draft import (
    AvailablePlayersResponse,
    BoardAnalysisSchema,
    DraftStateSchema,
    ErrorResponse,
    HumanPickRequest,
    PersonaSchema,
    PickResponse,
    PlayerSchema,
    PositionFilter,
    ReasoningSchema,
    ShiftSchema,
    StartDraftRequest,
    StartDraftResponse,
    TeamShiftSummarySchema,
)
from snakedraft.api.services.draft_service import DraftService, get_draft_service
from snakedraft.core.enums import Position

router = APIRouter(
    prefix="/drafts",
    tags=["draft"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    },
)

MAX_AVAILABLE_LIMIT = 150


@router.post("", response_model=StartDraftResponse, status_code=status.HTTP_201_CREATED)
async def start_draft(
    request: Optional[StartDraftRequest] = None,
    service: DraftService = Depends(get_draft_service),
) -> StartDraftResponse:
    """
    Start a new draft.

    Fetches the player catalog, assigns personas and opens pick #1.
    """
    request = request or StartDraftRequest()
    snapshot = await service.start_draft(
        human_team_index=request.human_team_index,
        num_teams=request.num_teams,
        num_rounds=request.num_rounds,
    )
    settings = snapshot.board.settings
    human = (
        f" Human is Team {settings.human_team_index + 1}."
        if settings.human_team_index is not None else ""
    )
    return StartDraftResponse(
        message=(
            f"Draft started. {settings.num_teams} teams, {settings.num_rounds} rounds, "
            f"{settings.total_picks} total picks.{human} Personas assigned."
        ),
        state=DraftStateSchema.from_model(snapshot),
        personas=[PersonaSchema(**a.to_dict()) for a in snapshot.personas],
    )


@router.get("/{draft_id}", response_model=DraftStateSchema)
async def get_draft(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> DraftStateSchema:
    """Get board, rosters and pool size."""
    return DraftStateSchema.from_model(await service.get_state(draft_id))


@router.get("/{draft_id}/available", response_model=AvailablePlayersResponse)
async def get_available(
    draft_id: str,
    position: Optional[PositionFilter] = None,
    team_index: Optional[int] = Query(default=None, ge=0),
    limit: int = Query(default=50, ge=1, le=MAX_AVAILABLE_LIMIT),
    service: DraftService = Depends(get_draft_service),
) -> AvailablePlayersResponse:
    """
    List available players by rank.

    With team_index, only players that team can still draft.
    """
    players = await service.get_available(
        draft_id,
        position=Position(position.value) if position else None,
        team_index=team_index,
    )
    return AvailablePlayersResponse(
        players=[PlayerSchema.from_model(p) for p in players[:limit]],
        total=len(players),
    )


@router.post("/{draft_id}/advance", response_model=PickResponse)
async def advance(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> PickResponse:
    """Make the pick for the archetype team on the clock."""
    return PickResponse.from_result(await service.advance(draft_id))


@router.post("/{draft_id}/pick", response_model=PickResponse)
async def human_pick(
    draft_id: str,
    request: HumanPickRequest,
    service: DraftService = Depends(get_draft_service),
) -> PickResponse:
    """Record the human team's pick."""
    result = await service.human_pick(draft_id, request.player_id, request.pick_number)
    return PickResponse.from_result(result)


@router.get("/{draft_id}/personas", response_model=list[PersonaSchema])
async def get_personas(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> list[PersonaSchema]:
    return [PersonaSchema(**a.to_dict()) for a in await service.get_personas(draft_id)]


@router.get("/{draft_id}/shifts", response_model=list[ShiftSchema])
async def get_shifts(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> list[ShiftSchema]:
    """Strategy shifts detected so far, by pick number."""
    return [ShiftSchema.from_model(s) for s in await service.get_shifts(draft_id)]


@router.get("/{draft_id}/shifts/summary", response_model=list[TeamShiftSummarySchema])
async def get_shift_summary(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> list[TeamShiftSummarySchema]:
    """Per-team shift rollup."""
    summaries = await service.get_shift_summary(draft_id)
    return [TeamShiftSummarySchema.from_model(s) for s in summaries]


@router.get("/{draft_id}/reasoning", response_model=list[ReasoningSchema])
async def get_reasoning(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> list[ReasoningSchema]:
    """Per-pick rationale and board summary."""
    return [ReasoningSchema.from_model(r) for r in await service.get_reasoning(draft_id)]


@router.get("/{draft_id}/analysis", response_model=BoardAnalysisSchema)
async def get_analysis(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
) -> BoardAnalysisSchema:
    """Board signals as of the current pick."""
    state = await service.get_state(draft_id)
    analysis = await service.get_analysis(draft_id)
    return BoardAnalysisSchema.from_model(analysis, state.board.current_pick.pick_number)
