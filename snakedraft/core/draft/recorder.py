"""
Pick Recorder.

Commits one pick using optimistic concurrency. A proposal may have been
computed against stale state (an advisor can think for many seconds),
so every commit re-reads the authoritative state, re-validates the
proposal against it, and writes the new state guarded by the board
version it read. No lock is held across the advisor's think time; a
proposal that loses a race is rejected with a conflict and can be
recomputed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from snakedraft.config import DraftConfig, get_config
from snakedraft.core.analysis.board import BoardAnalysis, analyze_board_state
from snakedraft.core.analysis import shifts as shift_rules
from snakedraft.core.draft.order import next_cursor
from snakedraft.core.draft.roster import assign_slot, can_accept, eligible_players
from snakedraft.core.draft.state import load_snapshot, try_load_snapshot
from snakedraft.core.errors import (
    DraftConflictError,
    DraftError,
    DraftExhaustionError,
    DraftValidationError,
)
from snakedraft.core.models import (
    DraftSnapshot,
    Pick,
    ReasoningSummary,
    StrategyShift,
)
from snakedraft.events import (
    DraftCompletedEvent,
    EventBus,
    PickCommittedEvent,
    ShiftDetectedEvent,
)
from snakedraft.storage import KeyValueStore, Precondition, PreconditionFailed, StoreResult
from snakedraft.storage.keys import (
    available_key,
    board_key,
    reasoning_key,
    roster_key,
    shift_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickProposal:
    """
    A candidate pick and the turn cursor it was computed for.

    Untrusted: the recorder re-checks everything against fresh state.
    """
    pick_number: int
    team_index: int
    player_id: str
    reasoning: str = ""
    confidence: float = 1.0
    persona: Optional[str] = None
    advisor: str = "human"
    used_fallback: bool = False


@dataclass
class CommitResult:
    """Outcome of a successful commit."""
    pick: Pick
    snapshot: DraftSnapshot  # State after the commit
    analysis: BoardAnalysis  # Board as it stood before the pick
    shift: Optional[StrategyShift] = None
    message: str = ""
    used_fallback: bool = False

    @property
    def draft_complete(self) -> bool:
        return self.snapshot.board.draft_complete


def _version_matches(expected: int):
    def check(result: StoreResult) -> bool:
        if not result.exists:
            return False
        return (
            len(result.data.get("picks", [])) == expected
            and not result.data.get("draft_complete", False)
        )
    return check


class PickRecorder:
    """Validates proposals against fresh state and commits them."""

    def __init__(
        self,
        store: KeyValueStore,
        bus: Optional[EventBus] = None,
        config: Optional[DraftConfig] = None,
    ) -> None:
        self.store = store
        self.bus = bus
        self.config = config or get_config()

    async def commit(self, draft_id: str, proposal: PickProposal) -> CommitResult:
        """
        Commit a proposal.

        Raises:
            DraftValidationError: malformed proposal
            DraftNotFoundError: no such draft
            DraftConflictError: draft complete, cursor moved, player gone,
                or no slot for the position
            DraftExhaustionError: nothing in the pool fits the roster

        Every error carries the freshest snapshot available.
        """
        try:
            self._precheck(proposal)
        except DraftValidationError as e:
            raise e.with_snapshot(await try_load_snapshot(self.store, draft_id))

        snapshot = await load_snapshot(self.store, draft_id)
        try:
            return await self._commit_fresh(draft_id, proposal, snapshot)
        except DraftError as e:
            raise e.with_snapshot(snapshot)

    def _precheck(self, proposal: PickProposal) -> None:
        if proposal.pick_number < 1:
            raise DraftValidationError(f"Invalid pick number: {proposal.pick_number}")
        if proposal.team_index < 0:
            raise DraftValidationError(f"Invalid team index: {proposal.team_index}")
        confidence = proposal.confidence
        if (
            isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not 0.0 <= confidence <= 1.0
        ):
            raise DraftValidationError(
                f"Confidence must be between 0 and 1, got {proposal.confidence}"
            )
        if not proposal.player_id:
            raise DraftValidationError("player_id is required")
        if not isinstance(proposal.reasoning, str):
            raise DraftValidationError(
                f"Reasoning must be text, got {type(proposal.reasoning).__name__}"
            )

    async def _commit_fresh(
        self,
        draft_id: str,
        proposal: PickProposal,
        snapshot: DraftSnapshot,
    ) -> CommitResult:
        board = snapshot.board
        settings = board.settings
        cursor = board.current_pick

        if not settings.is_valid_team(proposal.team_index):
            raise DraftValidationError(
                f"Invalid team index: {proposal.team_index}. "
                f"Must be 0-{settings.num_teams - 1}."
            )

        if board.draft_complete:
            raise DraftConflictError("Draft is already complete.")

        if (proposal.pick_number, proposal.team_index) != (cursor.pick_number, cursor.team_index):
            logger.warning(
                f"Stale proposal for draft {draft_id}: proposed pick "
                f"#{proposal.pick_number} team {proposal.team_index}, "
                f"on the clock is #{cursor.pick_number} team {cursor.team_index}"
            )
            raise DraftConflictError(
                f"Turn conflict: pick #{cursor.pick_number} belongs to team "
                f"{cursor.team_index}, proposal was for pick #{proposal.pick_number} "
                f"team {proposal.team_index}. Recompute and retry."
            )

        roster = snapshot.roster_for(cursor.team_index)
        if not eligible_players(roster, snapshot.available):
            raise DraftExhaustionError(
                f"No eligible player remains for {roster.team_name} at pick "
                f"#{cursor.pick_number}."
            )

        player = snapshot.find_available(proposal.player_id)
        if player is None:
            raise DraftConflictError(
                f"Player {proposal.player_id} is no longer available. "
                "They may have already been drafted."
            )

        if not can_accept(roster, player.position):
            raise DraftConflictError(
                f"Cannot draft {player.name} ({player.position.value}) - "
                f"no available roster slot for {roster.team_name}."
            )

        # Board and eligibility as they stood before this pick
        analysis = analyze_board_state(
            board.picks, snapshot.available, cursor.pick_number, self.config
        )
        shift_context = shift_rules.build_shift_context(roster, snapshot.available)

        pick = Pick(
            pick_number=cursor.pick_number,
            round=cursor.round,
            team_index=cursor.team_index,
            player_id=player.player_id,
            player_name=player.name,
            position=player.position,
            reasoning=proposal.reasoning,
            confidence=proposal.confidence,
        )

        # Stored assignment wins; the proposal only fills in when none exists
        persona = snapshot.persona_for(cursor.team_index) or proposal.persona or ""
        detection = shift_rules.detect_persona_shift(
            persona, pick, analysis, snapshot.available, shift_context
        )

        # Records are built before the write so nothing can fail after it
        shift = None
        if detection is not None:
            shift = StrategyShift(
                pick_number=pick.pick_number,
                team_index=pick.team_index,
                persona=persona,
                trigger=detection.trigger,
                reasoning=proposal.reasoning,
                player_picked=player.name,
                position=player.position,
                category=detection.category,
                severity=detection.severity,
            )
        summary = ReasoningSummary(
            pick_number=pick.pick_number,
            team_index=pick.team_index,
            persona=persona,
            advisor=proposal.advisor,
            player_id=player.player_id,
            player_name=player.name,
            position=player.position,
            summary=proposal.reasoning,
            board_summary=analysis.summary,
            confidence=proposal.confidence,
            used_fallback=proposal.used_fallback,
        )

        # Apply the transition
        expected_version = board.version
        roster.fill(assign_slot(roster, player.position), player)
        remaining = [p for p in snapshot.available if p.player_id != player.player_id]
        board.picks.append(pick)
        advanced = next_cursor(cursor, settings)
        if advanced is None:
            board.draft_complete = True
        else:
            board.current_pick = advanced

        try:
            await self.store.set_many(
                {
                    board_key(draft_id): board.to_dict(),
                    available_key(draft_id): [p.to_dict() for p in remaining],
                    roster_key(draft_id, cursor.team_index): roster.to_dict(),
                },
                precondition=Precondition(
                    *board_key(draft_id),
                    check=_version_matches(expected_version),
                    description=f"board version {expected_version}",
                ),
            )
        except PreconditionFailed:
            fresh = await try_load_snapshot(self.store, draft_id)
            logger.warning(
                f"Lost commit race for draft {draft_id} pick #{cursor.pick_number}"
            )
            raise DraftConflictError(
                f"Pick #{cursor.pick_number} was committed by another request. "
                "Recompute and retry.",
                snapshot=fresh,
            )

        snapshot.available = remaining

        if shift is not None:
            await self.store.set(*shift_key(draft_id, pick.pick_number), shift.to_dict())
        await self.store.set(*reasoning_key(draft_id, pick.pick_number), summary.to_dict())

        message = (
            f"{roster.team_name} selects {player.name} ({player.position.value}) "
            f"with pick #{pick.pick_number}."
        )
        logger.info(
            f"Draft {draft_id}: {message} persona={persona or 'none'} "
            f"shift={shift.severity.value if shift else 'none'} "
            f"complete={board.draft_complete}"
        )

        self._publish(draft_id, pick, persona, proposal, shift, board.draft_complete, settings.total_picks)

        return CommitResult(
            pick=pick,
            snapshot=snapshot,
            analysis=analysis,
            shift=shift,
            message=message,
            used_fallback=proposal.used_fallback,
        )

    def _publish(
        self,
        draft_id: str,
        pick: Pick,
        persona: str,
        proposal: PickProposal,
        shift: Optional[StrategyShift],
        draft_complete: bool,
        total_picks: int,
    ) -> None:
        if self.bus is None:
            return

        context = {"draft_id": draft_id, "pick_number": pick.pick_number, "round": pick.round}
        events = [PickCommittedEvent(
            **context,
            pick=pick,
            persona=persona,
            used_fallback=proposal.used_fallback,
            draft_complete=draft_complete,
        )]
        if shift is not None:
            events.append(ShiftDetectedEvent(**context, shift=shift))
        if draft_complete:
            events.append(DraftCompletedEvent(**context, total_picks=total_picks))
        self.bus.emit_all(events)
