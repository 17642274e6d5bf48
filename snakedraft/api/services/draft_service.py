"""
Draft service (the commissioner).

Runs drafts on top of the core: starts them, asks advisors for picks,
falls back when an advisor fails, and hands every proposal to the pick
recorder. All state lives in the key-value store keyed by draft id, so
one service instance serves any number of drafts.
"""

import asyncio
import logging
import math
import random
from typing import Optional
from uuid import uuid4

from snakedraft.advisors import AdvisorRegistry, AdvisorRequest, default_registry
from snakedraft.advisors.base import RECENT_PICK_LIMIT
from snakedraft.catalog import (
    CatalogSeeder,
    CatalogSource,
    SleeperCatalogSource,
    StaticCatalogSource,
    generate_pool,
)
from snakedraft.config import MAX_ROUNDS, MAX_TEAMS, MIN_TEAMS, DraftConfig, get_config
from snakedraft.core.analysis import BoardAnalysis, analyze_board_state, summarize_shifts
from snakedraft.core.draft import (
    FALLBACK_CONFIDENCE,
    CommitResult,
    PickProposal,
    PickRecorder,
    best_eligible_player,
    build_fallback_reasoning,
    eligible_categories,
    eligible_players,
    initial_state_items,
    load_snapshot,
    validate_advice,
)
from snakedraft.core.enums import Position
from snakedraft.core.errors import DraftConflictError, DraftExhaustionError, DraftValidationError
from snakedraft.core.models import (
    DraftSettings,
    DraftSnapshot,
    PersonaAssignment,
    Player,
    ReasoningSummary,
    StrategyShift,
    TeamShiftSummary,
)
from snakedraft.core.personas import assign_personas
from snakedraft.events import DraftStartedEvent, EventBus
from snakedraft.storage import InMemoryKeyValueStore, KeyValueStore
from snakedraft.storage.keys import (
    KV_AGENT_STRATEGIES,
    KV_PICK_REASONING,
    reasoning_prefix,
    shift_prefix,
)

logger = logging.getLogger(__name__)

HUMAN_PICK_REASONING = "Human selection"


def _advice_problem(advice) -> Optional[str]:
    """Why an advisor's confidence or reasoning can't be recorded, if it can't."""
    confidence = advice.confidence
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return f"non-numeric confidence {confidence!r}"
    if not math.isfinite(confidence):
        return f"non-finite confidence {confidence!r}"
    if not isinstance(advice.reasoning, str):
        return f"reasoning of type {type(advice.reasoning).__name__}"
    return None


def build_catalog_source(config: DraftConfig) -> CatalogSource:
    """Catalog source named by the config."""
    if config.catalog_source == "static":
        return StaticCatalogSource(generate_pool(config.catalog_size, seed=0))
    return SleeperCatalogSource(config.sleeper_url, timeout=config.http_timeout_seconds)


class DraftService:
    """Service for running drafts."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        bus: Optional[EventBus] = None,
        config: Optional[DraftConfig] = None,
        source: Optional[CatalogSource] = None,
        advisors: Optional[AdvisorRegistry] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or get_config()
        self.store = store or InMemoryKeyValueStore()
        self.bus = bus or EventBus()
        self.seeder = CatalogSeeder(
            self.store,
            source or build_catalog_source(self.config),
            size=self.config.catalog_size,
        )
        self.advisors = advisors or default_registry()
        self.rng = rng or random.Random()
        self.recorder = PickRecorder(self.store, self.bus, self.config)

    # === Lifecycle ===

    async def start_draft(
        self,
        human_team_index: Optional[int] = None,
        num_teams: Optional[int] = None,
        num_rounds: Optional[int] = None,
    ) -> DraftSnapshot:
        """
        Create and seed a new draft.

        Raises:
            DraftValidationError: bad team/round counts or human slot
            CatalogError: the catalog could not be fetched (nothing is created)
        """
        settings = DraftSettings(
            num_teams=num_teams or self.config.num_teams,
            num_rounds=num_rounds or self.config.num_rounds,
            human_team_index=human_team_index,
        )
        if not MIN_TEAMS <= settings.num_teams <= MAX_TEAMS:
            raise DraftValidationError(
                f"Invalid num_teams: {settings.num_teams}. Must be {MIN_TEAMS}-{MAX_TEAMS}."
            )
        if not 1 <= settings.num_rounds <= MAX_ROUNDS:
            raise DraftValidationError(
                f"Invalid num_rounds: {settings.num_rounds}. Must be 1-{MAX_ROUNDS}."
            )
        if human_team_index is not None and not settings.is_valid_team(human_team_index):
            raise DraftValidationError(
                f"Invalid human_team_index: {human_team_index}. "
                f"Must be 0-{settings.num_teams - 1}."
            )

        draft_id = uuid4().hex
        # Pool first: a failed fetch leaves no half-created draft behind
        players = await self.seeder.ensure_seeded(draft_id)

        personas = assign_personas(settings.num_teams, human_team_index, rng=self.rng)
        await self.store.set_many(initial_state_items(draft_id, settings, personas))

        logger.info(
            f"Started draft {draft_id}: {settings.num_teams} teams, "
            f"{settings.num_rounds} rounds, {settings.total_picks} picks, "
            f"{len(players)} players, human={human_team_index}"
        )
        self.bus.emit(DraftStartedEvent(
            draft_id=draft_id,
            pick_number=1,
            round=1,
            num_teams=settings.num_teams,
            num_rounds=settings.num_rounds,
            human_team_index=human_team_index,
            pool_size=len(players),
        ))
        return await load_snapshot(self.store, draft_id)

    # === Picks ===

    async def advance(self, draft_id: str) -> CommitResult:
        """
        Make the pick for the archetype team on the clock.

        The advisor is given `advisor_timeout_seconds`; on timeout, error
        or an unusable proposal the best eligible player is taken instead.
        """
        snapshot = await load_snapshot(self.store, draft_id)
        board = snapshot.board
        cursor = board.current_pick

        if board.draft_complete:
            raise DraftConflictError("Draft is already complete.", snapshot=snapshot)
        if cursor.is_human:
            raise DraftConflictError(
                f"It is the human player's turn (Team {cursor.team_index + 1}, "
                f"pick #{cursor.pick_number}). Use the pick endpoint instead.",
                snapshot=snapshot,
            )

        roster = snapshot.roster_for(cursor.team_index)
        if not eligible_players(roster, snapshot.available):
            raise DraftExhaustionError(
                f"No eligible player remains for {roster.team_name} at pick "
                f"#{cursor.pick_number}.",
                snapshot=snapshot,
            )

        persona = snapshot.persona_for(cursor.team_index) or ""
        analysis = analyze_board_state(board.picks, snapshot.available, cursor.pick_number, self.config)
        advisor = self.advisors.get(persona)

        request = AdvisorRequest(
            draft_id=draft_id,
            pick_number=cursor.pick_number,
            round=cursor.round,
            team_index=cursor.team_index,
            persona=persona,
            roster=roster,
            eligible_positions=eligible_categories(roster),
            available=list(snapshot.available),
            recent_picks=board.picks[-RECENT_PICK_LIMIT:],
            board_summary=analysis.summary,
        )

        error_context = None
        validated = None
        try:
            advice = await asyncio.wait_for(
                advisor.propose(request), timeout=self.config.advisor_timeout_seconds
            )
        except asyncio.TimeoutError:
            error_context = f"(Advisor {advisor.name} timed out.)"
        except Exception as e:
            error_context = f"(Advisor {advisor.name} failed: {e})"
        else:
            validated = validate_advice(
                advice.player_id, advice.player_name, snapshot.available, roster
            )
            if validated is None:
                error_context = (
                    f"(Advisor {advisor.name} proposed an unusable player: "
                    f"{advice.player_name or advice.player_id})"
                )
            else:
                problem = _advice_problem(advice)
                if problem is not None:
                    validated = None
                    error_context = f"(Advisor {advisor.name} returned unusable advice: {problem})"

        if validated is not None:
            proposal = PickProposal(
                pick_number=cursor.pick_number,
                team_index=cursor.team_index,
                player_id=validated.player.player_id,
                reasoning=advice.reasoning,
                confidence=min(max(advice.confidence, 0.0), 1.0),
                persona=persona,
                advisor=advisor.name,
            )
        else:
            logger.warning(
                f"Draft {draft_id} pick #{cursor.pick_number}: using fallback {error_context}"
            )
            player = best_eligible_player(roster, snapshot.available)
            proposal = PickProposal(
                pick_number=cursor.pick_number,
                team_index=cursor.team_index,
                player_id=player.player_id,
                reasoning=build_fallback_reasoning(player, error_context),
                confidence=FALLBACK_CONFIDENCE,
                persona=persona,
                advisor=advisor.name,
                used_fallback=True,
            )

        return await self.recorder.commit(draft_id, proposal)

    async def human_pick(
        self,
        draft_id: str,
        player_id: str,
        pick_number: Optional[int] = None,
    ) -> CommitResult:
        """
        Record the human team's pick.

        `pick_number` pins the pick the client believes is current; when
        omitted the current cursor is used.
        """
        if not player_id:
            raise DraftValidationError("player_id is required")

        snapshot = await load_snapshot(self.store, draft_id)
        board = snapshot.board
        cursor = board.current_pick

        if board.draft_complete:
            raise DraftConflictError("Draft is already complete.", snapshot=snapshot)
        if not cursor.is_human:
            raise DraftConflictError(
                f"It is not the human's turn. Team {cursor.team_index + 1} is on the "
                f"clock at pick #{cursor.pick_number}. Use advance instead.",
                snapshot=snapshot,
            )

        logger.info(f"Draft {draft_id}: human pick {player_id} at #{cursor.pick_number}")
        return await self.recorder.commit(draft_id, PickProposal(
            pick_number=pick_number if pick_number is not None else cursor.pick_number,
            team_index=cursor.team_index,
            player_id=player_id,
            reasoning=HUMAN_PICK_REASONING,
            confidence=1.0,
        ))

    # === Reads ===

    async def get_state(self, draft_id: str) -> DraftSnapshot:
        return await load_snapshot(self.store, draft_id)

    async def get_available(
        self,
        draft_id: str,
        position: Optional[Position] = None,
        team_index: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Player]:
        """
        Available players by rank.

        With a team index, only players that team can still draft.
        """
        snapshot = await load_snapshot(self.store, draft_id)
        players = snapshot.available
        if team_index is not None:
            if not snapshot.board.settings.is_valid_team(team_index):
                raise DraftValidationError(
                    f"Invalid team index: {team_index}", snapshot=snapshot
                )
            players = eligible_players(snapshot.roster_for(team_index), players)
        if position is not None:
            players = [p for p in players if p.position == position]
        players = sorted(players, key=lambda p: p.rank)
        return players[:limit] if limit is not None else players

    async def get_personas(self, draft_id: str) -> list[PersonaAssignment]:
        snapshot = await load_snapshot(self.store, draft_id)
        return snapshot.personas

    async def get_shifts(self, draft_id: str) -> list[StrategyShift]:
        """All detected shifts, by pick number."""
        await load_snapshot(self.store, draft_id)
        keys = await self.store.keys(KV_AGENT_STRATEGIES, shift_prefix(draft_id))
        results = await self.store.get_many((KV_AGENT_STRATEGIES, k) for k in keys)
        shifts = [StrategyShift.from_dict(r.data) for r in results.values() if r.exists]
        return sorted(shifts, key=lambda s: s.pick_number)

    async def get_shift_summary(self, draft_id: str) -> list[TeamShiftSummary]:
        snapshot = await load_snapshot(self.store, draft_id)
        shifts = await self.get_shifts(draft_id)
        return summarize_shifts(shifts, snapshot.board.picks, snapshot.board.settings.num_teams)

    async def get_reasoning(self, draft_id: str) -> list[ReasoningSummary]:
        """Per-pick audit trail, by pick number."""
        await load_snapshot(self.store, draft_id)
        keys = await self.store.keys(KV_PICK_REASONING, reasoning_prefix(draft_id))
        results = await self.store.get_many((KV_PICK_REASONING, k) for k in keys)
        summaries = [ReasoningSummary.from_dict(r.data) for r in results.values() if r.exists]
        return sorted(summaries, key=lambda s: s.pick_number)

    async def get_analysis(self, draft_id: str) -> BoardAnalysis:
        """Board signals as of the current pick."""
        snapshot = await load_snapshot(self.store, draft_id)
        board = snapshot.board
        return analyze_board_state(
            board.picks, snapshot.available, board.current_pick.pick_number, self.config
        )


# Service instance used by the API
_service: Optional[DraftService] = None


def get_draft_service() -> DraftService:
    """Get the API's draft service, creating it on first use."""
    global _service
    if _service is None:
        _service = DraftService()
    return _service


def reset_draft_service() -> None:
    global _service
    _service = None
