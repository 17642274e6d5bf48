"""Shared pytest fixtures for snakedraft tests."""

import random
from typing import Optional

import pytest

from snakedraft.api.services.draft_service import DraftService
from snakedraft.catalog import StaticCatalogSource
from snakedraft.config import DraftConfig
from snakedraft.core.draft import initial_state_items, turn_for
from snakedraft.core.enums import Position
from snakedraft.core.models import (
    DraftSettings,
    PersonaAssignment,
    Pick,
    Player,
    Roster,
)
from snakedraft.events import EventBus
from snakedraft.storage import InMemoryKeyValueStore


POSITION_CYCLE = [Position.QB, Position.RB, Position.WR, Position.TE]
TEAMS = ["KC", "BUF", "PHI", "DAL", "SF", "MIA", "DET", "CIN"]


# =============================================================================
# Builders
# =============================================================================


def make_player(
    rank: int,
    position: Position,
    age: int = 25,
    player_id: Optional[str] = None,
    name: Optional[str] = None,
    team: str = "KC",
) -> Player:
    return Player(
        player_id=player_id or f"p{rank}",
        name=name or f"Player {rank}",
        position=position,
        rank=rank,
        team=team,
        age=age,
    )


def make_pick(pick_number: int, player: Player, num_teams: int = 8) -> Pick:
    round_num, team_index = turn_for(pick_number, num_teams)
    return Pick(
        pick_number=pick_number,
        round=round_num,
        team_index=team_index,
        player_id=player.player_id,
        player_name=player.name,
        position=player.position,
    )


def make_pool(size: int = 150) -> list[Player]:
    """Ranked pool cycling QB, RB, WR, TE."""
    return [
        make_player(
            rank,
            POSITION_CYCLE[(rank - 1) % 4],
            age=22 + rank % 10,
            team=TEAMS[rank % len(TEAMS)],
        )
        for rank in range(1, size + 1)
    ]


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def player_factory():
    return make_player


@pytest.fixture
def pick_factory():
    return make_pick


@pytest.fixture
def player_pool() -> list[Player]:
    """150 players ranked 1..150."""
    return make_pool()


@pytest.fixture
def empty_roster() -> Roster:
    return Roster(team_index=0)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def config() -> DraftConfig:
    return DraftConfig(
        num_teams=8,
        num_rounds=5,
        catalog_source="static",
        advisor_timeout_seconds=1.0,
        log_level="INFO",
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def draft_factory(store, player_pool):
    """
    Write a fresh draft straight into the store.

    Returns an async function; every team defaults to the balanced persona.
    """

    async def create(
        draft_id: str = "draft-1",
        num_teams: int = 8,
        num_rounds: int = 5,
        human_team_index: Optional[int] = None,
        personas: Optional[list[str]] = None,
        players: Optional[list[Player]] = None,
    ) -> str:
        settings = DraftSettings(
            num_teams=num_teams,
            num_rounds=num_rounds,
            human_team_index=human_team_index,
        )
        names = personas or ["balanced"] * num_teams
        assignments = [PersonaAssignment(team_index=i, persona=p) for i, p in enumerate(names)]
        pool = player_pool if players is None else players
        await store.set_many(initial_state_items(draft_id, settings, assignments, pool))
        return draft_id

    return create


@pytest.fixture
def service(store, bus, config, player_pool) -> DraftService:
    """Draft service on the in-memory store with a static catalog."""
    return DraftService(
        store=store,
        bus=bus,
        config=config,
        source=StaticCatalogSource(player_pool),
        rng=random.Random(42),
    )
