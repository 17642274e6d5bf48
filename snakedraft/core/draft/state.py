"""
Reading and initializing the draft state unit.

Board, pool, rosters and personas are always read together through
load_snapshot so no caller ever acts on a torn view.
"""

from typing import Optional

from snakedraft.core.draft.order import cursor_for
from snakedraft.core.errors import DraftNotFoundError
from snakedraft.core.models import (
    BoardState,
    DraftSettings,
    DraftSnapshot,
    PersonaAssignment,
    Player,
    Roster,
)
from snakedraft.storage import KeyValueStore, StoreKey
from snakedraft.storage.keys import (
    available_key,
    board_key,
    personas_key,
    roster_key,
    settings_key,
)


async def load_settings(store: KeyValueStore, draft_id: str) -> DraftSettings:
    """Settings never change after start, so they can be read on their own."""
    result = await store.get(*settings_key(draft_id))
    if not result.exists:
        raise DraftNotFoundError(f"No draft in progress with id {draft_id}")
    return DraftSettings.from_dict(result.data)


async def load_snapshot(store: KeyValueStore, draft_id: str) -> DraftSnapshot:
    """Read the full draft state as one consistent view."""
    settings = await load_settings(store, draft_id)

    keys: list[StoreKey] = [
        board_key(draft_id),
        available_key(draft_id),
        personas_key(draft_id),
    ]
    keys.extend(roster_key(draft_id, i) for i in range(settings.num_teams))
    results = await store.get_many(keys)

    board_result = results[board_key(draft_id)]
    if not board_result.exists:
        raise DraftNotFoundError(f"No draft in progress with id {draft_id}")

    available_result = results[available_key(draft_id)]
    personas_result = results[personas_key(draft_id)]

    rosters = []
    for i in range(settings.num_teams):
        result = results[roster_key(draft_id, i)]
        rosters.append(Roster.from_dict(result.data) if result.exists else Roster(team_index=i))

    return DraftSnapshot(
        board=BoardState.from_dict(board_result.data),
        available=[Player.from_dict(p) for p in available_result.data or []],
        rosters=rosters,
        personas=[PersonaAssignment.from_dict(a) for a in personas_result.data or []],
    )


async def try_load_snapshot(store: KeyValueStore, draft_id: str) -> Optional[DraftSnapshot]:
    """Snapshot for error reporting; None if the draft doesn't exist."""
    try:
        return await load_snapshot(store, draft_id)
    except DraftNotFoundError:
        return None


def initial_board(draft_id: str, settings: DraftSettings) -> BoardState:
    return BoardState(
        draft_id=draft_id,
        settings=settings,
        current_pick=cursor_for(1, settings),
    )


def initial_state_items(
    draft_id: str,
    settings: DraftSettings,
    personas: list[PersonaAssignment],
    players: Optional[list[Player]] = None,
) -> dict[StoreKey, object]:
    """
    Every key a freshly created draft writes, ready for set_many.

    The pool is left out when None (the catalog seeder owns that write).
    """
    items: dict[StoreKey, object] = {
        settings_key(draft_id): settings.to_dict(),
        board_key(draft_id): initial_board(draft_id, settings).to_dict(),
        personas_key(draft_id): [a.to_dict() for a in personas],
    }
    if players is not None:
        items[available_key(draft_id)] = [p.to_dict() for p in players]
    for i in range(settings.num_teams):
        items[roster_key(draft_id, i)] = Roster(team_index=i).to_dict()
    return items
