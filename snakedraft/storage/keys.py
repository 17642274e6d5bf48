"""Store namespaces and per-draft key builders."""

from snakedraft.storage.kv import StoreKey


# Namespaces
KV_DRAFT_STATE = "draft-state"
KV_TEAM_ROSTERS = "team-rosters"
KV_AGENT_STRATEGIES = "agent-strategies"
KV_PICK_REASONING = "pick-reasoning"

# Keys (prefixed with the draft id)
KEY_BOARD_STATE = "board"
KEY_AVAILABLE_PLAYERS = "available-players"
KEY_SETTINGS = "settings"
KEY_PERSONA_ASSIGNMENTS = "persona-assignments"


def draft_key(draft_id: str, name: str) -> str:
    return f"{draft_id}:{name}"


def board_key(draft_id: str) -> StoreKey:
    return KV_DRAFT_STATE, draft_key(draft_id, KEY_BOARD_STATE)


def available_key(draft_id: str) -> StoreKey:
    return KV_DRAFT_STATE, draft_key(draft_id, KEY_AVAILABLE_PLAYERS)


def settings_key(draft_id: str) -> StoreKey:
    return KV_DRAFT_STATE, draft_key(draft_id, KEY_SETTINGS)


def roster_key(draft_id: str, team_index: int) -> StoreKey:
    return KV_TEAM_ROSTERS, draft_key(draft_id, f"team-{team_index}")


def personas_key(draft_id: str) -> StoreKey:
    return KV_AGENT_STRATEGIES, draft_key(draft_id, KEY_PERSONA_ASSIGNMENTS)


def shift_key(draft_id: str, pick_number: int) -> StoreKey:
    return KV_AGENT_STRATEGIES, draft_key(draft_id, f"shift-{pick_number}")


def shift_prefix(draft_id: str) -> str:
    return draft_key(draft_id, "shift-")


def reasoning_key(draft_id: str, pick_number: int) -> StoreKey:
    return KV_PICK_REASONING, draft_key(draft_id, f"pick-{pick_number}")


def reasoning_prefix(draft_id: str) -> str:
    return draft_key(draft_id, "pick-")
