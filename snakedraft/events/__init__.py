"""Event system for live draft updates."""

from snakedraft.events.bus import EventBus
from snakedraft.events.types import (
    DraftCompletedEvent,
    DraftEvent,
    DraftStartedEvent,
    PickCommittedEvent,
    ShiftDetectedEvent,
)

__all__ = [
    "DraftCompletedEvent",
    "DraftEvent",
    "DraftStartedEvent",
    "EventBus",
    "PickCommittedEvent",
    "ShiftDetectedEvent",
]
