"""Event bus for live draft updates."""

import logging
from collections import defaultdict
from typing import Callable, Iterable, TypeVar

from snakedraft.events.types import DraftEvent

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DraftEvent)
EventHandler = Callable[[DraftEvent], None]


class EventBus:
    """
    Pub/sub bus the draft publishes pick and shift notifications on.

    The draft only produces events; transports (websockets, SSE, logs)
    subscribe here. Events are published after state is committed, so a
    failing subscriber is logged and skipped rather than failing the pick.

    Example:
        bus = EventBus()

        def on_pick(event: PickCommittedEvent):
            print(f"Pick {event.pick.pick_number}: {event.pick.player_name}")

        bus.subscribe(PickCommittedEvent, on_pick)
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DraftEvent], list[EventHandler]] = defaultdict(list)
        self._global_handlers: list[EventHandler] = []

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for one event type."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for every event."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def unsubscribe_all(self, handler: EventHandler) -> None:
        if handler in self._global_handlers:
            self._global_handlers.remove(handler)

    def emit(self, event: DraftEvent) -> None:
        """
        Deliver an event to type-specific handlers, then global handlers.

        Args:
            event: The event to emit
        """
        handlers = list(self._handlers[type(event)]) + list(self._global_handlers)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    f"Event handler {getattr(handler, '__name__', handler)!r} failed "
                    f"on {type(event).__name__} for draft {event.draft_id}"
                )

    def emit_all(self, events: Iterable[DraftEvent]) -> None:
        for event in events:
            self.emit(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        self._global_handlers.clear()

    def handler_count(self, event_type: type[DraftEvent] | None = None) -> int:
        """
        Number of registered handlers.

        With no event type, counts every handler including global ones.
        """
        if event_type is None:
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._global_handlers)
        return len(self._handlers[event_type])
