"""Simple in-process event bus for decoupled event emission."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

GRAPH_RECOMPUTED = "graph.recomputed"
GRAPH_FETCH_FAILED = "graph.fetch_failed"
MUTATION_STARTED = "mutation.started"
MUTATION_FINISHED = "mutation.finished"
NOTIFICATION = "notification"


class EventBus:
    """Dispatches events to subscribers by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register a callback for an event."""
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Emit an event to all subscribers."""
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)

    def notify(self, title: str, description: str = "", variant: str = "default") -> None:
        """Emit a transient user-facing notification."""
        self.emit(
            NOTIFICATION,
            {"title": title, "description": description, "variant": variant},
        )
