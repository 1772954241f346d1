"""Mutation UI state for the dependency view."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MutationState(str, Enum):
    idle = "idle"
    adding = "adding"
    removing = "removing"


@dataclass
class RuntimeState:
    """Mutable in-memory state for one dependency view."""

    mutation: MutationState = MutationState.idle
    selected_task_id: str | None = None
    last_error: str | None = None


class StateManager:
    """Wraps mutation state and enforces one in-flight mutation at a time."""

    def __init__(self) -> None:
        self.state = RuntimeState()

    @property
    def is_busy(self) -> bool:
        return self.state.mutation is not MutationState.idle

    def begin(self, mutation: MutationState) -> bool:
        """Enter ``mutation`` if idle. Returns False when another one is pending."""
        if self.is_busy:
            return False
        self.state.mutation = mutation
        self.state.last_error = None
        return True

    def finish(self, error: str | None = None) -> None:
        self.state.mutation = MutationState.idle
        self.state.last_error = error

    def select(self, task_id: str | None) -> None:
        self.state.selected_task_id = task_id or None

    def clear_selection(self) -> None:
        self.state.selected_task_id = None
