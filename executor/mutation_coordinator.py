"""Serialized add/remove of dependency edges against the Dependency Store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from core.event_bus import MUTATION_FINISHED, MUTATION_STARTED, EventBus
from core.state_manager import MutationState, StateManager
from governance.audit_logger import AuditLogger
from planner.types import Dependency, DependencyType, TaskRef
from store.base_store import DependencyStore
from store.errors import StoreError

logger = logging.getLogger("depgraph.mutations")

ADD_ACTION = "add_dependency"
REMOVE_ACTION = "remove_dependency"
NOT_LOADED = "Dependencies are not loaded; retry before changing them."


class GraphSource(Protocol):
    """What the coordinator needs from the view that owns it."""

    focal_task_id: str

    def current_dependencies(self) -> list[Dependency]: ...

    def known_tasks(self) -> list[TaskRef]: ...

    def refresh(self) -> None: ...

    def is_loaded(self) -> bool: ...


@dataclass
class MutationResult:
    """Outcome of one add/remove attempt."""

    success: bool
    action: str
    outcome: str
    dependency: Dependency | None = None
    error: str = ""


def depended_upon(dependencies: Iterable[Dependency], focal_task_id: str) -> set[str]:
    """Ids the focal task already depends on directly."""
    return {dep.depends_on_task_id for dep in dependencies if dep.task_id == focal_task_id}


def candidate_tasks(
    known_tasks: Iterable[TaskRef],
    dependencies: Iterable[Dependency],
    focal_task_id: str,
) -> list[TaskRef]:
    """Known tasks minus the focal task minus tasks it already depends on.

    Only direct self-loops and duplicates are filtered; longer cycles are not.
    """
    taken = depended_upon(dependencies, focal_task_id)
    return [task for task in known_tasks if task.id != focal_task_id and task.id not in taken]


class MutationCoordinator:
    """Runs one mutation at a time and refreshes the graph after success.

    Nothing is applied locally before the store confirms: the displayed graph
    only changes through ``source.refresh()``.
    """

    def __init__(
        self,
        store: DependencyStore,
        source: GraphSource,
        event_bus: EventBus,
        state: StateManager | None = None,
        audit_logger: AuditLogger | None = None,
        dependency_type: DependencyType | str = DependencyType.blocks,
    ) -> None:
        self.store = store
        self.source = source
        self.event_bus = event_bus
        self.state = state or StateManager()
        self.audit_logger = audit_logger
        self.dependency_type = DependencyType(dependency_type)

    @property
    def mutation_state(self) -> MutationState:
        return self.state.state.mutation

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    @property
    def selected_task_id(self) -> str | None:
        return self.state.state.selected_task_id

    def candidates(self) -> list[TaskRef]:
        return candidate_tasks(
            self.source.known_tasks(),
            self.source.current_dependencies(),
            self.source.focal_task_id,
        )

    def select(self, task_id: str | None) -> None:
        self.state.select(task_id)

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def add_dependency(self, depends_on_task_id: str | None = None) -> MutationResult:
        """Make the focal task depend on ``depends_on_task_id`` (or the selection)."""
        focal = self.source.focal_task_id
        target = depends_on_task_id or self.selected_task_id
        inputs = {"depends_on_task_id": target, "dependency_type": self.dependency_type.value}

        reason = self._precondition_failure(focal, target)
        if reason:
            return self._reject(ADD_ACTION, focal, inputs, reason)

        if not self.state.begin(MutationState.adding):
            return self._reject(ADD_ACTION, focal, inputs, "Another dependency change is in progress.")
        self.event_bus.emit(MUTATION_STARTED, {"action": ADD_ACTION, "task_id": focal, **inputs})
        try:
            try:
                created = self.store.create_dependency(focal, target, self.dependency_type)
            except StoreError as exc:
                self.state.clear_selection()
                return self._failed(ADD_ACTION, focal, inputs, exc, "Could not add the dependency")
            self.state.clear_selection()
            self._audit(ADD_ACTION, focal, inputs, "success", True)
            logger.info("Added dependency %s: %s depends on %s", created.id, focal, target)
            self.source.refresh()
        finally:
            self.state.finish(self.state.state.last_error)
            self.event_bus.emit(MUTATION_FINISHED, {"action": ADD_ACTION, "task_id": focal})
        self.event_bus.notify("Dependency added")
        return MutationResult(success=True, action=ADD_ACTION, outcome="added", dependency=created)

    def remove_dependency(self, dependency_id: str) -> MutationResult:
        """Delete one displayed edge, including edges owned by deeper tasks."""
        focal = self.source.focal_task_id
        inputs = {"dependency_id": dependency_id}
        if not self.source.is_loaded():
            return self._reject(REMOVE_ACTION, focal, inputs, NOT_LOADED)
        if not dependency_id:
            return self._reject(REMOVE_ACTION, focal, inputs, "No dependency selected.")
        owner = self._edge_owner(dependency_id, focal)
        if not self.state.begin(MutationState.removing):
            return self._reject(REMOVE_ACTION, focal, inputs, "Another dependency change is in progress.")
        self.event_bus.emit(MUTATION_STARTED, {"action": REMOVE_ACTION, "task_id": focal, **inputs})
        try:
            try:
                self.store.delete_dependency(owner, dependency_id)
            except StoreError as exc:
                return self._failed(REMOVE_ACTION, focal, inputs, exc, "Could not remove the dependency")
            self._audit(REMOVE_ACTION, focal, inputs, "success", True)
            logger.info("Removed dependency %s from %s", dependency_id, focal)
            self.source.refresh()
        finally:
            self.state.finish(self.state.state.last_error)
            self.event_bus.emit(MUTATION_FINISHED, {"action": REMOVE_ACTION, "task_id": focal})
        self.event_bus.notify("Dependency removed")
        return MutationResult(success=True, action=REMOVE_ACTION, outcome="removed")

    def _precondition_failure(self, focal: str, target: str | None) -> str:
        if not self.source.is_loaded():
            return NOT_LOADED
        if not target:
            return "No task selected."
        if target == focal:
            return "A task cannot depend on itself."
        if target in depended_upon(self.source.current_dependencies(), focal):
            return "This dependency already exists."
        return ""

    def _edge_owner(self, dependency_id: str, focal: str) -> str:
        for dep in self.source.current_dependencies():
            if dep.id == dependency_id:
                return dep.task_id
        return focal

    def _reject(self, action: str, focal: str, inputs: dict, reason: str) -> MutationResult:
        logger.debug("Rejected %s for %s: %s", action, focal, reason)
        self._audit(action, focal, inputs, "rejected", False, reason)
        return MutationResult(success=False, action=action, outcome="rejected", error=reason)

    def _failed(
        self,
        action: str,
        focal: str,
        inputs: dict,
        exc: StoreError,
        title: str,
    ) -> MutationResult:
        reason = str(exc) or exc.__class__.__name__
        logger.warning("%s failed for %s: %s", action, focal, reason)
        self.state.state.last_error = reason
        self._audit(action, focal, inputs, "failed", False, reason)
        self.event_bus.notify(title, description=reason, variant="destructive")
        return MutationResult(success=False, action=action, outcome="failed", error=reason)

    def _audit(
        self,
        action: str,
        focal: str,
        inputs: dict,
        outcome: str,
        success: bool,
        reason: str = "",
    ) -> None:
        if self.audit_logger is not None:
            self.audit_logger.log(
                action=action,
                task_id=focal,
                inputs=inputs,
                outcome=outcome,
                success=success,
                reason=reason,
            )
