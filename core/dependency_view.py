"""Dependency view session: fetch, recompute and expose the graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.event_bus import GRAPH_FETCH_FAILED, GRAPH_RECOMPUTED, EventBus
from core.state_manager import MutationState, StateManager
from executor.mutation_coordinator import MutationCoordinator, MutationResult
from governance.audit_logger import AuditLogger
from planner.graph_pipeline import compute_snapshot
from planner.types import Dependency, DependencyType, GraphSettings, GraphSnapshot, TaskRef
from store.base_store import DependencyStore
from store.errors import StoreError

logger = logging.getLogger("depgraph.view")


@dataclass
class ViewState:
    """Everything the presentation surface needs to render one frame."""

    focal_task_id: str
    snapshot: GraphSnapshot | None
    mutation_state: MutationState
    is_busy: bool
    selected_task_id: str | None
    fetch_error: str | None
    candidates: list[TaskRef]

    @property
    def can_retry(self) -> bool:
        return self.fetch_error is not None


class DependencyView:
    """Holds the cached edge list for one focal task.

    The graph is always recomputed from scratch from the last fetched list; a
    failed fetch clears it instead of showing a partial graph.
    """

    def __init__(
        self,
        store: DependencyStore,
        focal_task_id: str,
        settings: GraphSettings | None = None,
        event_bus: EventBus | None = None,
        audit_logger: AuditLogger | None = None,
        available_tasks: list[TaskRef] | None = None,
        dependency_type: DependencyType | str = DependencyType.blocks,
    ) -> None:
        if not focal_task_id:
            raise ValueError("focal_task_id must be a non-empty identifier.")
        self.store = store
        self.focal_task_id = focal_task_id
        self.settings = settings or GraphSettings()
        self.event_bus = event_bus or EventBus()
        self._available_tasks = available_tasks
        self._tasks_from_caller = available_tasks is not None
        self._tasks_failed = False
        self._dependencies: list[Dependency] = []
        self.snapshot: GraphSnapshot | None = None
        self.fetch_error: str | None = None
        self.coordinator = MutationCoordinator(
            store=store,
            source=self,
            event_bus=self.event_bus,
            state=StateManager(),
            audit_logger=audit_logger,
            dependency_type=dependency_type,
        )

    def current_dependencies(self) -> list[Dependency]:
        return list(self._dependencies)

    def known_tasks(self) -> list[TaskRef]:
        if self._available_tasks is None:
            try:
                self._available_tasks = self.store.list_tasks()
            except StoreError as exc:
                logger.warning("Could not load known tasks: %s", exc)
                self._available_tasks = []
                self._tasks_failed = True
        return list(self._available_tasks)

    def is_loaded(self) -> bool:
        """True once a fetch succeeded and no later fetch has failed."""
        return self.snapshot is not None and self.fetch_error is None

    def focal_task(self) -> TaskRef | None:
        for task in self._available_tasks or []:
            if task.id == self.focal_task_id:
                return task
        return None

    def load(self) -> GraphSnapshot | None:
        """Fetch the edge list and recompute. Returns None on fetch failure."""
        try:
            dependencies = self.store.list_dependencies(self.focal_task_id)
        except StoreError as exc:
            reason = str(exc) or exc.__class__.__name__
            logger.warning("Could not load dependencies for %s: %s", self.focal_task_id, reason)
            self._dependencies = []
            self.snapshot = None
            self.fetch_error = reason
            self.event_bus.emit(GRAPH_FETCH_FAILED, {"task_id": self.focal_task_id, "error": reason})
            self.event_bus.notify(
                "Could not load dependencies",
                description=reason,
                variant="destructive",
            )
            return None
        self._dependencies = list(dependencies)
        self.fetch_error = None
        if self._tasks_failed:
            self._available_tasks = None
            self._tasks_failed = False
        self.known_tasks()
        return self.recompute()

    def retry(self) -> GraphSnapshot | None:
        return self.load()

    def refresh(self) -> None:
        """Invalidate cached state after a confirmed mutation."""
        if not self._tasks_from_caller:
            self._available_tasks = None
        self.load()

    def recompute(self) -> GraphSnapshot:
        self.snapshot = compute_snapshot(
            self._dependencies,
            self.focal_task_id,
            settings=self.settings,
            focal_task=self.focal_task(),
        )
        self.event_bus.emit(
            GRAPH_RECOMPUTED,
            {
                "task_id": self.focal_task_id,
                "nodes": len(self.snapshot.nodes),
                "edges": len(self.snapshot.edges),
            },
        )
        return self.snapshot

    def set_focal_task(self, task_id: str) -> GraphSnapshot | None:
        if not task_id:
            raise ValueError("focal_task_id must be a non-empty identifier.")
        self.focal_task_id = task_id
        self.coordinator.clear_selection()
        return self.load()

    def add_dependency(self, depends_on_task_id: str | None = None) -> MutationResult:
        return self.coordinator.add_dependency(depends_on_task_id)

    def remove_dependency(self, dependency_id: str) -> MutationResult:
        return self.coordinator.remove_dependency(dependency_id)

    def state(self) -> ViewState:
        return ViewState(
            focal_task_id=self.focal_task_id,
            snapshot=self.snapshot,
            mutation_state=self.coordinator.mutation_state,
            is_busy=self.coordinator.is_busy,
            selected_task_id=self.coordinator.selected_task_id,
            fetch_error=self.fetch_error,
            candidates=self.coordinator.candidates(),
        )
