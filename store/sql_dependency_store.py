"""SQLite-backed Dependency Store."""

from __future__ import annotations

import logging
import uuid
from collections import deque

from sqlalchemy.orm import Session

from planner.types import Dependency, DependencyType, TaskRef
from store.base_store import DependencyStore
from store.errors import (
    DependencyCycleError,
    DependencyNotFoundError,
    InvalidDependencyError,
    TaskNotFoundError,
)
from store.schemas import DependencyRecord, TaskRecord
from store.sql_store import SQLStore

logger = logging.getLogger("depgraph.store.sql")


class SQLDependencyStore(DependencyStore):
    """Manages tasks and dependency edges with SQLite persistence.

    With ``transitive`` enabled, listing a task returns every edge reachable
    from it along depends-on links instead of only its direct edges.
    """

    def __init__(
        self,
        sql_store: SQLStore,
        transitive: bool = True,
        reject_cycles: bool = False,
    ) -> None:
        self.sql_store = sql_store
        self.sql_store.create_all()
        self.transitive = transitive
        self.reject_cycles = reject_cycles

    def add_task(
        self,
        title: str,
        status: str = "todo",
        priority: str = "medium",
        task_id: str | None = None,
    ) -> TaskRef:
        """Insert task record."""
        record = TaskRecord(
            task_id=task_id or uuid.uuid4().hex,
            title=title,
            status=status,
            priority=priority,
        )
        with self.sql_store.session() as sess:
            sess.add(record)
            sess.flush()
            return self._task_to_ref(record)

    def get_task(self, task_id: str) -> TaskRef | None:
        with self.sql_store.session() as sess:
            row = sess.query(TaskRecord).filter(TaskRecord.task_id == task_id).first()
            return self._task_to_ref(row) if row else None

    def list_tasks(self) -> list[TaskRef]:
        with self.sql_store.session() as sess:
            rows = sess.query(TaskRecord).order_by(TaskRecord.id).all()
            return [self._task_to_ref(row) for row in rows]

    def list_dependencies(self, task_id: str) -> list[Dependency]:
        with self.sql_store.session() as sess:
            rows = sess.query(DependencyRecord).order_by(DependencyRecord.id).all()
            if self.transitive:
                owners = self._reachable(rows, task_id)
            else:
                owners = {task_id}
            selected = [row for row in rows if row.task_id in owners]
            tasks = self._task_refs(sess)
            return [self._dependency_to_model(row, tasks) for row in selected]

    def create_dependency(
        self,
        task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType | str = DependencyType.blocks,
    ) -> Dependency:
        try:
            dep_type = DependencyType(dependency_type)
        except ValueError as exc:
            raise InvalidDependencyError(f"Unknown dependency type: {dependency_type!r}") from exc
        if task_id == depends_on_task_id:
            raise InvalidDependencyError("Task cannot depend on itself")

        with self.sql_store.session() as sess:
            tasks = self._task_refs(sess)
            for ref in (task_id, depends_on_task_id):
                if ref not in tasks:
                    raise TaskNotFoundError(f"Task not found: {ref}")
            duplicate = (
                sess.query(DependencyRecord.id)
                .filter(
                    DependencyRecord.task_id == task_id,
                    DependencyRecord.depends_on_task_id == depends_on_task_id,
                )
                .first()
            )
            if duplicate is not None:
                raise InvalidDependencyError(f"{task_id} already depends on {depends_on_task_id}")
            if self.reject_cycles:
                rows = sess.query(DependencyRecord).all()
                if task_id in self._reachable(rows, depends_on_task_id):
                    raise DependencyCycleError(
                        f"{depends_on_task_id} already depends on {task_id}; edge would close a cycle"
                    )
            record = DependencyRecord(
                dependency_id=uuid.uuid4().hex,
                task_id=task_id,
                depends_on_task_id=depends_on_task_id,
                dependency_type=dep_type.value,
            )
            sess.add(record)
            sess.flush()
            payload = self._dependency_to_model(record, tasks)
        logger.info("Task dependency added: %s depends on %s", task_id, depends_on_task_id)
        return payload

    def delete_dependency(self, task_id: str, dependency_id: str) -> None:
        with self.sql_store.session() as sess:
            row = (
                sess.query(DependencyRecord)
                .filter(
                    DependencyRecord.dependency_id == dependency_id,
                    DependencyRecord.task_id == task_id,
                )
                .first()
            )
            if row is None:
                raise DependencyNotFoundError(f"Dependency {dependency_id} not found for task {task_id}")
            sess.delete(row)
        logger.info("Task dependency removed: %s", dependency_id)

    @staticmethod
    def _reachable(rows: list[DependencyRecord], start: str) -> set[str]:
        adjacency: dict[str, list[str]] = {}
        for row in rows:
            adjacency.setdefault(row.task_id, []).append(row.depends_on_task_id)
        seen = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nxt in adjacency.get(current, []):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    def _task_refs(self, sess: Session) -> dict[str, TaskRef]:
        return {row.task_id: self._task_to_ref(row) for row in sess.query(TaskRecord).all()}

    @staticmethod
    def _task_to_ref(row: TaskRecord) -> TaskRef:
        return TaskRef(id=row.task_id, title=row.title, status=row.status, priority=row.priority)

    @staticmethod
    def _dependency_to_model(row: DependencyRecord, tasks: dict[str, TaskRef]) -> Dependency:
        return Dependency(
            id=row.dependency_id,
            task_id=row.task_id,
            depends_on_task_id=row.depends_on_task_id,
            dependency_type=DependencyType(row.dependency_type),
            task=tasks.get(row.task_id),
            depends_on_task=tasks.get(row.depends_on_task_id),
        )
