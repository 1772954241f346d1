"""Dependency Store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from planner.types import Dependency, DependencyType, TaskRef


class DependencyStore(ABC):
    """Persists ``(task, depends_on_task, dependency_type)`` edges."""

    @abstractmethod
    def list_dependencies(self, task_id: str) -> list[Dependency]:
        """Return edges for ``task_id`` with resolved task references."""

    @abstractmethod
    def create_dependency(
        self,
        task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType | str = DependencyType.blocks,
    ) -> Dependency:
        """Create an edge and return it as stored."""

    @abstractmethod
    def delete_dependency(self, task_id: str, dependency_id: str) -> None:
        """Delete an edge owned by ``task_id``."""

    @abstractmethod
    def list_tasks(self) -> list[TaskRef]:
        """Return every known task."""
