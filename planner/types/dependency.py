"""Dependency edge models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from planner.types.task import TaskRef


class DependencyType(str, Enum):
    blocks = "blocks"
    depends_on = "depends_on"


class Dependency(BaseModel):
    """Directed edge: ``depends_on_task_id`` must complete before ``task_id``.

    Accepts both snake_case names and the camelCase keys used by the REST API.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    task_id: str = Field(alias="taskId")
    depends_on_task_id: str = Field(alias="dependsOnTaskId")
    dependency_type: DependencyType = Field(default=DependencyType.blocks, alias="dependencyType")
    task: TaskRef | None = None
    depends_on_task: TaskRef | None = Field(default=None, alias="dependsOnTask")
