"""Derived graph snapshot models handed to the presentation surface."""

from __future__ import annotations

from pydantic import BaseModel, Field

from planner.types.dependency import Dependency, DependencyType
from planner.types.task import TaskRef


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GraphNode(BaseModel):
    """A task placed on the canvas."""

    task: TaskRef
    level: int = 0
    position: Position = Field(default_factory=Position)
    is_focal: bool = False
    status_color: str = ""


class GraphEdge(BaseModel):
    """A drawable edge, oriented from prerequisite to dependent task."""

    id: str
    source: str
    target: str
    dependency_type: DependencyType
    label: str = ""
    dependency: Dependency


class GraphSnapshot(BaseModel):
    """Result of one recomputation pass."""

    focal_task_id: str
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    levels: dict[str, int] = Field(default_factory=dict)

    def node(self, task_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.task.id == task_id:
                return node
        return None

    def positions(self) -> dict[str, tuple[float, float]]:
        return {node.task.id: (node.position.x, node.position.y) for node in self.nodes}
