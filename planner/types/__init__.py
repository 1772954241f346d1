"""Typed graph models."""

from planner.types.dependency import Dependency, DependencyType
from planner.types.settings import GraphSettings, LevelPolicy
from planner.types.snapshot import GraphEdge, GraphNode, GraphSnapshot, Position
from planner.types.task import TaskRef

__all__ = [
    "Dependency",
    "DependencyType",
    "GraphEdge",
    "GraphNode",
    "GraphSettings",
    "GraphSnapshot",
    "LevelPolicy",
    "Position",
    "TaskRef",
]
