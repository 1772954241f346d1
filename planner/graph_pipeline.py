"""Recompute pass: edges -> graph -> levels -> positions -> snapshot."""

from __future__ import annotations

from collections.abc import Sequence

from planner.dependency_graph import build_graph
from planner.layout_allocator import allocate_positions
from planner.level_assignment import assign_levels
from planner.types import (
    Dependency,
    GraphEdge,
    GraphNode,
    GraphSettings,
    GraphSnapshot,
    Position,
    TaskRef,
)


def compute_snapshot(
    dependencies: Sequence[Dependency],
    focal_task_id: str,
    settings: GraphSettings | None = None,
    focal_task: TaskRef | None = None,
) -> GraphSnapshot:
    """Run one full recomputation. Output depends only on the inputs."""
    settings = settings or GraphSettings()
    graph = build_graph(dependencies, focal_task_id, focal_task=focal_task)
    assignment = assign_levels(graph, policy=settings.level_policy)
    positions = allocate_positions(
        graph.nodes,
        assignment.levels,
        horizontal_spacing=settings.horizontal_spacing,
        vertical_spacing=settings.vertical_spacing,
    )

    nodes = [
        GraphNode(
            task=task,
            level=assignment.levels.get(task_id, 0),
            position=positions.get(task_id, Position()),
            is_focal=task_id == focal_task_id,
            status_color=settings.color_for(task.status),
        )
        for task_id, task in graph.nodes.items()
    ]
    edges = [
        GraphEdge(
            id=dep.id,
            source=dep.depends_on_task_id,
            target=dep.task_id,
            dependency_type=dep.dependency_type,
            label=settings.label_for(dep.dependency_type.value),
            dependency=dep,
        )
        for dep in graph.edges
    ]
    return GraphSnapshot(
        focal_task_id=focal_task_id,
        nodes=nodes,
        edges=edges,
        levels=dict(assignment.levels),
    )
