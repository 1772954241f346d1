"""Task dependency graph built from a flat edge list."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from planner.types import Dependency, TaskRef

logger = logging.getLogger("depgraph.graph")


@dataclass
class DependencyGraph:
    """Nodes and depends-on adjacency derived from one edge list.

    ``nodes`` keeps first-seen order. ``adjacency`` maps a task id to the ids it
    depends on, in edge order.
    """

    focal_task_id: str
    nodes: dict[str, TaskRef] = field(default_factory=dict)
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    edges: list[Dependency] = field(default_factory=list)

    def depends_on(self, task_id: str) -> list[str]:
        return self.adjacency.get(task_id, [])

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.nodes


def _remember(nodes: dict[str, TaskRef], ref: TaskRef) -> None:
    current = nodes.get(ref.id)
    if current is None or ref.richness() > current.richness():
        nodes[ref.id] = ref


def build_graph(
    dependencies: Iterable[Dependency],
    focal_task_id: str,
    focal_task: TaskRef | None = None,
) -> DependencyGraph:
    """Build the node set and adjacency for ``focal_task_id``.

    Edges with a missing task reference contribute no node for that side.
    """
    if not focal_task_id:
        raise ValueError("focal_task_id must be a non-empty identifier.")

    graph = DependencyGraph(focal_task_id=focal_task_id)
    for dep in dependencies:
        graph.edges.append(dep)
        if dep.task is not None:
            _remember(graph.nodes, dep.task)
        if dep.depends_on_task is not None:
            _remember(graph.nodes, dep.depends_on_task)
            graph.adjacency.setdefault(dep.task_id, []).append(dep.depends_on_task.id)
        if dep.task is None or dep.depends_on_task is None:
            logger.debug("Dependency %s has an unresolved endpoint; skipping missing side", dep.id)

    if focal_task is not None and focal_task.id == focal_task_id:
        _remember(graph.nodes, focal_task)
    return graph
