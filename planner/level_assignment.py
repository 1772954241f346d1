"""Column (level) assignment for the dependency graph.

Levels grow along depends-on edges away from the focal task, which always sits
at level 0. The traversal is a pre-order depth-first walk over an explicit
stack, so deep chains never hit the interpreter recursion limit, and a node is
never entered twice, so cyclic edge lists terminate in O(V + E).

Two tie-break policies exist for nodes reachable along several paths:

``first_visit``
    The first path that reaches a node fixes its level. Which path that is
    depends on edge order, not on topology.

``longest_path``
    Within the part of the graph reached from one traversal root, a node takes
    the length of the longest path from that root, ignoring the back edges the
    walk found (those are the edges that close cycles).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from planner.dependency_graph import DependencyGraph
from planner.types import LevelPolicy


@dataclass
class LevelAssignment:
    """Levels plus the bookkeeping of the walk that produced them."""

    levels: dict[str, int] = field(default_factory=dict)
    parents: dict[str, str | None] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)


@dataclass
class _Walk:
    reached: list[str] = field(default_factory=list)
    finished: list[str] = field(default_factory=list)
    back_edges: set[tuple[str, str]] = field(default_factory=set)


def _walk_from(graph: DependencyGraph, root: str, result: LevelAssignment) -> _Walk:
    walk = _Walk(reached=[root])
    levels = result.levels
    levels[root] = 0
    result.parents[root] = None
    on_stack = {root}
    stack = [(root, iter(graph.depends_on(root)))]
    while stack:
        task_id, pending = stack[-1]
        for dep_id in pending:
            if dep_id not in levels:
                levels[dep_id] = levels[task_id] + 1
                result.parents[dep_id] = task_id
                walk.reached.append(dep_id)
                on_stack.add(dep_id)
                stack.append((dep_id, iter(graph.depends_on(dep_id))))
                break
            if dep_id in on_stack:
                walk.back_edges.add((task_id, dep_id))
        else:
            stack.pop()
            on_stack.discard(task_id)
            walk.finished.append(task_id)
    return walk


def _stretch(graph: DependencyGraph, walk: _Walk, levels: dict[str, int]) -> None:
    # Reverse finishing order is a topological order once back edges are dropped.
    reached = set(walk.reached)
    for task_id in reversed(walk.finished):
        for dep_id in graph.depends_on(task_id):
            if dep_id not in reached or (task_id, dep_id) in walk.back_edges:
                continue
            levels[dep_id] = max(levels[dep_id], levels[task_id] + 1)


def assign_levels(
    graph: DependencyGraph,
    policy: LevelPolicy = LevelPolicy.first_visit,
) -> LevelAssignment:
    """Assign a level to the focal task and every node of ``graph``."""
    policy = LevelPolicy(policy)
    result = LevelAssignment()
    candidates = [graph.focal_task_id, *graph.nodes]
    for root in candidates:
        if root in result.levels:
            continue
        result.roots.append(root)
        walk = _walk_from(graph, root, result)
        if policy is LevelPolicy.longest_path:
            _stretch(graph, walk, result.levels)
    return result
