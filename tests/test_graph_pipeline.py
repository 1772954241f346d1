"""Recompute pipeline tests."""

from __future__ import annotations

from planner.graph_pipeline import compute_snapshot
from planner.types import Dependency, DependencyType, GraphSettings, LevelPolicy, TaskRef


def task(task_id: str, status: str = "todo") -> TaskRef:
    return TaskRef(id=task_id, title=f"Task {task_id}", status=status, priority="medium")


def edge(edge_id: str, src: TaskRef, dst: TaskRef, kind: str = "blocks") -> Dependency:
    return Dependency(
        id=edge_id,
        task_id=src.id,
        depends_on_task_id=dst.id,
        dependency_type=kind,
        task=src,
        depends_on_task=dst,
    )


def test_empty_edge_list_with_known_focal_task() -> None:
    snapshot = compute_snapshot([], "A", focal_task=task("A"))

    assert [node.task.id for node in snapshot.nodes] == ["A"]
    assert snapshot.levels == {"A": 0}
    assert snapshot.nodes[0].is_focal is True
    assert snapshot.edges == []


def test_empty_edge_list_with_unknown_focal_task() -> None:
    snapshot = compute_snapshot([], "A")

    assert snapshot.nodes == []
    assert snapshot.levels == {"A": 0}


def test_chain_is_laid_out_left_to_right() -> None:
    a, b, c = task("A"), task("B", "in_progress"), task("C", "done")
    snapshot = compute_snapshot([edge("e1", a, b), edge("e2", b, c, "depends_on")], "A")

    assert snapshot.positions() == {"A": (0, 0), "B": (300, 0), "C": (600, 0)}
    assert snapshot.node("B").status_color == "#3b82f6"
    assert snapshot.node("C").status_color == "#10b981"
    first, second = snapshot.edges
    assert (first.source, first.target, first.label) == ("B", "A", "blocks")
    assert (second.source, second.target, second.label) == ("C", "B", "depends on")
    assert second.dependency_type is DependencyType.depends_on


def test_rebuild_is_idempotent() -> None:
    a, b, c, d = task("A"), task("B"), task("C"), task("D")
    deps = [edge("e1", a, b), edge("e2", a, c), edge("e3", b, d), edge("e4", c, d), edge("e5", d, a)]

    first = compute_snapshot(deps, "A")
    second = compute_snapshot(deps, "A")

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_malformed_edge_does_not_block_rendering() -> None:
    a, b = task("A"), task("B")
    dangling = Dependency(id="bad", task_id="A", depends_on_task_id="ghost", task=a)
    snapshot = compute_snapshot([dangling, edge("e1", a, b)], "A")

    assert [node.task.id for node in snapshot.nodes] == ["A", "B"]
    assert snapshot.levels == {"A": 0, "B": 1}
    assert [e.id for e in snapshot.edges] == ["bad", "e1"]


def test_settings_drive_spacing_policy_and_colors() -> None:
    settings = GraphSettings.from_config(
        {
            "layout": {"horizontal_spacing": 50, "vertical_spacing": 10, "level_policy": "longest_path"},
            "presentation": {"status_colors": {"todo": "#000000"}, "edge_labels": {"blocks": "blocca"}},
        }
    )
    a, b, c, d = task("A"), task("B"), task("C"), task("D")
    deps = [edge("e1", a, d), edge("e2", a, b), edge("e3", b, c), edge("e4", c, d)]
    snapshot = compute_snapshot(deps, "A", settings=settings)

    assert settings.level_policy is LevelPolicy.longest_path
    assert snapshot.levels["D"] == 3
    assert snapshot.node("D").position.x == 150
    assert snapshot.node("A").status_color == "#000000"
    assert snapshot.edges[0].label == "blocca"
    assert settings.color_for("unknown") == "#94a3b8"
