"""Dependency view session tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from core.dependency_view import DependencyView
from core.event_bus import GRAPH_FETCH_FAILED, GRAPH_RECOMPUTED, EventBus
from core.orchestrator import Orchestrator
from planner.types import Dependency, GraphSettings, LevelPolicy, TaskRef
from store.base_store import DependencyStore
from store.errors import StoreTransportError
from store.sql_dependency_store import SQLDependencyStore


def task(task_id: str) -> TaskRef:
    return TaskRef(id=task_id, title=f"Task {task_id}", status="todo", priority="medium")


def edge(edge_id: str, src: str, dst: str) -> Dependency:
    return Dependency(id=edge_id, task_id=src, depends_on_task_id=dst, task=task(src), depends_on_task=task(dst))


def test_fetch_failure_renders_nothing_and_retry_recovers() -> None:
    store = MagicMock(spec=DependencyStore)
    store.list_tasks.return_value = [task("A"), task("B")]
    store.list_dependencies.side_effect = StoreTransportError("connection refused")
    bus = EventBus()
    seen: list[tuple[str, dict[str, Any]]] = []
    bus.subscribe(GRAPH_FETCH_FAILED, lambda payload: seen.append((GRAPH_FETCH_FAILED, payload)))
    bus.subscribe(GRAPH_RECOMPUTED, lambda payload: seen.append((GRAPH_RECOMPUTED, payload)))
    view = DependencyView(store=store, focal_task_id="A", event_bus=bus)

    assert view.load() is None
    state = view.state()
    assert state.snapshot is None
    assert state.can_retry is True
    assert state.fetch_error == "connection refused"

    store.list_dependencies.side_effect = None
    store.list_dependencies.return_value = [edge("e1", "A", "B")]
    snapshot = view.retry()

    assert snapshot is not None
    assert snapshot.levels == {"A": 0, "B": 1}
    assert view.state().can_retry is False
    assert [name for name, _ in seen] == [GRAPH_FETCH_FAILED, GRAPH_RECOMPUTED]
    assert seen[-1][1] == {"task_id": "A", "nodes": 2, "edges": 1}


def test_changing_focal_task_rebuilds_from_scratch(tmp_path: Path) -> None:
    bundle = Orchestrator(root=tmp_path, config={}).build()
    store = bundle.store
    assert isinstance(store, SQLDependencyStore)
    for task_id in ("A", "B", "C"):
        store.add_task(title=f"Task {task_id}", task_id=task_id)
    store.create_dependency("A", "B")
    store.create_dependency("B", "C")

    view = bundle.open_view("A")
    assert view.snapshot.levels == {"A": 0, "B": 1, "C": 2}

    view.coordinator.select("C")
    snapshot = view.set_focal_task("B")

    assert snapshot.levels == {"B": 0, "C": 1}
    assert snapshot.focal_task_id == "B"
    assert snapshot.node("B").is_focal is True
    assert view.state().selected_task_id is None


def test_caller_supplied_tasks_are_used_for_candidates() -> None:
    store = MagicMock(spec=DependencyStore)
    store.list_dependencies.return_value = []
    view = DependencyView(store=store, focal_task_id="A", available_tasks=[task("A"), task("Z")])
    view.load()

    assert [t.id for t in view.state().candidates] == ["Z"]
    assert [n.task.id for n in view.snapshot.nodes] == ["A"]
    store.list_tasks.assert_not_called()


def test_task_list_failure_degrades_to_no_candidates() -> None:
    store = MagicMock(spec=DependencyStore)
    store.list_dependencies.return_value = [edge("e1", "A", "B")]
    store.list_tasks.side_effect = StoreTransportError("down")
    view = DependencyView(store=store, focal_task_id="A")

    snapshot = view.load()

    assert snapshot is not None
    assert view.state().candidates == []


def test_settings_reach_the_pipeline() -> None:
    store = MagicMock(spec=DependencyStore)
    store.list_tasks.return_value = []
    store.list_dependencies.return_value = [
        edge("e1", "A", "D"),
        edge("e2", "A", "B"),
        edge("e3", "B", "C"),
        edge("e4", "C", "D"),
    ]
    settings = GraphSettings(level_policy=LevelPolicy.longest_path, horizontal_spacing=10)
    view = DependencyView(store=store, focal_task_id="A", settings=settings)

    snapshot = view.load()

    assert snapshot.levels["D"] == 3
    assert snapshot.node("D").position.x == 30


def test_focal_task_id_is_required() -> None:
    with pytest.raises(ValueError):
        DependencyView(store=MagicMock(spec=DependencyStore), focal_task_id="")


def test_task_list_failure_is_cached_until_next_load() -> None:
    store = MagicMock(spec=DependencyStore)
    store.list_dependencies.return_value = [edge("e1", "A", "B")]
    store.list_tasks.side_effect = StoreTransportError("down")
    view = DependencyView(store=store, focal_task_id="A")
    view.load()

    view.state()
    view.state()
    view.coordinator.candidates()
    assert store.list_tasks.call_count == 1

    store.list_tasks.side_effect = None
    store.list_tasks.return_value = [task("A"), task("B"), task("C")]
    view.load()

    assert store.list_tasks.call_count == 2
    assert [t.id for t in view.state().candidates] == ["C"]
