"""Typer command handlers."""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Any

import typer

from core.event_bus import NOTIFICATION
from core.orchestrator import Orchestrator, RuntimeBundle
from core.policy_runtime import configure_logging
from planner.types import GraphSnapshot
from store.sql_dependency_store import SQLDependencyStore

_root: Path | None = None


def set_root(root: Path | None) -> None:
    """Set the directory holding ``config/`` for subsequent commands."""
    global _root
    _root = root


def _runtime() -> RuntimeBundle:
    bundle = Orchestrator(root=_root).build()
    configure_logging(bundle.config)
    bundle.event_bus.subscribe(NOTIFICATION, _echo_notification)
    return bundle


def _echo_notification(payload: dict[str, Any]) -> None:
    message = payload.get("title", "")
    if payload.get("description"):
        message = f"{message}: {payload['description']}"
    typer.echo(message, err=payload.get("variant") == "destructive")


def _sql_store(bundle: RuntimeBundle) -> SQLDependencyStore:
    if not isinstance(bundle.store, SQLDependencyStore):
        typer.echo("Task management requires the sql store backend.", err=True)
        raise typer.Exit(code=2)
    return bundle.store


def tasks_add(title: str, status: str, priority: str, task_id: str | None) -> None:
    """Add a task to the local store."""
    bundle = _runtime()
    task = _sql_store(bundle).add_task(title=title, status=status, priority=priority, task_id=task_id)
    typer.echo(f"Added task {task.id}: {task.title}")


def tasks_list() -> None:
    """List known tasks."""
    bundle = _runtime()
    for task in bundle.store.list_tasks():
        typer.echo(f"{task.id}\t{task.status}\t{task.priority}\t{task.title}")


def deps_show(task_id: str, as_json: bool = False) -> None:
    """Show the leveled dependency layout for a task."""
    bundle = _runtime()
    view = bundle.open_view(task_id)
    if view.snapshot is None:
        typer.echo(f"Could not load dependencies for {task_id}. Run the command again to retry.", err=True)
        raise typer.Exit(code=1)
    if as_json:
        typer.echo(json.dumps(view.snapshot.model_dump(mode="json"), indent=2))
        return
    typer.echo(render_snapshot(view.snapshot))


def deps_candidates(task_id: str) -> None:
    """List tasks the focal task could depend on."""
    bundle = _runtime()
    view = bundle.open_view(task_id)
    for task in view.coordinator.candidates():
        typer.echo(f"{task.id}\t{task.title}")


def deps_add(task_id: str, depends_on: str) -> None:
    """Make ``task_id`` depend on ``depends_on``."""
    bundle = _runtime()
    view = bundle.open_view(task_id)
    result = view.add_dependency(depends_on)
    if not result.success:
        if result.outcome == "rejected":
            typer.echo(f"Rejected: {result.error}", err=True)
        raise typer.Exit(code=1)
    if result.dependency is not None:
        typer.echo(f"Dependency id: {result.dependency.id}")


def deps_remove(task_id: str, dependency_id: str) -> None:
    """Remove one dependency edge."""
    bundle = _runtime()
    view = bundle.open_view(task_id)
    result = view.remove_dependency(dependency_id)
    if not result.success:
        if result.outcome == "rejected":
            typer.echo(f"Rejected: {result.error}", err=True)
        raise typer.Exit(code=1)


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.config, indent=2, default=str))


def render_snapshot(snapshot: GraphSnapshot) -> str:
    """Render a snapshot as one text column per level."""
    if not snapshot.nodes:
        return f"No dependencies configured for {snapshot.focal_task_id}."
    columns: dict[int, list[str]] = defaultdict(list)
    for node in sorted(snapshot.nodes, key=lambda n: (n.level, n.position.y)):
        marker = "*" if node.is_focal else " "
        columns[node.level].append(
            f"  [{marker}] {node.task.title or node.task.id} ({node.task.status or 'unknown'})"
            f" @ ({node.position.x:g}, {node.position.y:g})"
        )
    lines: list[str] = []
    for level in sorted(columns):
        lines.append(f"Level {level}:")
        lines.extend(columns[level])
    if snapshot.edges:
        lines.append("Edges:")
        for edge in snapshot.edges:
            lines.append(f"  {edge.source} -> {edge.target} [{edge.label}] ({edge.id})")
    return "\n".join(lines)
