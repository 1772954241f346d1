"""CLI entrypoint for the task dependency graph."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Task dependency graph")
tasks_app = typer.Typer(help="Task commands")
deps_app = typer.Typer(help="Dependency commands")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    root: Path = typer.Option(
        None,
        "--root",
        envvar="DEPGRAPH_ROOT",
        help="Directory containing config/ and runtime data",
    ),
) -> None:
    """Task dependency graph."""
    commands.set_root(root)


@tasks_app.command("add")
def tasks_add_cmd(
    title: str = typer.Argument(..., help="Task title"),
    status: str = typer.Option("todo", help="Task status"),
    priority: str = typer.Option("medium", help="Task priority"),
    task_id: str = typer.Option(None, "--id", help="Explicit task id"),
) -> None:
    """Add a task."""
    commands.tasks_add(title=title, status=status, priority=priority, task_id=task_id)


@tasks_app.command("list")
def tasks_list_cmd() -> None:
    """List tasks."""
    commands.tasks_list()


@deps_app.command("show")
def deps_show_cmd(
    task_id: str = typer.Argument(..., help="Focal task id"),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
) -> None:
    """Show the leveled dependency graph of a task."""
    commands.deps_show(task_id=task_id, as_json=as_json)


@deps_app.command("candidates")
def deps_candidates_cmd(task_id: str = typer.Argument(..., help="Focal task id")) -> None:
    """List tasks that can be added as dependencies."""
    commands.deps_candidates(task_id=task_id)


@deps_app.command("add")
def deps_add_cmd(
    task_id: str = typer.Argument(..., help="Focal task id"),
    depends_on: str = typer.Argument(..., help="Task that must complete first"),
) -> None:
    """Add a dependency."""
    commands.deps_add(task_id=task_id, depends_on=depends_on)


@deps_app.command("remove")
def deps_remove_cmd(
    task_id: str = typer.Argument(..., help="Focal task id"),
    dependency_id: str = typer.Argument(..., help="Dependency id"),
) -> None:
    """Remove a dependency."""
    commands.deps_remove(task_id=task_id, dependency_id=dependency_id)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(tasks_app, name="tasks")
app.add_typer(deps_app, name="deps")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
