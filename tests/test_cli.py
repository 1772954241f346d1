"""CLI tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ui.cli.cli import app

runner = CliRunner()


def invoke(root: Path, *args: str):
    return runner.invoke(app, ["--root", str(root), *args])


def test_tasks_and_dependencies_round_trip_through_cli(tmp_path: Path) -> None:
    for task_id, title in (("A", "Launch"), ("B", "Build"), ("C", "Design")):
        result = invoke(tmp_path, "tasks", "add", title, "--id", task_id)
        assert result.exit_code == 0, result.output

    assert invoke(tmp_path, "deps", "add", "A", "B").exit_code == 0
    assert invoke(tmp_path, "deps", "add", "B", "C").exit_code == 0

    shown = invoke(tmp_path, "deps", "show", "A")
    assert shown.exit_code == 0, shown.output
    assert "Level 0:" in shown.output
    assert "Level 2:" in shown.output
    assert "[*] Launch" in shown.output

    as_json = invoke(tmp_path, "deps", "show", "A", "--json")
    payload = json.loads(as_json.output)
    assert payload["levels"] == {"A": 0, "B": 1, "C": 2}

    candidates = invoke(tmp_path, "deps", "candidates", "A")
    assert "C\tDesign" in candidates.output
    assert "B\tBuild" not in candidates.output


def test_rejected_and_failed_mutations_exit_non_zero(tmp_path: Path) -> None:
    invoke(tmp_path, "tasks", "add", "Launch", "--id", "A")

    self_loop = invoke(tmp_path, "deps", "add", "A", "A")
    missing = invoke(tmp_path, "deps", "remove", "A", "nope")

    assert self_loop.exit_code == 1
    assert missing.exit_code == 1


def test_show_without_dependencies(tmp_path: Path) -> None:
    invoke(tmp_path, "tasks", "add", "Launch", "--id", "A")

    result = invoke(tmp_path, "deps", "show", "A")

    assert result.exit_code == 0
    assert "[*] Launch" in result.output
