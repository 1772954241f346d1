"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.policy_runtime import ensure_runtime_dirs, load_effective_config, load_yaml, merge_dicts


def test_local_yaml_overrides_defaults(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text(
        "layout:\n  horizontal_spacing: 300\n  vertical_spacing: 100\nstore:\n  backend: sql\n",
        encoding="utf-8",
    )
    (config_dir / "local.yaml").write_text("layout:\n  horizontal_spacing: 120\n", encoding="utf-8")

    config = load_effective_config(tmp_path)

    assert config["layout"] == {"horizontal_spacing": 120, "vertical_spacing": 100}
    assert config["store"]["backend"] == "sql"


def test_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_effective_config(tmp_path) == {}


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_yaml(path)


def test_merge_dicts_is_recursive_and_non_destructive() -> None:
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    merged = merge_dicts(base, {"a": {"c": 5}})

    assert merged == {"a": {"b": 1, "c": 5}, "d": 3}
    assert base["a"]["c"] == 2


def test_runtime_dirs_are_created(tmp_path: Path) -> None:
    paths = ensure_runtime_dirs(tmp_path, {"paths": {"db_path": "data/graph.db"}})

    assert paths["db_path"] == (tmp_path / "data" / "graph.db").resolve()
    assert paths["db_path"].parent.is_dir()
    assert paths["audit_log_path"].parent.is_dir()


def test_shipped_default_config_loads() -> None:
    root = Path(__file__).resolve().parents[1]
    config = load_effective_config(root)

    assert config["layout"]["level_policy"] == "first_visit"
    assert config["mutations"]["dependency_type"] == "blocks"
