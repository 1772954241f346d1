"""Dependency Store factory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from store.base_store import DependencyStore
from store.http_store import HTTPDependencyStore
from store.sql_dependency_store import SQLDependencyStore
from store.sql_store import SQLStore


def build_store(config: dict[str, Any], db_path: Path) -> DependencyStore:
    """Build a Dependency Store from configuration, defaulting to local SQLite."""
    store_cfg = config.get("store", {})
    backend = store_cfg.get("backend", "sql")

    if backend == "http":
        http_cfg = store_cfg.get("http", {})
        return HTTPDependencyStore(
            base_url=http_cfg.get("base_url", "http://localhost:3000"),
            timeout_seconds=float(http_cfg.get("timeout_seconds", 15)),
            headers=dict(http_cfg.get("headers", {})),
        )
    if backend != "sql":
        raise ValueError(f"Unknown store backend: {backend!r}")

    sql_store = SQLStore(db_path)
    return SQLDependencyStore(
        sql_store=sql_store,
        transitive=bool(store_cfg.get("transitive", True)),
        reject_cycles=bool(store_cfg.get("reject_cycles", False)),
    )
