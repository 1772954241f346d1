"""Top-level application orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.dependency_view import DependencyView
from core.event_bus import EventBus
from core.policy_runtime import ensure_runtime_dirs, load_effective_config
from governance.audit_logger import AuditLogger
from planner.types import GraphSettings
from store.base_store import DependencyStore
from store.store_factory import build_store


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    store: DependencyStore
    settings: GraphSettings
    event_bus: EventBus
    audit_logger: AuditLogger

    def open_view(self, task_id: str, load: bool = True) -> DependencyView:
        """Create a dependency view for ``task_id`` and fetch its graph."""
        view = DependencyView(
            store=self.store,
            focal_task_id=task_id,
            settings=self.settings,
            event_bus=self.event_bus,
            audit_logger=self.audit_logger,
            dependency_type=self.config.get("mutations", {}).get("dependency_type", "blocks"),
        )
        if load:
            view.load()
        return view


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None, config: dict[str, Any] | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self._config = config

    def build(self) -> RuntimeBundle:
        config = self._config if self._config is not None else load_effective_config(self.root)
        paths = ensure_runtime_dirs(self.root, config)

        return RuntimeBundle(
            config=config,
            store=build_store(config, db_path=paths["db_path"]),
            settings=GraphSettings.from_config(config),
            event_bus=EventBus(),
            audit_logger=AuditLogger(paths["audit_log_path"]),
        )
