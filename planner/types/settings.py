"""Explicit settings object for graph recomputation."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_STATUS_COLORS: dict[str, str] = {
    "todo": "#94a3b8",
    "in_progress": "#3b82f6",
    "review": "#f59e0b",
    "done": "#10b981",
    "archived": "#6b7280",
}
DEFAULT_STATUS_COLOR = "#94a3b8"

DEFAULT_EDGE_LABELS: dict[str, str] = {
    "blocks": "blocks",
    "depends_on": "depends on",
}


class LevelPolicy(str, Enum):
    """How a node reachable along several paths picks its level."""

    first_visit = "first_visit"
    longest_path = "longest_path"


class GraphSettings(BaseModel):
    """Layout and presentation settings passed explicitly to the pipeline."""

    horizontal_spacing: float = Field(default=300.0, gt=0)
    vertical_spacing: float = Field(default=100.0, gt=0)
    level_policy: LevelPolicy = LevelPolicy.first_visit
    status_colors: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_STATUS_COLORS))
    default_status_color: str = DEFAULT_STATUS_COLOR
    edge_labels: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_EDGE_LABELS))

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> GraphSettings:
        """Build settings from the merged runtime configuration mapping."""
        layout = config.get("layout", {}) or {}
        presentation = config.get("presentation", {}) or {}
        values: dict[str, Any] = {}
        for key in ("horizontal_spacing", "vertical_spacing", "level_policy"):
            if key in layout:
                values[key] = layout[key]
        if "status_colors" in presentation:
            values["status_colors"] = {**DEFAULT_STATUS_COLORS, **presentation["status_colors"]}
        if "default_status_color" in presentation:
            values["default_status_color"] = presentation["default_status_color"]
        if "edge_labels" in presentation:
            values["edge_labels"] = {**DEFAULT_EDGE_LABELS, **presentation["edge_labels"]}
        return cls(**values)

    def color_for(self, status: str) -> str:
        return self.status_colors.get(status, self.default_status_color)

    def label_for(self, dependency_type: str) -> str:
        return self.edge_labels.get(dependency_type, dependency_type)
