"""Task reference models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TaskRef(BaseModel):
    """Read-only view of a task as seen by the dependency graph."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    status: str = ""
    priority: str = ""

    def richness(self) -> int:
        """Count populated descriptive fields."""
        return sum(1 for value in (self.title, self.status, self.priority) if value)
