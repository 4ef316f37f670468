"""Domain entity representing a unit of work inside a milestone."""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

TASK_TYPES: Final[tuple[str, ...]] = ("task", "bug", "improvement", "idea")
TASK_STATUSES: Final[tuple[str, ...]] = ("todo", "in_progress", "blocked", "done")


@dataclass
class Task:
    """Ordered work item belonging to a milestone."""

    id: int | None
    milestone_id: int
    title: str
    type: str
    status: str
    description: str | None
    order: int
    created_at: datetime | None
    updated_at: datetime | None


__all__ = ["TASK_STATUSES", "TASK_TYPES", "Task"]
