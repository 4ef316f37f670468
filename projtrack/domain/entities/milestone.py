"""Domain entity representing a project milestone."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

from .task import Task

MILESTONE_STATUSES: Final[tuple[str, ...]] = (
    "on_track",
    "at_risk",
    "overdue",
    "completed",
)


@dataclass
class Milestone:
    """A dated checkpoint inside a project grouping a set of tasks."""

    id: int | None
    project_id: int
    title: str
    description: str | None
    start_date: datetime | None
    end_date: datetime | None
    status: str
    created_at: datetime | None
    updated_at: datetime | None
    tasks: list[Task] = field(default_factory=list)


__all__ = ["MILESTONE_STATUSES", "Milestone"]
