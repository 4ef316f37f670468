"""Domain entity representing a tracked software project."""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

PROJECT_STAGES: Final[tuple[str, ...]] = (
    "idea",
    "planning",
    "execution",
    "monitoring",
    "done",
)


@dataclass
class Project:
    """A project owned by a single user, optionally linked to a repository."""

    id: int | None
    user_id: int
    name: str
    description: str | None
    stage: str
    start_date: datetime | None
    end_date: datetime | None
    repo_url: str | None
    created_at: datetime | None
    updated_at: datetime | None

    def has_repository(self) -> bool:
        """Return ``True`` when the project is linked to an external repository."""

        return bool(self.repo_url)


__all__ = ["PROJECT_STAGES", "Project"]
