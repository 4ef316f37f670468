"""Use cases for managing project milestones."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from projtrack.domain.entities import MILESTONE_STATUSES, Milestone
from projtrack.infrastructure.repositories import MilestoneRepository

from .errors import NotFoundError
from .projects import get_project

_UPDATABLE_FIELDS = ("title", "description", "start_date", "end_date", "status")
_NULLABLE_FIELDS = frozenset({"description", "start_date", "end_date"})


def _validate_status(status: str) -> None:
    if status not in MILESTONE_STATUSES:
        raise ValueError(f"Invalid milestone status '{status}'")


def list_milestones(session: Session, project_id: int, *, user_id: int) -> list[Milestone]:
    """Return the milestones of a project ordered by start date."""

    project = get_project(session, project_id, user_id=user_id)
    return MilestoneRepository(session).list_by_project(project.id)


def get_milestone(session: Session, milestone_id: int, *, user_id: int) -> Milestone:
    milestone = MilestoneRepository(session).get_for_user(milestone_id, user_id)
    if milestone is None:
        raise NotFoundError("Milestone not found")
    return milestone


def create_milestone(
    session: Session,
    project_id: int,
    *,
    user_id: int,
    title: str,
    description: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    status: str = "on_track",
) -> Milestone:
    """Add a milestone to a project owned by ``user_id``."""

    project = get_project(session, project_id, user_id=user_id)
    _validate_status(status)
    milestone = Milestone(
        id=None,
        project_id=project.id,
        title=title,
        description=description or None,
        start_date=start_date,
        end_date=end_date,
        status=status,
        created_at=None,
        updated_at=None,
    )
    return MilestoneRepository(session).create(milestone)


def update_milestone(
    session: Session,
    milestone_id: int,
    *,
    user_id: int,
    changes: Mapping[str, Any],
) -> Milestone:
    milestone = get_milestone(session, milestone_id, user_id=user_id)
    for field_name in _UPDATABLE_FIELDS:
        if field_name not in changes:
            continue
        value = changes[field_name]
        if value is None and field_name not in _NULLABLE_FIELDS:
            continue
        setattr(milestone, field_name, value)
    _validate_status(milestone.status)
    return MilestoneRepository(session).update(milestone)


def delete_milestone(session: Session, milestone_id: int, *, user_id: int) -> None:
    milestone = get_milestone(session, milestone_id, user_id=user_id)
    MilestoneRepository(session).delete(milestone.id)


__all__ = [
    "create_milestone",
    "delete_milestone",
    "get_milestone",
    "list_milestones",
    "update_milestone",
]
