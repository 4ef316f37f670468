"""Use cases for managing projects and reading their activity log."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from projtrack.domain.entities import PROJECT_STAGES, ActivityEvent, Project
from projtrack.infrastructure.repositories import (
    ActivityEventRepository,
    ProjectRepository,
)

from .errors import NotFoundError

_UPDATABLE_FIELDS = (
    "name",
    "description",
    "stage",
    "start_date",
    "end_date",
    "repo_url",
)
_NULLABLE_FIELDS = frozenset({"description", "start_date", "end_date", "repo_url"})


def _validate_stage(stage: str) -> None:
    if stage not in PROJECT_STAGES:
        raise ValueError(f"Invalid project stage '{stage}'")


def list_projects(session: Session, *, user_id: int) -> list[Project]:
    """Return the projects owned by ``user_id``, most recently updated first."""

    return ProjectRepository(session).list_by_user(user_id)


def get_project(session: Session, project_id: int, *, user_id: int) -> Project:
    """Return the project owned by ``user_id`` or raise an error."""

    project = ProjectRepository(session).get_for_user(project_id, user_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def create_project(
    session: Session,
    *,
    user_id: int,
    name: str,
    description: str | None = None,
    stage: str = "idea",
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    repo_url: str | None = None,
) -> Project:
    """Create a project for ``user_id``."""

    _validate_stage(stage)
    project = Project(
        id=None,
        user_id=user_id,
        name=name,
        description=description or None,
        stage=stage,
        start_date=start_date,
        end_date=end_date,
        repo_url=repo_url or None,
        created_at=None,
        updated_at=None,
    )
    return ProjectRepository(session).create(project)


def update_project(
    session: Session,
    project_id: int,
    *,
    user_id: int,
    changes: Mapping[str, Any],
) -> Project:
    """Apply ``changes`` to a project; keys absent from ``changes`` are kept."""

    project = get_project(session, project_id, user_id=user_id)
    for field_name in _UPDATABLE_FIELDS:
        if field_name not in changes:
            continue
        value = changes[field_name]
        if value is None and field_name not in _NULLABLE_FIELDS:
            continue
        setattr(project, field_name, value)
    _validate_stage(project.stage)
    if not project.repo_url:
        project.repo_url = None
    return ProjectRepository(session).update(project)


def delete_project(session: Session, project_id: int, *, user_id: int) -> None:
    """Remove a project and everything it owns."""

    project = get_project(session, project_id, user_id=user_id)
    ProjectRepository(session).delete(project.id)


def list_project_activity(
    session: Session, project_id: int, *, user_id: int, limit: int = 20
) -> list[ActivityEvent]:
    """Return the stored activity of a project, newest first."""

    project = get_project(session, project_id, user_id=user_id)
    return ActivityEventRepository(session).list_for_project(project.id, limit=limit)


__all__ = [
    "create_project",
    "delete_project",
    "get_project",
    "list_project_activity",
    "list_projects",
    "update_project",
]
