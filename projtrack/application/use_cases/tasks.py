"""Use cases for managing the tasks of a milestone."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from projtrack.domain.entities import TASK_STATUSES, TASK_TYPES, Task
from projtrack.infrastructure.repositories import TaskRepository

from .errors import NotFoundError
from .milestones import get_milestone

_UPDATABLE_FIELDS = ("title", "type", "status", "description", "order")
_NULLABLE_FIELDS = frozenset({"description"})


def _validate(task: Task) -> None:
    if task.type not in TASK_TYPES:
        raise ValueError(f"Invalid task type '{task.type}'")
    if task.status not in TASK_STATUSES:
        raise ValueError(f"Invalid task status '{task.status}'")
    if task.order < 0:
        raise ValueError("Task order must be zero or positive")


def list_tasks(session: Session, milestone_id: int, *, user_id: int) -> list[Task]:
    milestone = get_milestone(session, milestone_id, user_id=user_id)
    return TaskRepository(session).list_by_milestone(milestone.id)


def get_task(session: Session, task_id: int, *, user_id: int) -> Task:
    task = TaskRepository(session).get_for_user(task_id, user_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def create_task(
    session: Session,
    milestone_id: int,
    *,
    user_id: int,
    title: str,
    type: str = "task",
    status: str = "todo",
    description: str | None = None,
) -> Task:
    """Append a task at the end of the milestone's board."""

    milestone = get_milestone(session, milestone_id, user_id=user_id)
    repository = TaskRepository(session)
    task = Task(
        id=None,
        milestone_id=milestone.id,
        title=title,
        type=type,
        status=status,
        description=description or None,
        order=repository.next_order(milestone.id),
        created_at=None,
        updated_at=None,
    )
    _validate(task)
    return repository.create(task)


def update_task(
    session: Session,
    task_id: int,
    *,
    user_id: int,
    changes: Mapping[str, Any],
) -> Task:
    task = get_task(session, task_id, user_id=user_id)
    for field_name in _UPDATABLE_FIELDS:
        if field_name not in changes:
            continue
        value = changes[field_name]
        if value is None and field_name not in _NULLABLE_FIELDS:
            continue
        setattr(task, field_name, value)
    _validate(task)
    return TaskRepository(session).update(task)


def delete_task(session: Session, task_id: int, *, user_id: int) -> None:
    task = get_task(session, task_id, user_id=user_id)
    TaskRepository(session).delete(task.id)


__all__ = [
    "create_task",
    "delete_task",
    "get_task",
    "list_tasks",
    "update_task",
]
