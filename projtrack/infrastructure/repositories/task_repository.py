"""Persistence layer for tasks."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from projtrack.domain.entities import Task
from projtrack.infrastructure.models import MilestoneModel, ProjectModel, TaskModel
from projtrack.utils import ensure_utc


class TaskRepository:
    """Provide CRUD operations for :class:`Task` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_milestone(self, milestone_id: int) -> list[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.milestone_id == milestone_id)
            .order_by(TaskModel.order.asc(), TaskModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get_for_user(self, task_id: int, user_id: int) -> Task | None:
        """Return the task when the project it belongs to is owned by ``user_id``."""

        model = (
            self.session.query(TaskModel)
            .join(MilestoneModel, TaskModel.milestone_id == MilestoneModel.id)
            .join(ProjectModel, MilestoneModel.project_id == ProjectModel.id)
            .filter(TaskModel.id == task_id, ProjectModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def next_order(self, milestone_id: int) -> int:
        """Return the position following the last task of the milestone."""

        current_max = (
            self.session.query(func.max(TaskModel.order))
            .filter(TaskModel.milestone_id == milestone_id)
            .scalar()
        )
        return 0 if current_max is None else current_max + 1

    def create(self, task: Task) -> Task:
        model = TaskModel(milestone_id=task.milestone_id)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id)
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: int) -> bool:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            milestone_id=model.milestone_id,
            title=model.title,
            type=model.type,
            status=model.status,
            description=model.description,
            order=model.order,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.type = task.type
        model.status = task.status
        model.description = task.description
        model.order = task.order


__all__ = ["TaskRepository"]
