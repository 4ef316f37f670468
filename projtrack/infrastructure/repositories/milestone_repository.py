"""Persistence layer for milestones."""

from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from projtrack.domain.entities import Milestone
from projtrack.infrastructure.models import MilestoneModel, ProjectModel
from projtrack.infrastructure.repositories.task_repository import TaskRepository
from projtrack.utils import ensure_naive_utc, ensure_utc


class MilestoneRepository:
    """Provide CRUD operations for :class:`Milestone` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_project(self, project_id: int) -> list[Milestone]:
        query = (
            self.session.query(MilestoneModel)
            .options(selectinload(MilestoneModel.tasks))
            .filter(MilestoneModel.project_id == project_id)
            .order_by(MilestoneModel.start_date.asc(), MilestoneModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get_for_user(self, milestone_id: int, user_id: int) -> Milestone | None:
        """Return the milestone when its project is owned by ``user_id``."""

        model = self._get_model_for_user(milestone_id, user_id)
        return self._to_entity(model) if model else None

    def create(self, milestone: Milestone) -> Milestone:
        model = MilestoneModel(project_id=milestone.project_id)
        self._apply_entity_to_model(model, milestone)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, milestone: Milestone) -> Milestone:
        model = self.session.get(MilestoneModel, milestone.id)
        if model is None:
            msg = f"Milestone with id {milestone.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, milestone)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, milestone_id: int) -> bool:
        model = self.session.get(MilestoneModel, milestone_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model_for_user(self, milestone_id: int, user_id: int) -> MilestoneModel | None:
        return (
            self.session.query(MilestoneModel)
            .join(ProjectModel, MilestoneModel.project_id == ProjectModel.id)
            .options(selectinload(MilestoneModel.tasks))
            .filter(MilestoneModel.id == milestone_id, ProjectModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: MilestoneModel) -> Milestone:
        return Milestone(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            description=model.description,
            start_date=ensure_utc(model.start_date),
            end_date=ensure_utc(model.end_date),
            status=model.status,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            tasks=[TaskRepository._to_entity(task) for task in model.tasks],
        )

    @staticmethod
    def _apply_entity_to_model(model: MilestoneModel, milestone: Milestone) -> None:
        model.title = milestone.title
        model.description = milestone.description
        model.start_date = ensure_naive_utc(milestone.start_date)
        model.end_date = ensure_naive_utc(milestone.end_date)
        model.status = milestone.status


__all__ = ["MilestoneRepository"]
