"""Persistence layer for projects."""

from __future__ import annotations

from sqlalchemy.orm import Session

from projtrack.domain.entities import Project
from projtrack.infrastructure.models import ProjectModel
from projtrack.utils import ensure_naive_utc, ensure_utc


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_user(self, user_id: int) -> list[Project]:
        query = (
            self.session.query(ProjectModel)
            .filter(ProjectModel.user_id == user_id)
            .order_by(ProjectModel.updated_at.desc(), ProjectModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def get_for_user(self, project_id: int, user_id: int) -> Project | None:
        """Return the project only when it is owned by ``user_id``."""

        model = (
            self.session.query(ProjectModel)
            .filter(ProjectModel.id == project_id, ProjectModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_by_repo_url(self, repo_url: str, *, limit: int | None = None) -> list[Project]:
        """Return projects linked to ``repo_url`` ordered by id.

        The comparison is an exact string match.
        """

        query = (
            self.session.query(ProjectModel)
            .filter(ProjectModel.repo_url == repo_url)
            .order_by(ProjectModel.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get_by_repo_url(self, repo_url: str) -> Project | None:
        projects = self.list_by_repo_url(repo_url, limit=1)
        return projects[0] if projects else None

    def create(self, project: Project) -> Project:
        model = ProjectModel(user_id=project.user_id)
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            msg = f"Project with id {project.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, project_id: int) -> bool:
        """Delete a project together with its milestones, tasks and events.

        Returns ``True`` when a record was removed and ``False`` when the
        project does not exist.
        """

        model = self.session.get(ProjectModel, project_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            description=model.description,
            stage=model.stage,
            start_date=ensure_utc(model.start_date),
            end_date=ensure_utc(model.end_date),
            repo_url=model.repo_url,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: ProjectModel, project: Project) -> None:
        model.name = project.name
        model.description = project.description
        model.stage = project.stage
        model.start_date = ensure_naive_utc(project.start_date)
        model.end_date = ensure_naive_utc(project.end_date)
        model.repo_url = project.repo_url


__all__ = ["ProjectRepository"]
