"""Map an external repository URL onto the project that tracks it."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from projtrack.domain.entities import Project
from projtrack.infrastructure.repositories import ProjectRepository

logger = logging.getLogger(__name__)


def resolve_project_for_repository(session: Session, repository_url: str) -> Project | None:
    """Return the project linked to ``repository_url`` or ``None``.

    The URL is compared verbatim with the stored link: no trailing slash,
    ``.git`` suffix or case normalization happens here. When several projects
    claim the same URL the one with the lowest id wins and the anomaly is
    logged.
    """

    candidates = ProjectRepository(session).list_by_repo_url(repository_url, limit=2)
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "Repository %s is linked to several projects; using project %s",
            repository_url,
            candidates[0].id,
        )
    return candidates[0]


__all__ = ["resolve_project_for_repository"]
