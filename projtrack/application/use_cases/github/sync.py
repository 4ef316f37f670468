"""Pull-style synchronization of a project's recent GitHub activity."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from projtrack.infrastructure.github_client import GitHubClient, parse_repository_url
from projtrack.infrastructure.repositories import (
    ActivityEventRepository,
    ProjectRepository,
    UserRepository,
)
from projtrack.utils import ensure_utc, utc_now

from .errors import (
    InvalidRepositoryUrlError,
    NoCredentialError,
    NoRepositoryLinkedError,
    ProjectNotFoundError,
)
from .events import apply_event
from .normalizer import (
    PayloadValidationError,
    commit_payload_from_api,
    normalize_commit,
    normalize_pull_request,
)

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 30

GitHubClientFactory = Callable[[str], GitHubClient]


@dataclass(frozen=True)
class SyncResult:
    """Number of commits and pull requests applied by a sync."""

    commits: int
    pull_requests: int


def sync_project_activity(
    session: Session,
    project_id: int,
    *,
    client_factory: GitHubClientFactory,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    now: datetime | None = None,
) -> SyncResult:
    """Fetch the recent commits and pull requests of a project's repository.

    The whole window is fetched and re-applied on every call; the upsert
    keeps the log free of duplicates, including events already delivered by
    webhook. Pull requests have no server-side time filter so those created
    before the window are dropped here. Both lists are fetched before any
    event is applied, and a failure of either request propagates as
    :class:`~projtrack.infrastructure.github_client.GitHubAPIError`.
    """

    project = ProjectRepository(session).get(project_id)
    if project is None:
        raise ProjectNotFoundError("Project not found")
    if not project.repo_url:
        raise NoRepositoryLinkedError("Project has no linked repository")

    coordinates = parse_repository_url(project.repo_url)
    if coordinates is None:
        raise InvalidRepositoryUrlError("Invalid repository URL")

    token = UserRepository(session).get_github_token(project.user_id)
    if not token:
        raise NoCredentialError("No GitHub token available")

    window_start = ensure_utc(now or utc_now()) - timedelta(days=lookback_days)
    logger.info(
        "Syncing project %s from %s since %s",
        project.id,
        coordinates.full_name,
        window_start.isoformat(),
    )

    with client_factory(token) as client:
        api_commits = client.list_commits(coordinates, since=window_start)
        api_pull_requests = client.list_pull_requests(coordinates, state="all")

    repository = ActivityEventRepository(session)

    commit_count = 0
    for api_commit in api_commits:
        try:
            event = normalize_commit(project.id, commit_payload_from_api(api_commit))
        except PayloadValidationError as exc:
            logger.warning(
                "Skipping malformed commit %s for project %s: %s",
                api_commit.get("sha"),
                project.id,
                exc,
            )
            continue
        apply_event(repository, event)
        commit_count += 1

    pull_request_count = 0
    for api_pull_request in api_pull_requests:
        try:
            event = normalize_pull_request(project.id, api_pull_request)
        except PayloadValidationError as exc:
            logger.warning(
                "Skipping malformed pull request %s for project %s: %s",
                api_pull_request.get("id"),
                project.id,
                exc,
            )
            continue
        if event.occurred_at < window_start:
            continue
        apply_event(repository, event)
        pull_request_count += 1

    logger.info(
        "Synced %s commit(s) and %s pull request(s) for project %s",
        commit_count,
        pull_request_count,
        project.id,
    )
    return SyncResult(commits=commit_count, pull_requests=pull_request_count)


__all__ = [
    "DEFAULT_LOOKBACK_DAYS",
    "GitHubClientFactory",
    "SyncResult",
    "sync_project_activity",
]
