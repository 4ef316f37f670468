"""Use case listing the GitHub repositories available to a user."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from projtrack.infrastructure.repositories import UserRepository

from .errors import NoCredentialError
from .sync import GitHubClientFactory


def list_user_repositories(
    session: Session, user_id: int, *, client_factory: GitHubClientFactory
) -> list[dict[str, Any]]:
    """Return the repositories the user can link to a project."""

    token = UserRepository(session).get_github_token(user_id)
    if not token:
        raise NoCredentialError("No GitHub token available")

    with client_factory(token) as client:
        return client.list_user_repositories()


__all__ = ["list_user_repositories"]
