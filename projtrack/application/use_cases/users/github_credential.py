"""Use case for storing the GitHub credential of a user."""

import logging

from sqlalchemy.orm import Session

from projtrack.domain.entities import User
from projtrack.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def set_github_credential(
    session: Session,
    user_id: int,
    *,
    token: str | None,
    login: str | None = None,
) -> User:
    """Store or clear the access token used to poll GitHub for the user.

    The token is owned by the identity layer; the sync engine only reads it.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    user.github_token = token or None
    user.github_login = login if token else None
    updated = repository.update(user)
    logger.info(
        "GitHub credential %s for user %s",
        "stored" if updated.github_token else "cleared",
        user_id,
    )
    return updated
