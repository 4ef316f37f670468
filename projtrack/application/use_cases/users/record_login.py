"""Use case for registering the last login of a user."""

from sqlalchemy.orm import Session

from projtrack.infrastructure.repositories import UserRepository
from projtrack.utils import utc_now


def record_login(session: Session, user_id: int) -> None:
    """Persist the last login timestamp for the given user."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if not user:
        return

    user.last_login = utc_now()
    repository.update(user)
