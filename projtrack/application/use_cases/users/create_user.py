"""Use case for creating users."""

from sqlalchemy.orm import Session

from projtrack.domain.entities import User
from projtrack.infrastructure.repositories import UserRepository
from projtrack.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        msg = "Email address is already registered"
        raise ValueError(msg)

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        github_login=None,
        github_token=None,
        is_active=True,
        last_login=None,
        created_at=None,
        updated_at=None,
    )

    return repository.create(user)
