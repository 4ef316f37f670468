"""FastAPI dependency utilities."""

from hashlib import sha256

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from projtrack.application.use_cases.github.sync import GitHubClientFactory
from projtrack.config import get_settings
from projtrack.domain.entities import User
from projtrack.infrastructure.database import get_db
from projtrack.infrastructure.github_client import GitHubClient
from projtrack.infrastructure.repositories import UserRepository
from projtrack.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def password_signature(user: User) -> str:
    """Return the claim binding a token to the user's current password."""

    return sha256(f"{user.password}:{int(user.is_active)}".encode()).hexdigest()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_exception()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("User not found")

    # Tokens issued before a password change stop working.
    if signature_claim != password_signature(user):
        raise _credentials_exception()

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_github_client_factory() -> GitHubClientFactory:
    """Return a factory building GitHub clients from the application settings."""

    settings = get_settings()

    def _factory(token: str) -> GitHubClient:
        return GitHubClient.from_settings(token, settings)

    return _factory


__all__ = [
    "get_current_active_user",
    "get_current_user",
    "get_github_client_factory",
    "oauth2_scheme",
    "password_signature",
]
