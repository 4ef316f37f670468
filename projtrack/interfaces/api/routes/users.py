"""Routes for registering users and managing their GitHub credential."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from projtrack.application.use_cases.users import (
    create_user as create_user_uc,
    set_github_credential as set_github_credential_uc,
)
from projtrack.domain.entities import User
from projtrack.infrastructure.database import get_db
from projtrack.interfaces.api.dependencies import get_current_active_user
from projtrack.interfaces.api.schemas import GitHubCredentialUpdate, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


def _to_read_model(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        github_login=user.github_login,
        github_connected=user.has_github_credential(),
        is_active=user.is_active,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a new account able to log in to the API."""

    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            email=user_in.email,
            password=user_in.password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return _to_read_model(current_user)


@router.put("/me/github-token", response_model=UserRead)
def update_github_token(
    credential_in: GitHubCredentialUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Store, replace or clear the GitHub access token used for syncing."""

    try:
        user = set_github_credential_uc(
            db,
            current_user.id,
            token=credential_in.token,
            login=credential_in.login,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(user)
