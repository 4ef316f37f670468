"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from projtrack.domain.entities import User
from projtrack.infrastructure.models import UserModel
from projtrack.utils import ensure_naive_utc, ensure_utc


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def get_github_token(self, user_id: int) -> str | None:
        """Return the GitHub access token stored for ``user_id``, if any."""

        token = (
            self.session.query(UserModel.github_token)
            .filter(UserModel.id == user_id)
            .scalar()
        )
        return token or None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            github_login=model.github_login,
            github_token=model.github_token,
            is_active=model.is_active,
            last_login=ensure_utc(model.last_login),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.password = user.password
        model.github_login = user.github_login
        model.github_token = user.github_token
        model.is_active = user.is_active
        model.last_login = ensure_naive_utc(user.last_login)


__all__ = ["UserRepository"]
