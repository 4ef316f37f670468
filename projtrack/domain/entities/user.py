"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    github_login: str | None
    github_token: str | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    def has_github_credential(self) -> bool:
        """Return ``True`` when an access token for GitHub is stored."""

        return bool(self.github_token)


__all__ = ["User"]
