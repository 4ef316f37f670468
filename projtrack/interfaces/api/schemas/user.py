"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    github_login: str | None
    github_connected: bool
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class GitHubCredentialUpdate(BaseModel):
    """Personal access token used when polling GitHub; ``None`` clears it."""

    token: str | None = Field(default=None, max_length=255)
    login: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(extra="forbid")
