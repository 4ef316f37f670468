"""Project schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProjectStage = Literal["idea", "planning", "execution", "monitoring", "done"]


class _RepositoryLinkMixin(BaseModel):
    repo_url: str | None = Field(default=None, max_length=500)

    @field_validator("repo_url")
    @classmethod
    def _validate_repo_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError("Repository URL must be an http(s) URL")
        return value


class ProjectCreate(_RepositoryLinkMixin):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    stage: ProjectStage = "idea"
    start_date: datetime | None = None
    end_date: datetime | None = None


class ProjectUpdate(_RepositoryLinkMixin):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    stage: ProjectStage | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    model_config = ConfigDict(extra="forbid")


class ProjectRead(BaseModel):
    id: int
    name: str
    description: str | None
    stage: ProjectStage
    start_date: datetime | None
    end_date: datetime | None
    repo_url: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
