"""Pydantic schemas for the project activity feed."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityEventRead(BaseModel):
    id: int
    kind: str = Field(..., description="commit, pull_request or issue")
    external_id: str = Field(..., description="Identifier of the event on GitHub")
    occurred_at: datetime
    actor: str
    title: str
    link: str
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Kind specific details such as the pull request number",
    )
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ActivityEventRead"]
