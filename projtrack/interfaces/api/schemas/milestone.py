"""Milestone schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .task import TaskRead

MilestoneStatus = Literal["on_track", "at_risk", "overdue", "completed"]


class MilestoneCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: MilestoneStatus = "on_track"


class MilestoneUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: MilestoneStatus | None = None

    model_config = ConfigDict(extra="forbid")


class MilestoneRead(BaseModel):
    id: int
    project_id: int
    title: str
    description: str | None
    start_date: datetime | None
    end_date: datetime | None
    status: MilestoneStatus
    created_at: datetime | None
    updated_at: datetime | None
    tasks: list[TaskRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
