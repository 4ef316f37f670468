"""Task schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaskType = Literal["task", "bug", "improvement", "idea"]
TaskStatus = Literal["todo", "in_progress", "blocked", "done"]


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: TaskType = "task"
    status: TaskStatus = "todo"
    description: str | None = Field(default=None, max_length=1000)


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    type: TaskType | None = None
    status: TaskStatus | None = None
    description: str | None = Field(default=None, max_length=1000)
    order: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class TaskRead(BaseModel):
    id: int
    milestone_id: int
    title: str
    type: TaskType
    status: TaskStatus
    description: str | None
    order: int
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
