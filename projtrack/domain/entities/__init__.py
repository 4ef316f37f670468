"""Domain entities exposed by the application."""

from .activity_event import (
    ACTIVITY_KIND_COMMIT,
    ACTIVITY_KIND_ISSUE,
    ACTIVITY_KIND_PULL_REQUEST,
    ACTIVITY_KINDS,
    UNKNOWN_ACTOR,
    ActivityEvent,
)
from .milestone import MILESTONE_STATUSES, Milestone
from .project import PROJECT_STAGES, Project
from .task import TASK_STATUSES, TASK_TYPES, Task
from .user import User

__all__ = [
    "ACTIVITY_KIND_COMMIT",
    "ACTIVITY_KIND_ISSUE",
    "ACTIVITY_KIND_PULL_REQUEST",
    "ACTIVITY_KINDS",
    "ActivityEvent",
    "MILESTONE_STATUSES",
    "Milestone",
    "PROJECT_STAGES",
    "Project",
    "TASK_STATUSES",
    "TASK_TYPES",
    "Task",
    "UNKNOWN_ACTOR",
    "User",
]
