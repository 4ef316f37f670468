"""Repository implementations for infrastructure layer."""

from .activity_event_repository import ActivityEventRepository
from .milestone_repository import MilestoneRepository
from .project_repository import ProjectRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityEventRepository",
    "MilestoneRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserRepository",
]
