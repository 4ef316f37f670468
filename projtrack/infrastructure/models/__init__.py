"""ORM models used by the application infrastructure."""

from .activity_event import ActivityEventModel
from .milestone import MilestoneModel
from .project import ProjectModel
from .task import TaskModel
from .user import UserModel

__all__ = [
    "ActivityEventModel",
    "MilestoneModel",
    "ProjectModel",
    "TaskModel",
    "UserModel",
]
