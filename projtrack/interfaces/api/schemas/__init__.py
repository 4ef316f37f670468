from .activity import ActivityEventRead
from .auth import Token
from .github import GitHubRepositoryRead, SyncCounts, SyncResponse, WebhookResponse
from .milestone import MilestoneCreate, MilestoneRead, MilestoneUpdate
from .project import ProjectCreate, ProjectRead, ProjectUpdate
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import GitHubCredentialUpdate, UserCreate, UserRead

__all__ = [
    "ActivityEventRead",
    "GitHubCredentialUpdate",
    "GitHubRepositoryRead",
    "MilestoneCreate",
    "MilestoneRead",
    "MilestoneUpdate",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "SyncCounts",
    "SyncResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "Token",
    "UserCreate",
    "UserRead",
    "WebhookResponse",
]
