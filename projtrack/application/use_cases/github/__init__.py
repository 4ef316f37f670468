"""Use cases mirroring GitHub activity into the project activity log."""

from .errors import (
    ActivitySyncError,
    InvalidRepositoryUrlError,
    NoCredentialError,
    NoRepositoryLinkedError,
    ProjectNotFoundError,
)
from .normalizer import PayloadValidationError
from .repositories import list_user_repositories
from .resolver import resolve_project_for_repository
from .sync import SyncResult, sync_project_activity
from .webhook import (
    WEBHOOK_STATUS_IGNORED,
    WEBHOOK_STATUS_OK,
    WebhookResult,
    process_webhook_delivery,
)

__all__ = [
    "ActivitySyncError",
    "InvalidRepositoryUrlError",
    "NoCredentialError",
    "NoRepositoryLinkedError",
    "PayloadValidationError",
    "ProjectNotFoundError",
    "SyncResult",
    "WEBHOOK_STATUS_IGNORED",
    "WEBHOOK_STATUS_OK",
    "WebhookResult",
    "list_user_repositories",
    "process_webhook_delivery",
    "resolve_project_for_repository",
    "sync_project_activity",
]
