"""Errors raised by the GitHub synchronization use cases."""

from ..errors import NotFoundError


class ActivitySyncError(ValueError):
    """Base class for configuration problems that prevent a sync."""


class ProjectNotFoundError(ActivitySyncError, NotFoundError):
    """Raised when the requested project does not exist."""


class NoRepositoryLinkedError(ActivitySyncError):
    """Raised when the project has no linked repository."""


class InvalidRepositoryUrlError(ActivitySyncError):
    """Raised when the linked repository URL does not point at GitHub."""


class NoCredentialError(ActivitySyncError):
    """Raised when the project owner has no GitHub access token stored."""


__all__ = [
    "ActivitySyncError",
    "InvalidRepositoryUrlError",
    "NoCredentialError",
    "NoRepositoryLinkedError",
    "ProjectNotFoundError",
]
