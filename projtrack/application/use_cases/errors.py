"""Errors shared by the application use cases."""


class NotFoundError(ValueError):
    """Raised when a resource does not exist or is not visible to the caller."""


__all__ = ["NotFoundError"]
