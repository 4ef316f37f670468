"""Domain entity describing an externally sourced piece of project activity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

ACTIVITY_KIND_COMMIT: Final[str] = "commit"
ACTIVITY_KIND_PULL_REQUEST: Final[str] = "pull_request"
ACTIVITY_KIND_ISSUE: Final[str] = "issue"

ACTIVITY_KINDS: Final[tuple[str, ...]] = (
    ACTIVITY_KIND_COMMIT,
    ACTIVITY_KIND_PULL_REQUEST,
    ACTIVITY_KIND_ISSUE,
)

UNKNOWN_ACTOR: Final[str] = "unknown"


@dataclass
class ActivityEvent:
    """Canonical record of one happening observed on the source-control host.

    ``(project_id, external_id)`` identifies the event regardless of whether it
    arrived through a webhook delivery or a poll. Only ``title`` and
    ``metadata`` change after the first write.
    """

    project_id: int
    kind: str
    external_id: str
    occurred_at: datetime
    actor: str
    title: str
    link: str
    metadata: dict[str, Any] = field(default_factory=dict)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "ACTIVITY_KIND_COMMIT",
    "ACTIVITY_KIND_ISSUE",
    "ACTIVITY_KIND_PULL_REQUEST",
    "ACTIVITY_KINDS",
    "ActivityEvent",
    "UNKNOWN_ACTOR",
]
