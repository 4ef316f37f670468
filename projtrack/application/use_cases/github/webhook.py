"""Use case applying a GitHub webhook delivery to the activity log."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

from sqlalchemy.orm import Session

from projtrack.infrastructure.repositories import ActivityEventRepository

from .events import apply_event
from .normalizer import (
    IssueDelivery,
    PayloadValidationError,
    PullRequestDelivery,
    PushDelivery,
    extract_repository_url,
    normalize_commit,
    normalize_issue,
    normalize_pull_request,
    parse_webhook_delivery,
)
from .resolver import resolve_project_for_repository

logger = logging.getLogger(__name__)

WEBHOOK_STATUS_OK: Final[str] = "ok"
WEBHOOK_STATUS_IGNORED: Final[str] = "ignored"


@dataclass(frozen=True)
class WebhookResult:
    """Outcome of processing a single delivery."""

    status: str
    project_id: int | None = None
    applied: int = 0
    rejected: int = 0


def process_webhook_delivery(
    session: Session, *, event_kind: str | None, payload: Any
) -> WebhookResult:
    """Apply the events contained in a verified webhook delivery.

    Deliveries for repositories no project tracks, and event kinds that are
    not mirrored, are ignored without touching the database. Inside a push,
    a malformed commit is logged and skipped while its siblings are still
    applied. Re-delivering the same payload leaves the log unchanged apart
    from refreshed titles and metadata.
    """

    if not event_kind:
        raise PayloadValidationError("Missing event kind header")

    repository_url = extract_repository_url(payload)
    project = resolve_project_for_repository(session, repository_url)
    if project is None:
        logger.info(
            "Ignoring %s delivery for untracked repository %s", event_kind, repository_url
        )
        return WebhookResult(status=WEBHOOK_STATUS_IGNORED)

    delivery = parse_webhook_delivery(event_kind, payload)
    if delivery is None:
        logger.info(
            "Ignoring unsupported %s delivery for project %s", event_kind, project.id
        )
        return WebhookResult(status=WEBHOOK_STATUS_IGNORED, project_id=project.id)

    repository = ActivityEventRepository(session)

    if isinstance(delivery, PushDelivery):
        applied = 0
        rejected = 0
        for commit in delivery.commits:
            try:
                event = normalize_commit(project.id, commit)
            except PayloadValidationError as exc:
                rejected += 1
                commit_id = commit.get("id") if isinstance(commit, dict) else None
                logger.warning(
                    "Skipping malformed commit %s in %s delivery for project %s: %s",
                    commit_id if isinstance(commit_id, str) else "<unknown>",
                    event_kind,
                    project.id,
                    exc,
                )
                continue
            apply_event(repository, event)
            applied += 1
        logger.info(
            "Applied %s commit(s) from push to project %s (%s rejected)",
            applied,
            project.id,
            rejected,
        )
        return WebhookResult(
            status=WEBHOOK_STATUS_OK,
            project_id=project.id,
            applied=applied,
            rejected=rejected,
        )

    if isinstance(delivery, PullRequestDelivery):
        event = normalize_pull_request(
            project.id, delivery.pull_request, action=delivery.action
        )
    elif isinstance(delivery, IssueDelivery):
        event = normalize_issue(project.id, delivery.issue, action=delivery.action)
    else:  # pragma: no cover - parse_webhook_delivery returns a closed set
        raise TypeError(f"Unhandled delivery type {type(delivery).__name__}")

    apply_event(repository, event)
    logger.info(
        "Applied %s %s (%s) to project %s",
        event.kind,
        event.external_id,
        delivery.action or "no action",
        project.id,
    )
    return WebhookResult(status=WEBHOOK_STATUS_OK, project_id=project.id, applied=1)


__all__ = [
    "WEBHOOK_STATUS_IGNORED",
    "WEBHOOK_STATUS_OK",
    "WebhookResult",
    "process_webhook_delivery",
]
