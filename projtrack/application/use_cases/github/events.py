"""Write normalized events to the activity log."""

from __future__ import annotations

import logging

from projtrack.domain.entities import ActivityEvent
from projtrack.infrastructure.repositories import ActivityEventRepository

logger = logging.getLogger(__name__)


def apply_event(repository: ActivityEventRepository, event: ActivityEvent) -> ActivityEvent:
    """Upsert ``event``; failures are logged with the event identity and re-raised."""

    try:
        return repository.apply(event)
    except Exception:
        logger.exception(
            "Failed to apply %s %s to project %s",
            event.kind,
            event.external_id,
            event.project_id,
        )
        raise


__all__ = ["apply_event"]
