"""Persistence layer for the deduplicated activity log."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from projtrack.domain.entities import ActivityEvent
from projtrack.infrastructure.models import ActivityEventModel
from projtrack.utils import ensure_naive_utc, ensure_utc, utc_now

logger = logging.getLogger(__name__)

_CONFLICT_COLUMNS = ("project_id", "external_id")

# Dialects offering ``INSERT ... ON CONFLICT DO UPDATE``.
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class ActivityEventRepository:
    """Store :class:`ActivityEvent` records keyed by project and external id."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def apply(self, event: ActivityEvent) -> ActivityEvent:
        """Insert ``event`` or refresh the mutable fields of the stored copy.

        Identity fields (kind, timestamp, actor, link) keep the values of the
        first write. ``title`` and ``metadata`` always take the values of the
        latest call. The whole operation is a single statement on dialects
        supporting ``ON CONFLICT`` so concurrent deliveries of the same event
        never surface duplicate-key errors.
        """

        values = self._to_row(event)
        dialect_name = self.session.get_bind().dialect.name
        try:
            insert_factory = _UPSERT_INSERTS.get(dialect_name)
            if insert_factory is not None:
                self._upsert(insert_factory, values)
            else:
                self._insert_or_update(values)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "Could not store %s %s for project %s: %s",
                event.kind,
                event.external_id,
                event.project_id,
                exc.__class__.__name__,
            )
            raise

        model = self._get_model(event.project_id, event.external_id)
        if model is None:  # pragma: no cover - the row was just written
            msg = f"Activity event {event.external_id} was not persisted"
            raise RuntimeError(msg)
        return self._to_entity(model)

    def get(self, project_id: int, external_id: str) -> ActivityEvent | None:
        """Return the stored event for the idempotency key, if present."""

        model = self._get_model(project_id, external_id)
        return self._to_entity(model) if model else None

    def list_for_project(self, project_id: int, *, limit: int = 20) -> list[ActivityEvent]:
        """Return the newest events of a project ordered by ``occurred_at``."""

        query = (
            self.session.query(ActivityEventModel)
            .filter(ActivityEventModel.project_id == project_id)
            .order_by(ActivityEventModel.occurred_at.desc(), ActivityEventModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_for_project(self, project_id: int) -> int:
        return (
            self.session.query(func.count(ActivityEventModel.id))
            .filter(ActivityEventModel.project_id == project_id)
            .scalar()
            or 0
        )

    def _upsert(self, insert_factory: Callable[..., Any], values: dict[str, Any]) -> None:
        stmt = insert_factory(ActivityEventModel.__table__).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(_CONFLICT_COLUMNS),
            set_={
                "title": stmt.excluded.title,
                "details": stmt.excluded.details,
                "updated_at": values["updated_at"],
            },
        )
        self.session.execute(stmt)

    def _insert_or_update(self, values: dict[str, Any]) -> None:
        """Fallback for dialects without ``ON CONFLICT`` support.

        A unique violation means a concurrent writer inserted the row first,
        so the mutable fields are applied as an update instead.
        """

        table = ActivityEventModel.__table__
        try:
            with self.session.begin_nested():
                self.session.execute(insert(table).values(**values))
        except IntegrityError:
            logger.info(
                "Activity event %s already stored for project %s; updating instead",
                values["external_id"],
                values["project_id"],
            )
            self.session.execute(
                update(table)
                .where(
                    table.c.project_id == values["project_id"],
                    table.c.external_id == values["external_id"],
                )
                .values(
                    title=values["title"],
                    details=values["details"],
                    updated_at=values["updated_at"],
                )
            )

    def _get_model(self, project_id: int, external_id: str) -> ActivityEventModel | None:
        stmt = (
            select(ActivityEventModel)
            .where(
                ActivityEventModel.project_id == project_id,
                ActivityEventModel.external_id == external_id,
            )
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _to_row(event: ActivityEvent) -> dict[str, Any]:
        return {
            "project_id": event.project_id,
            "kind": event.kind,
            "external_id": event.external_id,
            "occurred_at": ensure_naive_utc(event.occurred_at),
            "actor": event.actor,
            "title": event.title,
            "link": event.link,
            "details": dict(event.metadata),
            "updated_at": ensure_naive_utc(utc_now()),
        }

    @staticmethod
    def _to_entity(model: ActivityEventModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            project_id=model.project_id,
            kind=model.kind,
            external_id=model.external_id,
            occurred_at=ensure_utc(model.occurred_at),
            actor=model.actor,
            title=model.title,
            link=model.link,
            metadata=dict(model.details or {}),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["ActivityEventRepository"]
