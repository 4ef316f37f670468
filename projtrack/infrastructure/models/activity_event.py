"""SQLAlchemy model for the per-project activity log."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from projtrack.infrastructure.database import Base

_details_json_type = JSON().with_variant(JSONB(), "postgresql")


class ActivityEventModel(Base):
    """Database representation of an :class:`ActivityEvent`.

    The ``(project_id, external_id)`` unique constraint is what makes
    concurrent upserts of the same event converge on a single row.
    """

    __tablename__ = "activity_event"
    __table_args__ = (
        UniqueConstraint(
            "project_id", "external_id", name="uq_activity_event_project_external"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind = Column(String(20), nullable=False)
    external_id = Column(String(100), nullable=False)
    occurred_at = Column(DateTime, nullable=False, index=True)
    actor = Column(String(100), nullable=False)
    title = Column(String(500), nullable=False)
    link = Column(String(500), nullable=False)
    details = Column(_details_json_type, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())
    project = relationship("ProjectModel", back_populates="events")


__all__ = ["ActivityEventModel"]
