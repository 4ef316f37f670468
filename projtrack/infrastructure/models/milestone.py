"""SQLAlchemy model for project milestones."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from projtrack.infrastructure.database import Base


class MilestoneModel(Base):
    """Database representation of a milestone."""

    __tablename__ = "milestone"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default="on_track")
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())
    project = relationship("ProjectModel", back_populates="milestones")
    tasks = relationship(
        "TaskModel",
        back_populates="milestone",
        order_by="TaskModel.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["MilestoneModel"]
