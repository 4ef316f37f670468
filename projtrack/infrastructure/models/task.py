"""SQLAlchemy model for milestone tasks."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from projtrack.infrastructure.database import Base


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    milestone_id = Column(
        Integer,
        ForeignKey("milestone.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False, default="task")
    status = Column(String(20), nullable=False, default="todo")
    description = Column(String(1000), nullable=True)
    order = Column("position", Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())
    milestone = relationship("MilestoneModel", back_populates="tasks")


__all__ = ["TaskModel"]
