"""SQLAlchemy model for tracked projects."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from projtrack.infrastructure.database import Base


class ProjectModel(Base):
    """Database representation of a project and its optional repository link."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    stage = Column(String(20), nullable=False, default="idea")
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    repo_url = Column(String(500), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
    owner = relationship("UserModel", back_populates="projects")
    milestones = relationship(
        "MilestoneModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    events = relationship(
        "ActivityEventModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["ProjectModel"]
