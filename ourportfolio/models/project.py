"""Project and project image models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ourportfolio.database import Base


class Project(Base):
    """Project entry owned by a single user."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(256), nullable=False)
    term = Column(String(128), nullable=True)
    people = Column(String(128), nullable=True)
    position = Column(String(128), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    user = relationship("User", lazy="joined")
    images = relationship(
        "ProjectImage",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectImage.id",
    )


class ProjectImage(Base):
    """Image attached to a project."""

    __tablename__ = "project_image"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(512), nullable=False)
