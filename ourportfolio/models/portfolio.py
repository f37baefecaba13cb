"""Portfolio model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ourportfolio.database import Base


class Portfolio(Base):
    """Published portfolio owned by a single user."""

    __tablename__ = "portfolio"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(256), nullable=False)
    tech_stack = Column(String(512), nullable=True)
    residence = Column(String(128), nullable=True)
    location = Column(String(128), nullable=True)
    telephone = Column(String(32), nullable=True)
    experience = Column(String(256), nullable=True)
    description = Column(Text, nullable=True)
    youtube_url = Column(String(512), nullable=True)
    blog_url = Column(String(512), nullable=True)
    github_id = Column(String(128), nullable=True)
    category = Column(String(64), nullable=True, index=True)
    filter = Column(String(64), nullable=True, index=True)
    portfolio_image = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    user = relationship("User", lazy="joined")
