"""Refresh token model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from ourportfolio.database import Base


class RefreshToken(Base):
    """Server-side record of a user's current refresh token (one per user)."""

    __tablename__ = "refresh_token"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    token = Column(String(512), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
