"""User model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from ourportfolio.database import Base


class User(Base):
    """Application user. Email and nickname stay reserved after a soft delete."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    nickname = Column(String(32), unique=True, nullable=False, index=True)
    profile_image = Column(String(512), nullable=True)
    kakao_id = Column(String(128), nullable=True)
    naver_id = Column(String(128), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
