"""Pydantic schemas for portfolio endpoints."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


@dataclass
class PortfolioFields:
    """Editable portfolio attributes collected from a multipart form."""

    title: str
    tech_stack: str | None = None
    residence: str | None = None
    location: str | None = None
    telephone: str | None = None
    experience: str | None = None
    description: str | None = None
    youtube_url: str | None = None
    blog_url: str | None = None
    github_id: str | None = None
    category: str | None = None
    filter: str | None = None


class PortfolioResponse(BaseModel):
    id: int
    title: str
    tech_stack: str | None
    experience: str | None
    category: str | None
    filter: str | None
    portfolio_image: str | None
    user_id: int
    nickname: str
    profile_image: str | None
    created_at: datetime


class PortfolioDetailResponse(PortfolioResponse):
    residence: str | None
    location: str | None
    telephone: str | None
    description: str | None
    youtube_url: str | None
    blog_url: str | None
    github_id: str | None
