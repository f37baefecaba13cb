"""Pydantic schemas for project endpoints."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


@dataclass
class ProjectFields:
    """Editable project attributes collected from a multipart form."""

    title: str
    term: str | None = None
    people: str | None = None
    position: str | None = None
    description: str | None = None


class ProjectResponse(BaseModel):
    id: int
    title: str
    term: str | None
    people: str | None
    position: str | None
    description: str | None
    user_id: int
    nickname: str
    images: list[str] = []
    created_at: datetime
