"""Shared response envelope and pagination schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """Uniform wrapper for every API response. Success is read from status_code only."""

    status_code: int
    message: str
    data: T | None = None

    @classmethod
    def success(cls, message: str, data: T | None = None, status_code: int = 200) -> "ResponseEnvelope[T]":
        return cls(status_code=status_code, message=message, data=data)


class SliceResponse(BaseModel, Generic[T]):
    """Cursor page: items plus whether more exist, no total count."""

    items: list[T]
    size: int
    has_next: bool


class PageResponse(BaseModel, Generic[T]):
    """Offset page with total count."""

    items: list[T]
    page: int
    size: int
    total: int
    total_pages: int
