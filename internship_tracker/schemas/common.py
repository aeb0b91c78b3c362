"""Shared response envelope and pagination schemas."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel):
    """Envelope shared by every endpoint."""

    success: bool = True
    message: Optional[str] = None


class PaginationInfo(CamelModel):
    """Pagination summary returned alongside a page of records."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC; aware input is converted first."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def blank_to_none(value):
    """Treat empty strings sent for optional dates as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
