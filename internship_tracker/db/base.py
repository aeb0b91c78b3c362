"""
Declarative base shared by every table.

Each row gets a UUID primary key and audit timestamps. Timestamps are naive UTC
throughout the database; request schemas convert aware input before it lands.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Models name their own tables; the base contributes id and timestamps."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def touch(self) -> None:
        """Mark the row modified, e.g. when only its child rows changed."""
        self.updated_at = utcnow()
