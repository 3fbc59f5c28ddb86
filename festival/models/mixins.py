"""Mixins for SQLAlchemy models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, String

from festival.database import UTCDateTime


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate an opaque entity identifier."""
    return uuid.uuid4().hex


class IdentityMixin:
    """Mixin to add an opaque string primary key."""

    id = Column(String(32), primary_key=True, default=new_id)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
