"""
Declarative base and column mixins for the ORM models.

Dependencies: sqlalchemy
System role: Shared table conventions (UUID keys, UTC timestamps)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for every table created by ``create_tables``."""


class UUIDMixin:
    """
    UUID primary key.

    The generic ``Uuid`` type maps to a native UUID column on PostgreSQL and a
    32-character string on SQLite. Application code normally supplies the ID
    itself; the default only covers direct inserts.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """
    Row creation and last-write timestamps, both UTC.

    ``created_at`` is indexed because listings are ordered by it.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utc_now,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utc_now,
        onupdate=_utc_now,
        nullable=False,
    )
