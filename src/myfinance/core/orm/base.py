"""Declarative base and mixins for all myfinance ORM models.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map``
that maps Python built-in types to portable SA column types.

Mixins
------
* **TimestampMixin**: ``created_at`` / ``updated_at`` set application-side
  in UTC, so the same DDL works on SQLite and PostgreSQL.
"""

from __future__ import annotations

import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class Base(DeclarativeBase):
    """Shared declarative base for every myfinance table.

    * ``str``   → ``Text``
    * ``datetime.datetime`` → ``DateTime(timezone=True)``
    * ``Decimal`` → ``Numeric(15, 3)``
    """

    type_annotation_map = {
        str: Text,
        datetime.datetime: DateTime(timezone=True),
        Decimal: Numeric(15, 3),
    }


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at``."""

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


# UUIDs are stored as their 36-char text form.
UUID_TEXT = String(36)
