"""Base database model classes with composable mixins.

This module provides the foundation for the status page models:
- Integer primary keys
- Timestamp tracking (created_at, updated_at)
- Consistent constraint naming for migrations

Examples:
    Model with integer PK and both timestamps:

    class Incident(TimestampedBase):
        __tablename__ = "incidents"
        title: Mapped[str] = mapped_column(String(255))

    Append-only model that only records creation time:

    class StatusCheck(Base, IntegerPKMixin, CreatedAtMixin):
        __tablename__ = "status_checks"
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from .types import UTCDateTime

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base with automatic table naming.

    The automatic table naming can be overridden by setting __tablename__
    explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


# ============================================================================
# Primary Key Mixins
# ============================================================================


class IntegerPKMixin:
    """Integer auto-increment primary key."""

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing integer primary key",
    )


# ============================================================================
# Timestamp Mixins
# ============================================================================


class CreatedAtMixin:
    """Creation timestamp for append-only records.

    Uses both a Python-side default (for test environments) and a database
    server default (for direct SQL inserts).
    """

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record creation",
    )


class TimestampMixin(CreatedAtMixin):
    """Timestamp tracking for create and update operations.

    Provides:
        created_at: Timestamp of record creation (immutable)
        updated_at: Timestamp of last modification (auto-updates)
    """

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp of last update",
    )


# ============================================================================
# Convenience Base Classes
# ============================================================================


class TimestampedBase(Base, IntegerPKMixin, TimestampMixin):
    """Convenience base with integer PK and both timestamps."""

    __abstract__ = True


__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "CreatedAtMixin",
    "IntegerPKMixin",
    "TimestampMixin",
    "TimestampedBase",
    "utcnow",
]
