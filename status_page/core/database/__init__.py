"""Core database package with composable base classes and a thin repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - IntegerPKMixin: Integer primary key
    - CreatedAtMixin, TimestampMixin: created_at / updated_at tracking
    - TimestampedBase: Integer PK + timestamps

Repository:
    - BaseRepository[T]: Generic CRUD with explicit session passing
    - SearchResult[T]: Paginated result container

Custom Types:
    - UTCDateTime: Timezone-aware datetime normalized to UTC
"""

from __future__ import annotations

from .base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    IntegerPKMixin,
    TimestampedBase,
    TimestampMixin,
    utcnow,
)
from .exceptions import NotFoundError, RepositoryError
from .repository import BaseRepository, SearchResult
from .types import UTCDateTime

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CreatedAtMixin",
    "IntegerPKMixin",
    "NotFoundError",
    "RepositoryError",
    "SearchResult",
    "TimestampMixin",
    "TimestampedBase",
    "UTCDateTime",
    "utcnow",
]
