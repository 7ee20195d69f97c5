"""SQLAlchemy model for recorded health checks."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from status_page.core.database import Base, CreatedAtMixin, IntegerPKMixin, UTCDateTime


class StatusCheck(Base, IntegerPKMixin, CreatedAtMixin):
    """One probe result. Rows are append-only; retention deletes old ones.

    All results from a single check pass share the same ``timestamp``.
    """

    __tablename__ = "status_checks"
    __table_args__ = (Index("ix_status_checks_component_timestamp", "component", "timestamp"),)

    timestamp: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    component: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    response_time_ms: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)
    status_code: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON(), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<StatusCheck(component={self.component!r}, status={self.status!r}, "
            f"timestamp={self.timestamp!r})>"
        )
