"""SQLAlchemy model for scheduled maintenance windows."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from status_page.core.database import TimestampedBase, UTCDateTime
from status_page.features.status.levels import MaintenanceStatus


class Maintenance(TimestampedBase):
    __tablename__ = "maintenance"
    __table_args__ = (
        Index("ix_maintenance_status_scheduled_start", "status", "scheduled_start"),
        Index("ix_maintenance_scheduled_start", "scheduled_start"),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    affected_components: Mapped[list[str]] = mapped_column(JSON(), nullable=False, default=list)
    scheduled_start: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    scheduled_end: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=MaintenanceStatus.SCHEDULED.value
    )
    created_by: Mapped[str] = mapped_column(String(320), nullable=False)

    def __repr__(self) -> str:
        return f"<Maintenance(id={self.id}, title={self.title!r}, status={self.status!r})>"
