"""SQLAlchemy models for incidents and their timeline updates."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from status_page.core.database import Base, IntegerPKMixin, TimestampedBase, UTCDateTime, utcnow
from status_page.features.status.levels import IncidentStatus


class Incident(TimestampedBase):
    """An admin-reported incident affecting one or more components."""

    __tablename__ = "incidents"
    __table_args__ = (
        Index("ix_incidents_status_started_at", "status", "started_at"),
        Index("ix_incidents_started_at", "started_at"),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=IncidentStatus.INVESTIGATING.value
    )
    severity: Mapped[str] = mapped_column(String(16), nullable=False)
    affected_components: Mapped[list[str]] = mapped_column(JSON(), nullable=False, default=list)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    resolved_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    postmortem: Mapped[str | None] = mapped_column(Text(), nullable=True)
    created_by: Mapped[str] = mapped_column(String(320), nullable=False)

    updates: Mapped[list[IncidentUpdate]] = relationship(
        "IncidentUpdate",
        back_populates="incident",
        order_by="IncidentUpdate.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Incident(id={self.id}, title={self.title!r}, status={self.status!r})>"


class IncidentUpdate(Base, IntegerPKMixin):
    """One timeline entry. ``position`` preserves insertion order."""

    __tablename__ = "incident_updates"

    incident_id: Mapped[int] = mapped_column(
        ForeignKey("incidents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    message: Mapped[str] = mapped_column(Text(), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    position: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)

    incident: Mapped[Incident] = relationship("Incident", back_populates="updates")
