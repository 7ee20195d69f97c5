"""SQLAlchemy model for email subscribers."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from status_page.core.database import Base, CreatedAtMixin, IntegerPKMixin, UTCDateTime


class Subscriber(Base, IntegerPKMixin, CreatedAtMixin):
    """An email address receiving status and incident notifications.

    An empty ``components`` list means every component.
    """

    __tablename__ = "subscribers"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    verified: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False)
    verification_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, index=True
    )
    unsubscribe_token: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    components: Mapped[list[str]] = mapped_column(JSON(), nullable=False, default=list)
    verified_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    @validates("email")
    def _lower_email(self, key: str, value: str) -> str:
        return value.strip().lower()

    def wants(self, components: list[str]) -> bool:
        """Whether any of ``components`` falls within this subscriber's filter."""
        if not self.components:
            return True
        return any(component in self.components for component in components)

    def __repr__(self) -> str:
        return f"<Subscriber(id={self.id}, email={self.email!r}, verified={self.verified})>"
