"""initial tables

Revision ID: 4b1e7c2a9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b1e7c2a9d10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.Integer(),
        autoincrement=True,
        nullable=False,
        comment="Auto-incrementing integer primary key",
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
        comment="Timestamp of record creation",
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
        comment="Timestamp of last update",
    )


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "status_checks",
        _id_column(),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("component", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("response_time_ms", sa.Integer(), nullable=False),
        sa.Column("status_code", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_status_checks")),
    )
    op.create_index(
        "ix_status_checks_component_timestamp",
        "status_checks",
        ["component", "timestamp"],
        unique=False,
    )

    op.create_table(
        "incidents",
        _id_column(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("severity", sa.String(length=16), nullable=False),
        sa.Column("affected_components", sa.JSON(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("postmortem", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=320), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_incidents")),
    )
    op.create_index("ix_incidents_started_at", "incidents", ["started_at"], unique=False)
    op.create_index(
        "ix_incidents_status_started_at", "incidents", ["status", "started_at"], unique=False
    )

    op.create_table(
        "incident_updates",
        _id_column(),
        sa.Column("incident_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["incident_id"],
            ["incidents.id"],
            name=op.f("fk_incident_updates_incident_id_incidents"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_incident_updates")),
    )
    op.create_index(
        op.f("ix_incident_updates_incident_id"),
        "incident_updates",
        ["incident_id"],
        unique=False,
    )

    op.create_table(
        "maintenance",
        _id_column(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("affected_components", sa.JSON(), nullable=False),
        sa.Column("scheduled_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scheduled_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_by", sa.String(length=320), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_maintenance")),
    )
    op.create_index(
        "ix_maintenance_scheduled_start", "maintenance", ["scheduled_start"], unique=False
    )
    op.create_index(
        "ix_maintenance_status_scheduled_start",
        "maintenance",
        ["status", "scheduled_start"],
        unique=False,
    )

    op.create_table(
        "subscribers",
        _id_column(),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("verification_token", sa.String(length=64), nullable=True),
        sa.Column("unsubscribe_token", sa.String(length=64), nullable=False),
        sa.Column("components", sa.JSON(), nullable=False),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_subscribers")),
    )
    op.create_index(op.f("ix_subscribers_email"), "subscribers", ["email"], unique=True)
    op.create_index(
        op.f("ix_subscribers_verification_token"),
        "subscribers",
        ["verification_token"],
        unique=True,
    )
    op.create_index(
        op.f("ix_subscribers_unsubscribe_token"),
        "subscribers",
        ["unsubscribe_token"],
        unique=True,
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f("ix_subscribers_unsubscribe_token"), table_name="subscribers")
    op.drop_index(op.f("ix_subscribers_verification_token"), table_name="subscribers")
    op.drop_index(op.f("ix_subscribers_email"), table_name="subscribers")
    op.drop_table("subscribers")

    op.drop_index("ix_maintenance_status_scheduled_start", table_name="maintenance")
    op.drop_index("ix_maintenance_scheduled_start", table_name="maintenance")
    op.drop_table("maintenance")

    op.drop_index(op.f("ix_incident_updates_incident_id"), table_name="incident_updates")
    op.drop_table("incident_updates")

    op.drop_index("ix_incidents_status_started_at", table_name="incidents")
    op.drop_index("ix_incidents_started_at", table_name="incidents")
    op.drop_table("incidents")

    op.drop_index("ix_status_checks_component_timestamp", table_name="status_checks")
    op.drop_table("status_checks")
