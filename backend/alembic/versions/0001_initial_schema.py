"""Initial medication tracking schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("CARER", "DEPENDANT", name="userrole"),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "carer_dependant_relationships",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "carer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "dependant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint("carer_id", "dependant_id", name="uq_carer_dependant"),
    )
    op.create_index(
        "ix_carer_dependant_relationships_carer_id",
        "carer_dependant_relationships",
        ["carer_id"],
    )
    op.create_index(
        "ix_carer_dependant_relationships_dependant_id",
        "carer_dependant_relationships",
        ["dependant_id"],
    )

    op.create_table(
        "medications",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("dosage", sa.String(length=120)),
        sa.Column("instructions", sa.Text()),
        sa.Column(
            "dependant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "carer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_medications_dependant_id", "medications", ["dependant_id"])
    op.create_index("ix_medications_carer_id", "medications", ["carer_id"])

    op.create_table(
        "medication_schedules",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "medication_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("medications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("time_of_day", sa.String(length=5), nullable=False),
        sa.Column("days_of_week", sa.JSON(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index(
        "ix_medication_schedules_medication_id",
        "medication_schedules",
        ["medication_id"],
    )

    op.create_table(
        "medication_confirmations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "dependant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "medication_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("medications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "schedule_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("medication_schedules.id", ondelete="SET NULL"),
        ),
        sa.Column("photo_path", sa.String(length=1024), nullable=False),
        sa.Column(
            "taken_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "confirmed_by_carer",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("carer_confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text()),
    )
    op.create_index(
        "ix_confirmation_dependant_taken",
        "medication_confirmations",
        ["dependant_id", "taken_at"],
    )
    op.create_index(
        "ix_confirmation_medication", "medication_confirmations", ["medication_id"]
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "dependant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "medication_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("medications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "schedule_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("medication_schedules.id", ondelete="SET NULL"),
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "type",
            sa.Enum("MEDICATION_REMINDER", "SCHEDULE_UPDATE", name="notificationtype"),
            nullable=False,
        ),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "scheduled_time",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_notifications_dependant_id", "notifications", ["dependant_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_dependant_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_confirmation_medication", table_name="medication_confirmations")
    op.drop_index(
        "ix_confirmation_dependant_taken", table_name="medication_confirmations"
    )
    op.drop_table("medication_confirmations")
    op.drop_index(
        "ix_medication_schedules_medication_id", table_name="medication_schedules"
    )
    op.drop_table("medication_schedules")
    op.drop_index("ix_medications_carer_id", table_name="medications")
    op.drop_index("ix_medications_dependant_id", table_name="medications")
    op.drop_table("medications")
    op.drop_index(
        "ix_carer_dependant_relationships_dependant_id",
        table_name="carer_dependant_relationships",
    )
    op.drop_index(
        "ix_carer_dependant_relationships_carer_id",
        table_name="carer_dependant_relationships",
    )
    op.drop_table("carer_dependant_relationships")
    op.drop_table("users")
    sa.Enum(name="notificationtype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
