# backend/alembic/versions/001_booking_core.py
"""Booking core - users, profiles, positions, sessions, timeslots, bookings

Revision ID: 001_booking_core
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the full schema for the booking flow. Bookings reference their
timeslot by value (unique, no foreign key) because allocation deletes the
timeslot in the same transaction that inserts the booking.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_booking_core"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ulid_pk() -> sa.Column:
    return sa.Column("id", sa.String(26), primary_key=True)


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    print("Creating booking core schema...")

    op.create_table(
        "users",
        _ulid_pk(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="account"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at"),
        sa.CheckConstraint("role IN ('account', 'mentor', 'admin')", name="ck_users_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "positions",
        _ulid_pk(),
        sa.Column("position_name", sa.String(150), nullable=False, unique=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "acc_users",
        _ulid_pk(),
        sa.Column(
            "user_id",
            sa.String(26),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        _timestamp("created_at"),
    )

    op.create_table(
        "mentors",
        _ulid_pk(),
        sa.Column(
            "user_id",
            sa.String(26),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("position_id", sa.String(26), sa.ForeignKey("positions.id"), nullable=True),
        sa.Column("session_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("meeting_location", sa.String(255), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "sessions",
        _ulid_pk(),
        sa.Column(
            "mentor_id",
            sa.String(26),
            sa.ForeignKey("mentors.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position_id", sa.String(26), sa.ForeignKey("positions.id"), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("location_name", sa.String(255), nullable=False),
        sa.Column("location_map_url", sa.String(1024), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("auto_key", sa.String(20), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at", nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_sessions_price_non_negative"),
        sa.UniqueConstraint("mentor_id", "auto_key", name="uq_sessions_mentor_auto_key"),
    )
    op.create_index("ix_sessions_mentor_id", "sessions", ["mentor_id"])

    op.create_table(
        "schedule_timeslots",
        _ulid_pk(),
        sa.Column(
            "mentor_id",
            sa.String(26),
            sa.ForeignKey("mentors.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "session_id",
            sa.String(26),
            sa.ForeignKey("sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _timestamp("start_time"),
        _timestamp("end_time"),
        sa.Column("is_booked", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        _timestamp("updated_at", nullable=True),
        sa.CheckConstraint("end_time > start_time", name="ck_schedule_timeslots_window"),
    )
    op.create_index("ix_schedule_timeslots_session_id", "schedule_timeslots", ["session_id"])
    op.create_index(
        "ix_schedule_timeslots_mentor_start", "schedule_timeslots", ["mentor_id", "start_time"]
    )

    op.create_table(
        "bookings",
        _ulid_pk(),
        sa.Column("schedule_timeslot_id", sa.String(26), nullable=False, unique=True),
        sa.Column("mentor_id", sa.String(26), sa.ForeignKey("mentors.id"), nullable=False),
        sa.Column("acc_user_id", sa.String(26), sa.ForeignKey("acc_users.id"), nullable=False),
        sa.Column("position_id", sa.String(26), sa.ForeignKey("positions.id"), nullable=False),
        sa.Column("session_id", sa.String(26), sa.ForeignKey("sessions.id"), nullable=False),
        sa.Column("mentor_name_snapshot", sa.String(201), nullable=False),
        sa.Column("acc_user_name_snapshot", sa.String(201), nullable=False),
        sa.Column("position_name_snapshot", sa.String(150), nullable=False),
        sa.Column("session_price_snapshot", sa.Numeric(10, 2), nullable=False),
        _timestamp("start_date_snapshot"),
        _timestamp("end_date_snapshot"),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'completed', 'cancelled')",
            name="ck_bookings_status",
        ),
        sa.CheckConstraint("total_amount >= 0", name="ck_bookings_total_non_negative"),
    )
    op.create_index("ix_bookings_mentor_id", "bookings", ["mentor_id"])
    op.create_index("ix_bookings_acc_user_id", "bookings", ["acc_user_id"])
    op.create_index("ix_bookings_mentor_created", "bookings", ["mentor_id", "created_at"])

    print("Booking core schema created")


def downgrade() -> None:
    print("Dropping booking core schema...")

    op.drop_index("ix_bookings_mentor_created", table_name="bookings")
    op.drop_index("ix_bookings_acc_user_id", table_name="bookings")
    op.drop_index("ix_bookings_mentor_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_schedule_timeslots_mentor_start", table_name="schedule_timeslots")
    op.drop_index("ix_schedule_timeslots_session_id", table_name="schedule_timeslots")
    op.drop_table("schedule_timeslots")

    op.drop_index("ix_sessions_mentor_id", table_name="sessions")
    op.drop_table("sessions")

    op.drop_table("mentors")
    op.drop_table("acc_users")
    op.drop_table("positions")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    print("Booking core schema dropped")
