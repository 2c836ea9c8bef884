# backend/careersync/models/booking.py
"""
Booking model for the booking core.

A booking is an immutable transaction record. At allocation time it copies
everything a reader needs (names, position, price, window) into snapshot
columns, so later edits to mentors, sessions or positions, and the deletion
of the consumed timeslot, never change what the booking says.

The timeslot is referenced by value: ``schedule_timeslot_id`` is unique but
carries no foreign key, because the referenced row is deleted in the same
transaction that creates the booking.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any, Dict

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import relationship, validates

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utcnow

if TYPE_CHECKING:
    from .mentor import Mentor, Position
    from .session import MentorSession
    from .timeslot import ScheduleTimeslot
    from .user import AccUser

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"  # Default on allocation
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


SNAPSHOT_COLUMNS = (
    "mentor_name_snapshot",
    "acc_user_name_snapshot",
    "position_name_snapshot",
    "session_price_snapshot",
    "start_date_snapshot",
    "end_date_snapshot",
)


@dataclass(frozen=True)
class BookingSnapshot:
    """Values copied into a booking when it is created."""

    mentor_name: str
    acc_user_name: str
    position_name: str
    session_price: Decimal
    start_date: datetime
    end_date: datetime

    @classmethod
    def capture(
        cls,
        *,
        mentor: "Mentor",
        acc_user: "AccUser",
        position: "Position",
        session: "MentorSession",
        timeslot: "ScheduleTimeslot",
    ) -> "BookingSnapshot":
        return cls(
            mentor_name=f"{mentor.first_name} {mentor.last_name}",
            acc_user_name=f"{acc_user.first_name} {acc_user.last_name}",
            position_name=position.position_name,
            session_price=Decimal(session.price),
            start_date=timeslot.start_time,
            end_date=timeslot.end_time,
        )

    def as_columns(self) -> Dict[str, Any]:
        return {
            "mentor_name_snapshot": self.mentor_name,
            "acc_user_name_snapshot": self.acc_user_name,
            "position_name_snapshot": self.position_name,
            "session_price_snapshot": self.session_price,
            "start_date_snapshot": self.start_date,
            "end_date_snapshot": self.end_date,
        }


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    schedule_timeslot_id = Column(String(26), nullable=False, unique=True)
    mentor_id = Column(String(26), ForeignKey("mentors.id"), nullable=False, index=True)
    acc_user_id = Column(String(26), ForeignKey("acc_users.id"), nullable=False, index=True)
    position_id = Column(String(26), ForeignKey("positions.id"), nullable=False)
    session_id = Column(String(26), ForeignKey("sessions.id"), nullable=False)

    mentor_name_snapshot = Column(String(201), nullable=False)
    acc_user_name_snapshot = Column(String(201), nullable=False)
    position_name_snapshot = Column(String(150), nullable=False)
    session_price_snapshot = Column(Numeric(10, 2), nullable=False)
    start_date_snapshot = Column(UTCDateTime(), nullable=False)
    end_date_snapshot = Column(UTCDateTime(), nullable=False)

    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    mentor = relationship("Mentor")
    acc_user = relationship("AccUser")
    position = relationship("Position")
    session = relationship("MentorSession")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'completed', 'cancelled')",
            name="ck_bookings_status",
        ),
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_non_negative"),
        Index("ix_bookings_mentor_created", "mentor_id", "created_at"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = BookingStatus.PENDING.value
        logger.info(
            f"Creating booking for acc_user {self.acc_user_id} with mentor {self.mentor_id}"
        )

    @classmethod
    def from_snapshot(cls, snapshot: BookingSnapshot, **refs: Any) -> "Booking":
        """Build a pending booking whose amount is the captured session price."""
        return cls(
            **refs,
            **snapshot.as_columns(),
            total_amount=snapshot.session_price,
            status=BookingStatus.PENDING.value,
        )

    @validates(*SNAPSHOT_COLUMNS)
    def _freeze_snapshot(self, key: str, value: Any) -> Any:
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError(f"{key} is immutable once captured")
        return value

    @property
    def snapshot(self) -> BookingSnapshot:
        return BookingSnapshot(
            mentor_name=self.mentor_name_snapshot,
            acc_user_name=self.acc_user_name_snapshot,
            position_name=self.position_name_snapshot,
            session_price=Decimal(self.session_price_snapshot),
            start_date=self.start_date_snapshot,
            end_date=self.end_date_snapshot,
        )

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: acc_user={self.acc_user_id}, mentor={self.mentor_id}, "
            f"timeslot={self.schedule_timeslot_id}, status={self.status}>"
        )
