# backend/careersync/models/timeslot.py
"""
Schedule timeslot model.

A timeslot is a concrete window on a mentor's session. While it exists and
``is_booked`` is false it is available; a successful booking deletes it.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import TimestampMixin, UTCDateTime


class ScheduleTimeslot(TimestampMixin, Base):
    __tablename__ = "schedule_timeslots"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    mentor_id = Column(String(26), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False)
    session_id = Column(
        String(26), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_time = Column(UTCDateTime(), nullable=False)
    end_time = Column(UTCDateTime(), nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)

    session = relationship("MentorSession", back_populates="timeslots")
    mentor = relationship("Mentor")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_schedule_timeslots_window"),
        Index("ix_schedule_timeslots_mentor_start", "mentor_id", "start_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<ScheduleTimeslot {self.id} {self.start_time}-{self.end_time} "
            f"booked={self.is_booked}>"
        )
