# backend/careersync/models/session.py
"""
Mentor session model.

A session is a mentor's bookable offering: price, meeting location and the
position it is offered for. Timeslots hang off a session. Each mentor has at
most one auto-provisioned session, marked by ``auto_key``.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import TimestampMixin

AUTO_SESSION_KEY = "default"


class MentorSession(TimestampMixin, Base):
    __tablename__ = "sessions"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    mentor_id = Column(
        String(26), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position_id = Column(String(26), ForeignKey("positions.id"), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    location_name = Column(String(255), nullable=False)
    location_map_url = Column(String(1024), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    auto_key = Column(String(20), nullable=True)

    mentor = relationship("Mentor", back_populates="sessions")
    position = relationship("Position")
    timeslots = relationship(
        "ScheduleTimeslot",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScheduleTimeslot.start_time",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_sessions_price_non_negative"),
        UniqueConstraint("mentor_id", "auto_key", name="uq_sessions_mentor_auto_key"),
    )

    @property
    def is_auto_provisioned(self) -> bool:
        return self.auto_key == AUTO_SESSION_KEY

    def __repr__(self) -> str:
        return f"<MentorSession {self.id} mentor={self.mentor_id} price={self.price}>"
