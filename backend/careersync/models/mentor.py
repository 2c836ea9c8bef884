# backend/careersync/models/mentor.py
"""
Mentor profile and position catalog.

Both are read-only for the booking core: profiles are maintained elsewhere,
the core only reads defaults (rate, meeting location, position) from them.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utcnow


class Position(Base):
    __tablename__ = "positions"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    position_name = Column(String(150), unique=True, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Position {self.position_name}>"


class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    position_id = Column(String(26), ForeignKey("positions.id"), nullable=True)
    session_rate = Column(Numeric(10, 2), nullable=True)
    meeting_location = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    user = relationship("User", back_populates="mentor")
    position = relationship("Position")
    sessions = relationship(
        "MentorSession",
        back_populates="mentor",
        order_by="MentorSession.created_at.desc()",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def rate_or(self, fallback: Decimal) -> Decimal:
        """Hourly rate from the profile, ``fallback`` when unset or zero."""
        if self.session_rate:
            return Decimal(self.session_rate)
        return fallback

    def location_or(self, fallback: str) -> str:
        location: Optional[str] = self.meeting_location
        return location.strip() if location and location.strip() else fallback

    def __repr__(self) -> str:
        return f"<Mentor {self.id} {self.full_name}>"
