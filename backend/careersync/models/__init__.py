"""
Database models for the booking core.

- Identity: User, AccUser (requester profile)
- Mentor side: Mentor, Position, MentorSession, ScheduleTimeslot
- Transactions: Booking (with its BookingSnapshot value object)
"""

from .booking import Booking, BookingSnapshot, BookingStatus
from .mentor import Mentor, Position
from .session import AUTO_SESSION_KEY, MentorSession
from .timeslot import ScheduleTimeslot
from .user import AccUser, User

__all__ = [
    "AUTO_SESSION_KEY",
    "AccUser",
    "Booking",
    "BookingSnapshot",
    "BookingStatus",
    "Mentor",
    "MentorSession",
    "Position",
    "ScheduleTimeslot",
    "User",
]
