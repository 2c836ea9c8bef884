"""
Repository layer.

Data access only: repositories flush, services commit.
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .session_repository import SessionRepository
from .timeslot_repository import TimeslotRepository
from .user_repository import AccUserRepository, MentorRepository, UserRepository

__all__ = [
    "AccUserRepository",
    "BaseRepository",
    "BookingRepository",
    "MentorRepository",
    "RepositoryFactory",
    "SessionRepository",
    "TimeslotRepository",
    "UserRepository",
]
