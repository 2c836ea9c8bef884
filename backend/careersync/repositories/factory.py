# backend/careersync/repositories/factory.py
"""
Repository factory.

Centralizes repository construction so services and dependencies get
consistently initialised instances.
"""

from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .session_repository import SessionRepository
    from .timeslot_repository import TimeslotRepository
    from .user_repository import AccUserRepository, MentorRepository, UserRepository


class RepositoryFactory:
    @staticmethod
    def create_base_repository(db: Session, model: Any) -> BaseRepository:
        """Generic repository for models without custom queries (e.g. Position)."""
        return BaseRepository(db, model)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_acc_user_repository(db: Session) -> "AccUserRepository":
        from .user_repository import AccUserRepository

        return AccUserRepository(db)

    @staticmethod
    def create_mentor_repository(db: Session) -> "MentorRepository":
        from .user_repository import MentorRepository

        return MentorRepository(db)

    @staticmethod
    def create_session_repository(db: Session) -> "SessionRepository":
        from .session_repository import SessionRepository

        return SessionRepository(db)

    @staticmethod
    def create_timeslot_repository(db: Session) -> "TimeslotRepository":
        from .timeslot_repository import TimeslotRepository

        return TimeslotRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)
