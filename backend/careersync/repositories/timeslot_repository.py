# backend/careersync/repositories/timeslot_repository.py
"""
Timeslot repository.

``lock_available`` and ``delete_if_available`` form the compare-and-delete
pair used by booking allocation: the row is read under a lock and then
removed only if it is still unbooked, with the affected row count telling
the caller whether it won.
"""

from typing import List, NamedTuple, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.timeslot import ScheduleTimeslot
from ..models.user import AccUser, User
from .base_repository import BaseRepository


class AvailableTimeslotRow(NamedTuple):
    """An open timeslot plus whatever booking already references its id."""

    timeslot: ScheduleTimeslot
    booking_id: Optional[str]
    booking_status: Optional[str]
    requester_first_name: Optional[str]
    requester_last_name: Optional[str]
    requester_email: Optional[str]


class TimeslotRepository(BaseRepository[ScheduleTimeslot]):
    def __init__(self, db: Session):
        super().__init__(db, ScheduleTimeslot)

    def list_for_session(self, session_id: str) -> List[ScheduleTimeslot]:
        query = (
            self.db.query(ScheduleTimeslot)
            .filter(ScheduleTimeslot.session_id == session_id)
            .order_by(ScheduleTimeslot.start_time.asc(), ScheduleTimeslot.id.asc())
        )
        return self._execute_query(query)

    def get_owned(self, timeslot_id: str, mentor_id: str) -> Optional[ScheduleTimeslot]:
        query = self.db.query(ScheduleTimeslot).filter(
            ScheduleTimeslot.id == timeslot_id, ScheduleTimeslot.mentor_id == mentor_id
        )
        return self._execute_scalar(query)

    def lock_available(self, timeslot_id: str) -> Optional[ScheduleTimeslot]:
        """
        Read an unbooked timeslot with ``SELECT ... FOR UPDATE``.

        Dialects without row locks (SQLite) ignore the lock clause and rely
        on the database-level write lock instead.
        """
        query = (
            self.db.query(ScheduleTimeslot)
            .filter(ScheduleTimeslot.id == timeslot_id, ScheduleTimeslot.is_booked.is_(False))
            .with_for_update()
        )
        return self._execute_scalar(query)

    def delete_if_available(self, timeslot_id: str) -> int:
        """Delete the timeslot only while it is unbooked. Returns the affected row count."""
        stmt = (
            delete(ScheduleTimeslot)
            .where(ScheduleTimeslot.id == timeslot_id, ScheduleTimeslot.is_booked.is_(False))
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.logger.warning(f"Conditional delete of timeslot {timeslot_id} failed: {str(e)}")
            raise RepositoryException(f"Failed to consume timeslot: {str(e)}") from e
        deleted = int(result.rowcount or 0)
        if deleted:
            stale = self.db.identity_map.get(self.db.identity_key(ScheduleTimeslot, timeslot_id))
            if stale is not None:
                self.db.expunge(stale)
        return deleted

    def list_available_for_mentor(self, mentor_id: str) -> List[AvailableTimeslotRow]:
        """
        Unbooked timeslots of a mentor with their session loaded.

        When a booking already references the slot id (a booking that
        committed while the slot row was still being read) the row also
        carries that booking's id and status and the requester's name and
        email.
        """
        query = (
            self.db.query(
                ScheduleTimeslot,
                Booking.id,
                Booking.status,
                AccUser.first_name,
                AccUser.last_name,
                User.email,
            )
            .options(joinedload(ScheduleTimeslot.session))
            .outerjoin(Booking, Booking.schedule_timeslot_id == ScheduleTimeslot.id)
            .outerjoin(AccUser, AccUser.id == Booking.acc_user_id)
            .outerjoin(User, User.id == AccUser.user_id)
            .filter(
                ScheduleTimeslot.mentor_id == mentor_id,
                ScheduleTimeslot.is_booked.is_(False),
            )
            .order_by(ScheduleTimeslot.start_time.asc(), ScheduleTimeslot.id.asc())
        )
        try:
            return [AvailableTimeslotRow(*row) for row in query.all()]
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing available timeslots for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to list timeslots: {str(e)}") from e
