# backend/careersync/services/booking_service.py
"""
Booking allocator.

``allocate`` turns an available timeslot into an immutable booking. The
whole flow runs in one transaction:

1. resolve the requester's account profile
2. read the timeslot under a row lock (unbooked only)
3. resolve mentor, position and session and check they match the slot
4. insert the booking with its snapshot
5. delete the timeslot if it is still unbooked, checking the row count
6. commit

Two concurrent allocations of the same slot cannot both succeed: the
loser either finds no row at step 2, deletes zero rows at step 5 or trips
the unique ``bookings.schedule_timeslot_id`` constraint. All of those
surface as TimeslotUnavailableException. A refused database lock only
becomes a conflict when the slot turns out to be gone; otherwise the
caller gets a retryable DatabaseBusyException.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    DatabaseBusyException,
    NotFoundException,
    RepositoryException,
    ServiceException,
    TimeslotUnavailableException,
    ValidationException,
)
from ..models.booking import Booking, BookingSnapshot
from ..models.mentor import Mentor, Position
from ..models.session import MentorSession
from ..models.timeslot import ScheduleTimeslot
from ..models.user import AccUser
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import BookingCreate
from .base import BaseService

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.timeslot_repository = RepositoryFactory.create_timeslot_repository(db)
        self.session_repository = RepositoryFactory.create_session_repository(db)
        self.acc_user_repository = RepositoryFactory.create_acc_user_repository(db)
        self.mentor_repository = RepositoryFactory.create_mentor_repository(db)
        self.position_repository = RepositoryFactory.create_base_repository(db, Position)

    @staticmethod
    def _is_unique_violation(exc: BaseException) -> bool:
        return isinstance(exc.__cause__, IntegrityError)

    def _timeslot_still_open(self, timeslot_id: str) -> bool:
        """Re-read the slot after a refused lock. Unknown counts as still open."""
        try:
            return self.timeslot_repository.exists(id=timeslot_id, is_booked=False)
        except RepositoryException as e:
            self.logger.warning(f"Could not re-check timeslot {timeslot_id}: {e}")
            return True
        finally:
            self.db.rollback()

    def _require_acc_user(self, user_id: str) -> AccUser:
        acc_user = self.acc_user_repository.get_by_user_id(user_id)
        if not acc_user:
            raise NotFoundException(
                "Account not found", code="ACCOUNT_NOT_FOUND", details={"user_id": user_id}
            )
        return acc_user

    def _resolve_offering(
        self, data: BookingCreate, timeslot: ScheduleTimeslot
    ) -> Tuple[Mentor, Position, MentorSession]:
        mentor = self.mentor_repository.get_by_id(data.mentor_id)
        position = self.position_repository.get_by_id(data.position_id)
        session = self.session_repository.get_by_id(data.session_id, load_relationships=False)

        if (
            not mentor
            or not position
            or not session
            or timeslot.mentor_id != mentor.id
            or timeslot.session_id != session.id
        ):
            raise ValidationException(
                "Invalid booking data",
                code="INVALID_BOOKING_DATA",
                details={
                    "mentor_id": data.mentor_id,
                    "position_id": data.position_id,
                    "session_id": data.session_id,
                },
            )
        return mentor, position, session

    @BaseService.measure_operation("allocate")
    def allocate(self, requester_user_id: str, data: BookingCreate) -> Booking:
        """
        Book a timeslot for the requester.

        Returns:
            The committed pending booking

        Raises:
            NotFoundException: requester has no account profile
            TimeslotUnavailableException: slot missing, already booked, or
                lost to a concurrent allocation
            DatabaseBusyException: the database stayed locked and the slot
                is still open, so the request can be retried
            ValidationException: mentor/position/session unknown or not
                matching the slot
        """
        timeslot_id = data.schedule_timeslot_id
        try:
            with self.transaction():
                acc_user = self._require_acc_user(requester_user_id)

                timeslot = self.timeslot_repository.lock_available(timeslot_id)
                if not timeslot:
                    raise TimeslotUnavailableException(details={"timeslot_id": timeslot_id})

                mentor, position, session = self._resolve_offering(data, timeslot)

                snapshot = BookingSnapshot.capture(
                    mentor=mentor,
                    acc_user=acc_user,
                    position=position,
                    session=session,
                    timeslot=timeslot,
                )
                booking = self.repository.add(
                    Booking.from_snapshot(
                        snapshot,
                        schedule_timeslot_id=timeslot.id,
                        mentor_id=mentor.id,
                        acc_user_id=acc_user.id,
                        position_id=position.id,
                        session_id=session.id,
                    )
                )

                if self.timeslot_repository.delete_if_available(timeslot.id) != 1:
                    raise TimeslotUnavailableException(details={"timeslot_id": timeslot_id})
        except TimeslotUnavailableException:
            prometheus_metrics.record_allocation("conflict")
            raise
        except DatabaseBusyException as exc:
            if self._timeslot_still_open(timeslot_id):
                prometheus_metrics.record_allocation("busy")
                raise
            prometheus_metrics.record_allocation("conflict")
            self.logger.info(f"Timeslot {timeslot_id} was taken while waiting for a lock")
            raise TimeslotUnavailableException(details={"timeslot_id": timeslot_id}) from exc
        except (RepositoryException, ServiceException) as exc:
            if self._is_unique_violation(exc):
                prometheus_metrics.record_allocation("conflict")
                self.logger.info(f"Allocation of timeslot {timeslot_id} lost a race: {exc}")
                raise TimeslotUnavailableException(details={"timeslot_id": timeslot_id}) from exc
            raise
        except (NotFoundException, ValidationException):
            prometheus_metrics.record_allocation("rejected")
            raise

        prometheus_metrics.record_allocation("allocated")
        self.log_operation(
            "allocate",
            booking_id=booking.id,
            timeslot_id=timeslot_id,
            acc_user_id=booking.acc_user_id,
        )
        return booking

    def list_my_bookings(self, requester_user_id: str) -> List[Booking]:
        acc_user = self._require_acc_user(requester_user_id)
        return self.repository.list_for_acc_user(acc_user.id)

    def list_mentor_bookings(
        self, mentor_user_id: str, status: Optional[str] = None
    ) -> List[Booking]:
        mentor = self.mentor_repository.get_by_user_id(mentor_user_id)
        if not mentor:
            raise NotFoundException(
                "Mentor not found", code="MENTOR_NOT_FOUND", details={"user_id": mentor_user_id}
            )
        return self.repository.list_for_mentor(mentor.id, status=status)

    def get_booking(self, user_id: str, booking_id: str) -> Booking:
        """A booking visible to its requester or its mentor; NotFound for anyone else."""
        booking = self.repository.get_by_id(booking_id, load_relationships=False)
        if booking:
            acc_user = self.acc_user_repository.get_by_user_id(user_id)
            mentor = self.mentor_repository.get_by_user_id(user_id)
            if (acc_user and booking.acc_user_id == acc_user.id) or (
                mentor and booking.mentor_id == mentor.id
            ):
                return booking
        raise NotFoundException(
            "Booking not found", code="BOOKING_NOT_FOUND", details={"booking_id": booking_id}
        )
