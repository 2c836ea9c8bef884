# backend/careersync/services/timeslot_service.py
"""
Timeslot store.

Mentors add, reshape and remove concrete windows on their sessions. A
timeslot is available exactly while its row exists unbooked; booking
allocation consumes it (see BookingService).
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.timeslot import ScheduleTimeslot
from ..models.types import ensure_utc
from ..repositories.factory import RepositoryFactory
from ..schemas.timeslot import MentorTimeslotResponse, TimeslotUpdate, TimeslotWindow
from .base import BaseService
from .session_service import SessionService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeslotBatchResult:
    added_count: int
    session_id: str


class TimeslotService(BaseService):
    def __init__(self, db: Session, session_service: Optional[SessionService] = None):
        super().__init__(db)
        self.repository = RepositoryFactory.create_timeslot_repository(db)
        self.session_service = session_service or SessionService(db)

    @staticmethod
    def _validate_window(start: datetime, end: datetime, index: Optional[int] = None) -> None:
        if ensure_utc(end) <= ensure_utc(start):
            details = {"start_time": start.isoformat(), "end_time": end.isoformat()}
            if index is not None:
                details["index"] = str(index)
            raise ValidationException(
                "Timeslot end must be after its start", code="INVALID_TIMESLOT", details=details
            )

    @BaseService.measure_operation("add_timeslots")
    def add_timeslots(
        self,
        mentor_user_id: str,
        session_id: Optional[str],
        windows: Sequence[TimeslotWindow],
    ) -> TimeslotBatchResult:
        """
        Add windows to a session, provisioning the default session if asked.

        Input is fully validated before anything is written, and the session
        (when newly provisioned) and all timeslots commit together.

        Raises:
            NotFoundException: unknown mentor, or explicit session not owned
            ValidationException: empty list or a window with end <= start
            PreconditionFailedException: default session needs a position
        """
        mentor = self.session_service.require_mentor(mentor_user_id)

        if not windows:
            raise ValidationException(
                "At least one timeslot is required", code="NO_TIMESLOTS"
            )
        for index, window in enumerate(windows):
            self._validate_window(window.start_time, window.end_time, index)

        with self.transaction():
            session = self.session_service.find_or_auto_create(mentor, session_id)
            created = self.repository.bulk_create(
                [
                    {
                        "mentor_id": mentor.id,
                        "session_id": session.id,
                        "start_time": ensure_utc(window.start_time),
                        "end_time": ensure_utc(window.end_time),
                        "is_booked": False,
                    }
                    for window in windows
                ]
            )

        self.log_operation(
            "add_timeslots", mentor_id=mentor.id, session_id=session.id, count=len(created)
        )
        return TimeslotBatchResult(added_count=len(created), session_id=session.id)

    def list_for_session(self, session_id: str, mentor_user_id: str) -> List[ScheduleTimeslot]:
        mentor = self.session_service.require_mentor(mentor_user_id)
        session = self.session_service.get_by_id(session_id)
        if session.mentor_id != mentor.id:
            raise ForbiddenException(
                "You can only view timeslots of your own sessions",
                code="SESSION_NOT_OWNED",
                details={"session_id": session_id},
            )
        return self.repository.list_for_session(session.id)

    def _require_owned(self, mentor_id: str, timeslot_id: str) -> ScheduleTimeslot:
        timeslot = self.repository.get_owned(timeslot_id, mentor_id)
        if not timeslot:
            raise NotFoundException(
                "Timeslot not found",
                code="TIMESLOT_NOT_FOUND",
                details={"timeslot_id": timeslot_id},
            )
        return timeslot

    @BaseService.measure_operation("update_timeslot")
    def update_timeslot(
        self, mentor_user_id: str, timeslot_id: str, data: TimeslotUpdate
    ) -> ScheduleTimeslot:
        """Move a window. Only start and end can change."""
        mentor = self.session_service.require_mentor(mentor_user_id)
        timeslot = self._require_owned(mentor.id, timeslot_id)

        changes = {
            key: ensure_utc(value)
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not changes:
            return timeslot

        self._validate_window(
            changes.get("start_time", timeslot.start_time),
            changes.get("end_time", timeslot.end_time),
        )

        with self.transaction():
            for key, value in changes.items():
                setattr(timeslot, key, value)
            self.repository.flush()

        self.log_operation("update_timeslot", timeslot_id=timeslot.id, fields=sorted(changes))
        return timeslot

    @BaseService.measure_operation("delete_timeslot")
    def delete_timeslot(self, mentor_user_id: str, timeslot_id: str) -> None:
        """
        Remove a timeslot the mentor owns, booked flag or not.

        Bookings are never touched: they carry their own window snapshot.
        """
        mentor = self.session_service.require_mentor(mentor_user_id)
        timeslot = self._require_owned(mentor.id, timeslot_id)

        with self.transaction():
            self.repository.delete(timeslot.id)

        self.log_operation("delete_timeslot", timeslot_id=timeslot_id, mentor_id=mentor.id)

    def list_all_available(self, mentor_user_id: str) -> List[MentorTimeslotResponse]:
        """
        The mentor's open timeslots in start order with session details.

        The booking fields and requester details are filled when a booking
        already references the slot id, which only happens while an
        allocation is in flight.
        """
        mentor = self.session_service.require_mentor(mentor_user_id)
        rows = self.repository.list_available_for_mentor(mentor.id)

        results: List[MentorTimeslotResponse] = []
        for row in rows:
            timeslot = row.timeslot
            requester_name = None
            if row.requester_first_name or row.requester_last_name:
                requester_name = (
                    f"{row.requester_first_name or ''} {row.requester_last_name or ''}".strip()
                )
            results.append(
                MentorTimeslotResponse(
                    id=timeslot.id,
                    mentor_id=timeslot.mentor_id,
                    session_id=timeslot.session_id,
                    start_time=timeslot.start_time,
                    end_time=timeslot.end_time,
                    is_booked=timeslot.is_booked,
                    session_price=timeslot.session.price,
                    session_location=timeslot.session.location_name,
                    booking_id=row.booking_id,
                    booking_status=row.booking_status,
                    requester_name=requester_name,
                    requester_email=row.requester_email,
                )
            )
        return results
