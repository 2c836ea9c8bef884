# backend/careersync/services/availability_query_service.py
"""
Availability query: what can be booked right now.

A timeslot is listed iff its row still exists unbooked, which the booking
allocator maintains by deleting the slot in the booking transaction.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.session import MentorSession
from ..models.types import ensure_utc, utcnow
from ..repositories.factory import RepositoryFactory
from ..schemas.session import (
    AvailableSessionResponse,
    AvailableSessionsResponse,
    MentorSummary,
    PositionSummary,
)
from ..schemas.timeslot import TimeslotResponse
from .base import BaseService


class AvailabilityQueryService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.session_repository = RepositoryFactory.create_session_repository(db)

    @BaseService.measure_operation("list_available_sessions")
    def list_available_sessions(
        self, upcoming_only: bool = False, now: Optional[datetime] = None
    ) -> AvailableSessionsResponse:
        """
        Every available session with its mentor, position and open timeslots.

        Args:
            upcoming_only: drop timeslots that do not start after ``now``
            now: reference instant for ``upcoming_only`` (defaults to current UTC time)
        """
        starting_after = ensure_utc(now or utcnow()) if upcoming_only else None
        sessions = self.session_repository.list_available_with_timeslots(
            starting_after=starting_after
        )
        items = [self._to_response(session) for session in sessions]
        return AvailableSessionsResponse(count=len(items), sessions=items)

    @staticmethod
    def _to_response(session: MentorSession) -> AvailableSessionResponse:
        return AvailableSessionResponse(
            id=session.id,
            mentor_id=session.mentor_id,
            position_id=session.position_id,
            price=session.price,
            location_name=session.location_name,
            location_map_url=session.location_map_url,
            is_available=session.is_available,
            is_auto_provisioned=session.is_auto_provisioned,
            created_at=session.created_at,
            mentor=MentorSummary(id=session.mentor.id, full_name=session.mentor.full_name),
            position=PositionSummary(
                id=session.position.id, position_name=session.position.position_name
            ),
            timeslots=[TimeslotResponse.model_validate(slot) for slot in session.timeslots],
        )
