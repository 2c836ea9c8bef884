# backend/careersync/services/session_service.py
"""
Session registry.

Owns mentor sessions, including the auto-provisioned default session that
``TimeslotService`` falls back to when a mentor adds timeslots without
naming a session.
"""

from decimal import Decimal
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import (
    ForbiddenException,
    NotFoundException,
    PreconditionFailedException,
    ServiceException,
)
from ..core.ulid_helper import is_valid_ulid
from ..models.mentor import Mentor, Position
from ..models.session import MentorSession
from ..repositories.factory import RepositoryFactory
from ..schemas.session import SessionCreate, SessionUpdate
from .base import BaseService

logger = logging.getLogger(__name__)

MAPS_SEARCH_URL = "https://maps.google.com/?q="
# Unreserved marks kept literal in map query strings
URL_SAFE_CHARS = "!~*'()"


def build_map_url(location: str) -> str:
    """Google Maps search link for a free-form location."""
    return f"{MAPS_SEARCH_URL}{quote(location, safe=URL_SAFE_CHARS)}"


class SessionService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_session_repository(db)
        self.mentor_repository = RepositoryFactory.create_mentor_repository(db)
        self.position_repository = RepositoryFactory.create_base_repository(db, Position)

    def require_mentor(self, mentor_user_id: str) -> Mentor:
        """Mentor profile for a user id, or NotFound."""
        mentor = self.mentor_repository.get_by_user_id(mentor_user_id)
        if not mentor:
            raise NotFoundException(
                "Mentor not found", code="MENTOR_NOT_FOUND", details={"user_id": mentor_user_id}
            )
        return mentor

    def is_auto_request(self, requested_session_id: Optional[str]) -> bool:
        if requested_session_id is None:
            return True
        requested = requested_session_id.strip()
        return not requested or requested == settings.auto_create_session_sentinel

    def find_or_auto_create(
        self, mentor: Mentor, requested_session_id: Optional[str]
    ) -> MentorSession:
        """
        Resolve the session timeslots should be attached to.

        An explicit id must name a session owned by ``mentor``. A missing id
        or the auto-create sentinel resolves to the mentor's default session,
        which is created from profile defaults on first use. Does not commit.

        Raises:
            NotFoundException: explicit id is unknown or owned by someone else
            PreconditionFailedException: a default session is needed but the
                mentor profile has no position
        """
        if not self.is_auto_request(requested_session_id):
            session = None
            if is_valid_ulid(str(requested_session_id)):
                session = self.repository.get_for_mentor(str(requested_session_id), mentor.id)
            if not session:
                raise NotFoundException(
                    "Session not found or not yours",
                    code="SESSION_NOT_FOUND",
                    details={"session_id": requested_session_id},
                )
            return session

        existing = self.repository.get_auto_provisioned(mentor.id)
        if existing:
            return existing

        if not mentor.position_id:
            raise PreconditionFailedException(
                "Mentor position is required. Please complete your profile first.",
                details={"mentor_id": mentor.id},
            )

        created = self.repository.create_auto_provisioned(**self._defaults_for(mentor))
        if created is not None:
            self.log_operation(
                "auto_provision_session", mentor_id=mentor.id, session_id=created.id
            )
            return created

        # Another request inserted the default session first; reuse it
        winner = self.repository.get_auto_provisioned(mentor.id)
        if winner is None:
            raise ServiceException(
                "Default session could not be created", details={"mentor_id": mentor.id}
            )
        return winner

    def _defaults_for(self, mentor: Mentor) -> Dict[str, Any]:
        location = mentor.location_or(settings.default_meeting_location)
        return {
            "mentor_id": mentor.id,
            "position_id": mentor.position_id,
            "price": mentor.rate_or(Decimal(settings.default_session_rate)),
            "location_name": location,
            "location_map_url": build_map_url(location),
            "is_available": True,
        }

    def get_by_id(self, session_id: str) -> MentorSession:
        session = self.repository.get_by_id(session_id)
        if not session:
            raise NotFoundException(
                "Session not found", code="SESSION_NOT_FOUND", details={"session_id": session_id}
            )
        return session

    def list_available(self) -> List[MentorSession]:
        return self.repository.list_available()

    @BaseService.measure_operation("create_session")
    def create_session(self, mentor_user_id: str, data: SessionCreate) -> MentorSession:
        mentor = self.require_mentor(mentor_user_id)
        position_id = data.position_id or mentor.position_id
        if not position_id:
            raise PreconditionFailedException(
                "Mentor position is required. Please complete your profile first.",
                details={"mentor_id": mentor.id},
            )

        if data.position_id and not self.position_repository.exists(id=data.position_id):
            raise NotFoundException(
                "Position not found",
                code="POSITION_NOT_FOUND",
                details={"position_id": data.position_id},
            )

        location_map_url = data.location_map_url or build_map_url(data.location_name)
        with self.transaction():
            session = self.repository.create(
                mentor_id=mentor.id,
                position_id=position_id,
                price=data.price,
                location_name=data.location_name,
                location_map_url=location_map_url,
                is_available=data.is_available,
            )

        self.log_operation("create_session", mentor_id=mentor.id, session_id=session.id)
        return session

    def list_my_sessions(self, mentor_user_id: str) -> List[MentorSession]:
        mentor = self.require_mentor(mentor_user_id)
        return self.repository.list_for_mentor(mentor.id)

    @BaseService.measure_operation("edit_session")
    def edit_session(
        self, mentor_user_id: str, session_id: str, data: SessionUpdate
    ) -> MentorSession:
        """
        Partially update a session owned by the caller.

        Bookings keep their own price snapshot, so edits never reach them.
        """
        mentor = self.require_mentor(mentor_user_id)
        session = self.get_by_id(session_id)
        if session.mentor_id != mentor.id:
            raise ForbiddenException(
                "You can only edit your own sessions",
                code="SESSION_NOT_OWNED",
                details={"session_id": session_id},
            )

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "location_map_url"
        }
        if changes.get("location_name") and "location_map_url" not in changes:
            changes["location_map_url"] = build_map_url(changes["location_name"])
        if not changes:
            return session

        with self.transaction():
            updated = self.repository.update(session.id, **changes)

        self.log_operation("edit_session", session_id=session_id, fields=sorted(changes))
        return updated or session
