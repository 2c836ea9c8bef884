# backend/careersync/repositories/session_repository.py
"""
Session repository.

Besides ownership-scoped lookups this holds the guarded insert for the
auto-provisioned session: the insert runs inside a SAVEPOINT so that losing
the race on the unique (mentor_id, auto_key) constraint leaves the outer
transaction usable.
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..core.exceptions import RepositoryException
from ..models.session import AUTO_SESSION_KEY, MentorSession
from ..models.timeslot import ScheduleTimeslot
from .base_repository import BaseRepository


class SessionRepository(BaseRepository[MentorSession]):
    def __init__(self, db: Session):
        super().__init__(db, MentorSession)

    def get_for_mentor(self, session_id: str, mentor_id: str) -> Optional[MentorSession]:
        """Session by id, only if owned by ``mentor_id``."""
        query = self.db.query(MentorSession).filter(
            MentorSession.id == session_id, MentorSession.mentor_id == mentor_id
        )
        return self._execute_scalar(query)

    def get_auto_provisioned(self, mentor_id: str) -> Optional[MentorSession]:
        query = self.db.query(MentorSession).filter(
            MentorSession.mentor_id == mentor_id,
            MentorSession.auto_key == AUTO_SESSION_KEY,
        )
        return self._execute_scalar(query)

    def create_auto_provisioned(self, **fields: Any) -> Optional[MentorSession]:
        """
        Insert the mentor's auto-provisioned session.

        Returns None when another transaction already inserted it; the
        SAVEPOINT is rolled back and the caller should re-read.
        """
        entity = MentorSession(auto_key=AUTO_SESSION_KEY, **fields)
        try:
            with self.db.begin_nested():
                self.db.add(entity)
                self.db.flush()
        except IntegrityError as exc:
            self.logger.info(
                f"Auto-provisioned session for mentor {fields.get('mentor_id')} "
                f"already exists: {exc.orig}"
            )
            return None
        except SQLAlchemyError as e:
            self.logger.error(f"Error auto-provisioning session: {str(e)}")
            raise RepositoryException(f"Failed to create MentorSession: {str(e)}") from e
        return entity

    def list_for_mentor(self, mentor_id: str) -> List[MentorSession]:
        query = (
            self.db.query(MentorSession)
            .filter(MentorSession.mentor_id == mentor_id)
            .order_by(MentorSession.created_at.desc(), MentorSession.id.desc())
        )
        return self._execute_query(query)

    def list_available(self) -> List[MentorSession]:
        query = (
            self.db.query(MentorSession)
            .filter(MentorSession.is_available.is_(True))
            .order_by(MentorSession.created_at.desc())
        )
        return self._execute_query(query)

    def list_available_with_timeslots(
        self, *, starting_after: Optional[datetime] = None
    ) -> List[MentorSession]:
        """
        Available sessions with mentor, position and open timeslots loaded.

        ``starting_after`` restricts the loaded timeslots to windows that
        start later than the given instant.
        """
        slot_filter = ScheduleTimeslot.is_booked.is_(False)
        if starting_after is not None:
            slot_filter = slot_filter & (ScheduleTimeslot.start_time > starting_after)

        query = (
            self.db.query(MentorSession)
            .options(
                joinedload(MentorSession.mentor),
                joinedload(MentorSession.position),
                selectinload(MentorSession.timeslots.and_(slot_filter)),
            )
            .filter(MentorSession.is_available.is_(True))
            .order_by(MentorSession.created_at.desc())
            .populate_existing()
        )
        return self._execute_query(query)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(MentorSession.position))
