# backend/careersync/repositories/user_repository.py
"""Lookups for identities and the profiles hanging off them."""

from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload

from ..models.mentor import Mentor
from ..models.user import AccUser, User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_active(self, user_id: str) -> Optional[User]:
        query = self.db.query(User).filter(User.id == user_id, User.is_active.is_(True))
        return self._execute_scalar(query)


class AccUserRepository(BaseRepository[AccUser]):
    def __init__(self, db: Session):
        super().__init__(db, AccUser)

    def get_by_user_id(self, user_id: str) -> Optional[AccUser]:
        return self.find_one_by(user_id=user_id)


class MentorRepository(BaseRepository[Mentor]):
    """Mentor profiles, loaded together with their position."""

    def __init__(self, db: Session):
        super().__init__(db, Mentor)

    def get_by_user_id(self, user_id: str) -> Optional[Mentor]:
        query = self._apply_eager_loading(self.db.query(Mentor).filter(Mentor.user_id == user_id))
        return self._execute_scalar(query)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Mentor.position))
