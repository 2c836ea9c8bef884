# backend/careersync/repositories/booking_repository.py
"""Booking repository: inserts and read views over immutable booking records."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.booking import Booking
from .base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def list_for_acc_user(self, acc_user_id: str) -> List[Booking]:
        query = (
            self.db.query(Booking)
            .filter(Booking.acc_user_id == acc_user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return self._execute_query(query)

    def list_for_mentor(self, mentor_id: str, status: Optional[str] = None) -> List[Booking]:
        query = self.db.query(Booking).filter(Booking.mentor_id == mentor_id)
        if status:
            query = query.filter(Booking.status == status)
        query = query.order_by(Booking.created_at.desc(), Booking.id.desc())
        return self._execute_query(query)
