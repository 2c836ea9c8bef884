# backend/careersync/api/dependencies/services.py
"""
Service factories for dependency injection.

Each request gets fresh service instances bound to its database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.availability_query_service import AvailabilityQueryService
from ...services.booking_service import BookingService
from ...services.session_service import SessionService
from ...services.timeslot_service import TimeslotService
from .database import get_db


def get_session_service(db: Session = Depends(get_db)) -> SessionService:
    return SessionService(db)


def get_timeslot_service(db: Session = Depends(get_db)) -> TimeslotService:
    return TimeslotService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_availability_query_service(db: Session = Depends(get_db)) -> AvailabilityQueryService:
    return AvailabilityQueryService(db)
