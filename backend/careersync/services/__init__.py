"""
Service layer.

Business logic lives here; routes call services, services call repositories.
"""

from .availability_query_service import AvailabilityQueryService
from .base import BaseService
from .booking_service import BookingService
from .session_service import SessionService
from .timeslot_service import TimeslotService

__all__ = [
    "AvailabilityQueryService",
    "BaseService",
    "BookingService",
    "SessionService",
    "TimeslotService",
]
