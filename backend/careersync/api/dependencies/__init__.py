"""
Central export point for all dependencies.
"""

from .auth import get_current_account_user, get_current_mentor_user, get_current_user
from .database import get_db
from .services import (
    get_availability_query_service,
    get_booking_service,
    get_session_service,
    get_timeslot_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_account_user",
    "get_current_mentor_user",
    # Database
    "get_db",
    # Services
    "get_availability_query_service",
    "get_booking_service",
    "get_session_service",
    "get_timeslot_service",
]
