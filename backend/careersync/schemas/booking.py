"""Booking request and response schemas."""

from datetime import datetime

from pydantic import Field

from ..models.booking import BookingStatus
from .base import Money, StandardizedModel, StrictRequestModel


class BookingCreate(StrictRequestModel):
    """
    Allocation request. All four ids must describe the same offering:
    the timeslot has to belong to the given mentor and session.
    """

    schedule_timeslot_id: str = Field(..., min_length=1, max_length=26)
    mentor_id: str = Field(..., min_length=1, max_length=26)
    position_id: str = Field(..., min_length=1, max_length=26)
    session_id: str = Field(..., min_length=1, max_length=26)


class BookingResponse(StandardizedModel):
    id: str
    schedule_timeslot_id: str
    mentor_id: str
    acc_user_id: str
    position_id: str
    session_id: str

    mentor_name_snapshot: str
    acc_user_name_snapshot: str
    position_name_snapshot: str
    session_price_snapshot: Money
    start_date_snapshot: datetime
    end_date_snapshot: datetime

    total_amount: Money
    status: BookingStatus
    created_at: datetime
