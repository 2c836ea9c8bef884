"""Timeslot request and response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import Money, StandardizedModel, StrictRequestModel, as_utc


class TimeslotWindow(StrictRequestModel):
    """
    One window to add. Accepts ``start_time``/``end_time`` or the
    ``start_date``/``end_date`` spelling used by older clients.
    """

    start_time: datetime = Field(validation_alias=AliasChoices("start_time", "start_date"))
    end_time: datetime = Field(validation_alias=AliasChoices("end_time", "end_date"))

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_tz(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class TimeslotBatchCreate(StrictRequestModel):
    session_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("session_id", "sessionId"),
        description="Existing session id, or 'auto-create' / omitted to use the default session",
    )
    timeslots: List[TimeslotWindow] = Field(default_factory=list)


class TimeslotUpdate(StrictRequestModel):
    start_time: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("start_time", "start_date")
    )
    end_time: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("end_time", "end_date")
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_tz(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class TimeslotBatchResponse(StandardizedModel):
    added_count: int = Field(serialization_alias="addedCount")
    session_id: str = Field(serialization_alias="sessionId")


class TimeslotResponse(StandardizedModel):
    id: str
    mentor_id: str
    session_id: str
    start_time: datetime
    end_time: datetime
    is_booked: bool


class MentorTimeslotResponse(TimeslotResponse):
    """
    An open timeslot as the owning mentor sees it. The booking and requester
    fields stay null unless a pending booking already references the slot.
    """

    session_price: Money
    session_location: str
    booking_id: Optional[str] = None
    booking_status: Optional[str] = None
    requester_name: Optional[str] = None
    requester_email: Optional[str] = None
