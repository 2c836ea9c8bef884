"""Session request and response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from .base import Money, StandardizedModel, StrictRequestModel
from .timeslot import TimeslotResponse


class SessionCreate(StrictRequestModel):
    position_id: Optional[str] = Field(
        default=None, description="Defaults to the mentor's profile position"
    )
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    location_name: str = Field(..., min_length=1, max_length=255)
    location_map_url: Optional[str] = Field(default=None, max_length=1024)
    is_available: bool = True


class SessionUpdate(StrictRequestModel):
    """Partial update; fields left out are not touched."""

    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    location_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location_map_url: Optional[str] = Field(default=None, max_length=1024)
    is_available: Optional[bool] = None


class SessionResponse(StandardizedModel):
    id: str
    mentor_id: str
    position_id: str
    price: Money
    location_name: str
    location_map_url: Optional[str] = None
    is_available: bool
    is_auto_provisioned: bool = False
    created_at: datetime


class MentorSummary(StandardizedModel):
    id: str
    full_name: str


class PositionSummary(StandardizedModel):
    id: str
    position_name: str


class AvailableSessionResponse(SessionResponse):
    mentor: MentorSummary
    position: PositionSummary
    timeslots: List[TimeslotResponse] = Field(default_factory=list)


class AvailableSessionsResponse(StandardizedModel):
    count: int
    sessions: List[AvailableSessionResponse]
