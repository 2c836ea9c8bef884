# backend/careersync/routes/v1/bookings.py
"""
Booking routes - API v1

Endpoints:
    POST / - Allocate a timeslot (requester)
    GET /me - Requester's bookings
    GET /mentor - Mentor's bookings, optional status filter
    GET /{booking_id} - Booking detail for its requester or mentor
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import (
    get_booking_service,
    get_current_account_user,
    get_current_mentor_user,
    get_current_user,
)
from ...core.exceptions import DomainException
from ...models.booking import BookingStatus
from ...models.user import User
from ...schemas.booking import BookingCreate, BookingResponse
from ...services.booking_service import BookingService
from .common import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Mentor, position or session do not match the timeslot"},
        404: {"description": "Requester has no account profile"},
        409: {"description": "Timeslot unavailable"},
        503: {"description": "Database busy, retry later"},
    },
)
async def create_booking(
    payload: BookingCreate,
    current_user: User = Depends(get_current_account_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """
    Book an available timeslot.

    The slot is consumed in the same transaction; a second attempt on the
    same slot gets 409.
    """
    try:
        booking = await asyncio.to_thread(booking_service.allocate, current_user.id, payload)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=List[BookingResponse])
async def list_my_bookings(
    current_user: User = Depends(get_current_account_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    try:
        bookings = await asyncio.to_thread(booking_service.list_my_bookings, current_user.id)
        return [BookingResponse.model_validate(b) for b in bookings]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/mentor", response_model=List[BookingResponse])
async def list_mentor_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_mentor_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    try:
        bookings = await asyncio.to_thread(
            booking_service.list_mentor_bookings,
            current_user.id,
            status_filter.value if status_filter else None,
        )
        return [BookingResponse.model_validate(b) for b in bookings]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        booking = await asyncio.to_thread(booking_service.get_booking, current_user.id, booking_id)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)
