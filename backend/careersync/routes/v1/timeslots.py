# backend/careersync/routes/v1/timeslots.py
"""
Timeslot routes - API v1 (mentor only)

Endpoints:
    POST / - Add timeslots to a session (or the auto-provisioned one)
    GET / - The mentor's open timeslots across sessions
    GET /session/{session_id} - Timeslots of one session
    PATCH /{timeslot_id} - Move a timeslot
    DELETE /{timeslot_id} - Remove a timeslot
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_current_mentor_user, get_timeslot_service
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.timeslot import (
    MentorTimeslotResponse,
    TimeslotBatchCreate,
    TimeslotBatchResponse,
    TimeslotResponse,
    TimeslotUpdate,
)
from ...services.timeslot_service import TimeslotService
from .common import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["timeslots-v1"])


@router.post(
    "",
    response_model=TimeslotBatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty list or a window whose end is not after its start"},
        404: {"description": "Mentor profile or session not found"},
        422: {"description": "Mentor profile has no position for the default session"},
    },
)
async def add_timeslots(
    payload: TimeslotBatchCreate,
    current_user: User = Depends(get_current_mentor_user),
    timeslot_service: TimeslotService = Depends(get_timeslot_service),
) -> TimeslotBatchResponse:
    """
    Add one or more windows.

    Send ``session_id`` "auto-create" (or omit it) to use the mentor's
    default session, created from profile defaults when missing.
    """
    try:
        result = await asyncio.to_thread(
            timeslot_service.add_timeslots,
            current_user.id,
            payload.session_id,
            payload.timeslots,
        )
        return TimeslotBatchResponse(added_count=result.added_count, session_id=result.session_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=List[MentorTimeslotResponse])
async def list_available_timeslots(
    current_user: User = Depends(get_current_mentor_user),
    timeslot_service: TimeslotService = Depends(get_timeslot_service),
) -> List[MentorTimeslotResponse]:
    try:
        return await asyncio.to_thread(timeslot_service.list_all_available, current_user.id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/session/{session_id}", response_model=List[TimeslotResponse])
async def list_session_timeslots(
    session_id: str,
    current_user: User = Depends(get_current_mentor_user),
    timeslot_service: TimeslotService = Depends(get_timeslot_service),
) -> List[TimeslotResponse]:
    try:
        timeslots = await asyncio.to_thread(
            timeslot_service.list_for_session, session_id, current_user.id
        )
        return [TimeslotResponse.model_validate(t) for t in timeslots]
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{timeslot_id}", response_model=TimeslotResponse)
async def update_timeslot(
    timeslot_id: str,
    payload: TimeslotUpdate,
    current_user: User = Depends(get_current_mentor_user),
    timeslot_service: TimeslotService = Depends(get_timeslot_service),
) -> TimeslotResponse:
    try:
        timeslot = await asyncio.to_thread(
            timeslot_service.update_timeslot, current_user.id, timeslot_id, payload
        )
        return TimeslotResponse.model_validate(timeslot)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete(
    "/{timeslot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_timeslot(
    timeslot_id: str,
    current_user: User = Depends(get_current_mentor_user),
    timeslot_service: TimeslotService = Depends(get_timeslot_service),
) -> Response:
    try:
        await asyncio.to_thread(timeslot_service.delete_timeslot, current_user.id, timeslot_id)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
