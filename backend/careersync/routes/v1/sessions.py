# backend/careersync/routes/v1/sessions.py
"""
Session routes - API v1

Endpoints:
    GET /available - Public listing of available sessions with open timeslots
    POST / - Create a session (mentor)
    GET /me - The mentor's sessions
    PATCH /{session_id} - Edit a session the mentor owns
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import (
    get_availability_query_service,
    get_current_mentor_user,
    get_session_service,
)
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.session import (
    AvailableSessionsResponse,
    SessionCreate,
    SessionResponse,
    SessionUpdate,
)
from ...services.availability_query_service import AvailabilityQueryService
from ...services.session_service import SessionService
from .common import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions-v1"])


@router.get("/available", response_model=AvailableSessionsResponse)
async def list_available_sessions(
    upcoming_only: bool = Query(False, description="Hide timeslots that already started"),
    availability_service: AvailabilityQueryService = Depends(get_availability_query_service),
) -> AvailableSessionsResponse:
    return await asyncio.to_thread(
        availability_service.list_available_sessions, upcoming_only
    )


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Mentor profile or position not found"},
        422: {"description": "No position given and none on the mentor profile"},
    },
)
async def create_session(
    payload: SessionCreate,
    current_user: User = Depends(get_current_mentor_user),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    try:
        session = await asyncio.to_thread(
            session_service.create_session, current_user.id, payload
        )
        return SessionResponse.model_validate(session)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=List[SessionResponse])
async def list_my_sessions(
    current_user: User = Depends(get_current_mentor_user),
    session_service: SessionService = Depends(get_session_service),
) -> List[SessionResponse]:
    try:
        sessions = await asyncio.to_thread(session_service.list_my_sessions, current_user.id)
        return [SessionResponse.model_validate(s) for s in sessions]
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{session_id}", response_model=SessionResponse)
async def edit_session(
    session_id: str,
    payload: SessionUpdate,
    current_user: User = Depends(get_current_mentor_user),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    try:
        session = await asyncio.to_thread(
            session_service.edit_session, current_user.id, session_id, payload
        )
        return SessionResponse.model_validate(session)
    except DomainException as e:
        handle_domain_exception(e)
