"""
Sessions API: the single active recording session.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ...agents.exceptions import get_user_message
from ...application.dto.session_dto import SessionResponse, SessionStartRequest
from ...application.use_cases.session.session_use_cases import (
    EndSessionUseCase,
    GetActiveSessionUseCase,
    StartSessionUseCase,
)
from ...di.container import get_container

logger = logging.getLogger(__name__)
router = APIRouter(tags=["sessions"])


@router.get("/active", response_model=SessionResponse)
async def get_active_session() -> SessionResponse:
    """Return the active session, opening one if none exists."""
    use_case = get_container().get(GetActiveSessionUseCase)
    try:
        return await use_case.execute()
    except Exception as e:
        logger.error("Error getting active session: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=get_user_message(e))


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(request: SessionStartRequest) -> SessionResponse:
    """End the active session (if any) and start a new one."""
    use_case = get_container().get(StartSessionUseCase)
    try:
        return await use_case.execute(request.title)
    except Exception as e:
        logger.error("Error starting session: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=get_user_message(e))


@router.post("/active/end", response_model=SessionResponse)
async def end_active_session() -> SessionResponse:
    use_case = get_container().get(EndSessionUseCase)
    try:
        ended = await use_case.execute()
    except Exception as e:
        logger.error("Error ending session: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=get_user_message(e))
    if ended is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active session")
    return ended
