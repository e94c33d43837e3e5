"""
Events API: read the audit log and append manual notes.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
import logging
from typing import Optional

# -----------------------------------------------------------------------------
# Third-party
# -----------------------------------------------------------------------------
from fastapi import APIRouter, HTTPException, Query, status

# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
from ...agents.exceptions import get_user_message
from ...application.dto.event_dto import EventListResponse, EventResponse, NoteCreateRequest
from ...application.use_cases.event.list_events import ListEventsUseCase
from ...application.use_cases.event.record_note import RecordNoteUseCase
from ...di.container import get_container

# -----------------------------------------------------------------------------
# Logging and router
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)
router = APIRouter(tags=["events"])


@router.get("", response_model=EventListResponse)
async def list_events(
    session_id: Optional[str] = Query(None),
    identity_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
) -> EventListResponse:
    """
    List events newest first.
    - Timeline view filters by session_id
    - Identity detail view filters by identity_id
    """
    use_case = get_container().get(ListEventsUseCase)
    try:
        return await use_case.execute(session_id=session_id, identity_id=identity_id, limit=limit)
    except Exception as e:
        logger.error("Error listing events: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to list events")


@router.post("/notes", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def record_note(request: NoteCreateRequest) -> EventResponse:
    use_case = get_container().get(RecordNoteUseCase)
    try:
        return await use_case.execute(request)
    except Exception as e:
        logger.error("Error recording note: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=get_user_message(e))
