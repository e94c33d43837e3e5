import logging

from ...dto.event_dto import EventResponse, NoteCreateRequest
from ...services.event_log import EventLog
from ...services.session_manager import SessionManager
from .list_events import event_to_response

logger = logging.getLogger(__name__)


class RecordNoteUseCase:
    """Append a manual or conversation note to the active session."""

    def __init__(self, session_manager: SessionManager, event_log: EventLog) -> None:
        self._session_manager = session_manager
        self._event_log = event_log

    async def execute(self, request: NoteCreateRequest) -> EventResponse:
        session = await self._session_manager.get_or_create_active_session()
        event = await self._event_log.record(
            request.type,
            request.content,
            session_id=session.id,
            related_identity_id=request.related_identity_id,
        )
        logger.info(f"Recorded {event.type.value} event {event.id} in session {session.id}")
        return event_to_response(event)
