from typing import Optional

from ...domain.models.event import Event, EventType
from ...domain.repositories.event_repository import EventRepository
from ...utils.timeouts import with_timeout


class EventLog:
    """Append-only writer for audit events. Failures propagate to the caller."""

    def __init__(self, event_repository: EventRepository, timeout_seconds: Optional[float] = None) -> None:
        self._event_repository = event_repository
        self._timeout_seconds = timeout_seconds

    async def record(
        self,
        event_type: EventType,
        content: str,
        session_id: Optional[str] = None,
        related_identity_id: Optional[str] = None,
    ) -> Event:
        if not content or not content.strip():
            raise ValueError("Event content is required")

        event = Event(
            id=None,
            session_id=session_id,
            type=EventType(event_type),
            content=content.strip(),
            related_identity_id=related_identity_id,
        )
        return await with_timeout(
            self._event_repository.create(event),
            self._timeout_seconds,
            "create_event",
        )
