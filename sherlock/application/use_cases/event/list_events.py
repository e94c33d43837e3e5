from typing import Optional

from ....domain.models.event import Event
from ....domain.repositories.event_repository import EventRepository
from ...dto.event_dto import EventListResponse, EventResponse


def event_to_response(event: Event) -> EventResponse:
    return EventResponse(
        id=event.id or "",
        session_id=event.session_id,
        type=event.type,
        content=event.content,
        related_identity_id=event.related_identity_id,
        created_at=event.created_at,
    )


class ListEventsUseCase:
    def __init__(self, event_repository: EventRepository) -> None:
        self._event_repository = event_repository

    async def execute(
        self,
        session_id: Optional[str] = None,
        identity_id: Optional[str] = None,
        limit: int = 50,
    ) -> EventListResponse:
        items = await self._event_repository.list(
            session_id=session_id,
            identity_id=identity_id,
            limit=limit,
        )
        return EventListResponse(
            total=len(items),
            items=[event_to_response(e) for e in items],
        )
