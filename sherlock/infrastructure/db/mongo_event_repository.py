# Standard library imports
from typing import List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING

# Local application imports
from ...domain.repositories.event_repository import EventRepository
from ...domain.models.event import Event, EventType
from ...domain.constants import EventFields
from ...utils.datetime_utils import ensure_utc, utc_now
from .mongo_connection import get_event_collection


class MongoEventRepository(EventRepository):
    """MongoDB implementation of EventRepository (insert-only, no update/delete)"""

    def __init__(self, event_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.event_collection = event_collection if event_collection is not None else get_event_collection()

    async def create(self, event: Event) -> Event:
        if not event:
            raise ValueError("Event cannot be None")

        doc = {
            EventFields.SESSION_ID: event.session_id,
            EventFields.TYPE: EventType(event.type).value,
            EventFields.CONTENT: event.content,
            EventFields.RELATED_IDENTITY_ID: event.related_identity_id,
            EventFields.CREATED_AT: event.created_at or utc_now(),
        }

        result = await self.event_collection.insert_one(doc)
        doc[EventFields.MONGO_ID] = result.inserted_id
        return self._document_to_event(doc)

    async def list(
        self,
        session_id: Optional[str],
        identity_id: Optional[str],
        limit: int,
    ) -> List[Event]:
        query = {}
        if session_id:
            query[EventFields.SESSION_ID] = session_id
        if identity_id:
            query[EventFields.RELATED_IDENTITY_ID] = identity_id

        cursor = (
            self.event_collection.find(query)
            .sort([(EventFields.CREATED_AT, DESCENDING)])
            .limit(max(1, int(limit)))
        )

        items: List[Event] = []
        async for doc in cursor:
            items.append(self._document_to_event(doc))
        return items

    def _document_to_event(self, doc: dict) -> Event:
        raw_type = doc.get(EventFields.TYPE) or EventType.NOTES.value
        try:
            event_type = EventType(raw_type)
        except ValueError:
            event_type = EventType.NOTES
        return Event(
            id=str(doc.get(EventFields.MONGO_ID)),
            session_id=doc.get(EventFields.SESSION_ID),
            type=event_type,
            content=doc.get(EventFields.CONTENT) or "",
            related_identity_id=doc.get(EventFields.RELATED_IDENTITY_ID),
            created_at=ensure_utc(doc.get(EventFields.CREATED_AT)),
        )
