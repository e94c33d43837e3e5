# Standard library imports
import logging
from datetime import datetime
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

# Local application imports
from ...domain.repositories.session_repository import SessionRepository
from ...domain.models.session import Session
from ...domain.constants import SessionFields
from ...utils.datetime_utils import ensure_utc, utc_now
from .mongo_connection import get_session_collection

logger = logging.getLogger(__name__)


class MongoSessionRepository(SessionRepository):
    """
    MongoDB implementation of SessionRepository.

    get_or_create_active is a single upsert against the unique partial index
    on is_active (see mongo_connection.ensure_indexes), so two concurrent
    callers cannot both insert an active session.
    """

    def __init__(self, session_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.session_collection = (
            session_collection if session_collection is not None else get_session_collection()
        )

    async def find_active(self) -> Optional[Session]:
        doc = await self.session_collection.find_one(
            {SessionFields.IS_ACTIVE: True},
            sort=[(SessionFields.STARTED_AT, DESCENDING)],
        )
        if not doc:
            return None
        return self._document_to_session(doc)

    async def get_or_create_active(self, started_at: datetime, title: Optional[str] = None) -> Session:
        try:
            doc = await self.session_collection.find_one_and_update(
                {SessionFields.IS_ACTIVE: True},
                {
                    "$setOnInsert": {
                        SessionFields.STARTED_AT: started_at,
                        SessionFields.ENDED_AT: None,
                        SessionFields.TITLE: title,
                        SessionFields.SUMMARY: None,
                    }
                },
                sort=[(SessionFields.STARTED_AT, DESCENDING)],
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            # Lost the insert race to another caller; its session is the active one.
            logger.info("Concurrent active-session upsert detected, re-reading active session")
            existing = await self.find_active()
            if existing is None:
                raise RuntimeError("Active session vanished after upsert conflict")
            return existing

        if not doc:
            raise RuntimeError("Active session upsert returned no document")
        return self._document_to_session(doc)

    async def end(self, session_id: str, ended_at: datetime) -> Optional[Session]:
        try:
            object_id = ObjectId(session_id)
        except (InvalidId, ValueError, TypeError):
            return None

        doc = await self.session_collection.find_one_and_update(
            {SessionFields.MONGO_ID: object_id},
            {"$set": {SessionFields.ENDED_AT: ended_at or utc_now(), SessionFields.IS_ACTIVE: False}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._document_to_session(doc)

    def _document_to_session(self, doc: dict) -> Session:
        return Session(
            id=str(doc.get(SessionFields.MONGO_ID)),
            started_at=ensure_utc(doc.get(SessionFields.STARTED_AT)) or utc_now(),
            ended_at=ensure_utc(doc.get(SessionFields.ENDED_AT)),
            title=doc.get(SessionFields.TITLE),
            summary=doc.get(SessionFields.SUMMARY),
        )
