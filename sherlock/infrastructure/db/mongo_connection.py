# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
    AsyncIOMotorGridFSBucket,
)
from pymongo import ASCENDING, DESCENDING

# Local application imports
from ...core.config import get_settings
from ...domain.constants import EventFields, IdentityFields, SessionFields

logger = logging.getLogger(__name__)

# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=int(settings.store_timeout_seconds * 1000),
    )
    _mongo_database = _mongo_client[settings.mongo_database_name]
    return _mongo_database


def get_identity_collection() -> AsyncIOMotorCollection:
    """
    Get identities collection from MongoDB

    Returns:
        MongoDB collection for identities
    """
    return get_database()["identities"]


def get_session_collection() -> AsyncIOMotorCollection:
    """
    Get sessions collection from MongoDB

    Returns:
        MongoDB collection for sessions
    """
    return get_database()["sessions"]


def get_event_collection() -> AsyncIOMotorCollection:
    """
    Get events collection from MongoDB

    Returns:
        MongoDB collection for events
    """
    return get_database()["events"]


def get_headshot_bucket() -> AsyncIOMotorGridFSBucket:
    """
    Get the GridFS bucket that stores headshot images

    Returns:
        GridFS bucket named after HEADSHOT_BUCKET
    """
    return AsyncIOMotorGridFSBucket(get_database(), bucket_name=get_settings().headshot_bucket)


async def ensure_indexes(database: Optional[AsyncIOMotorDatabase] = None) -> None:
    """
    Create the indexes the repositories rely on. Safe to call on every startup.

    The unique partial index on sessions.is_active is what makes
    "at most one active session" hold under concurrent callers.
    """
    db = database if database is not None else get_database()

    await db["sessions"].create_index(
        [(SessionFields.IS_ACTIVE, ASCENDING)],
        name="one_active_session",
        unique=True,
        partialFilterExpression={SessionFields.IS_ACTIVE: True},
    )
    await db["sessions"].create_index([(SessionFields.STARTED_AT, DESCENDING)])
    await db["identities"].create_index([(IdentityFields.CREATED_AT, DESCENDING)])
    await db["events"].create_index(
        [(EventFields.SESSION_ID, ASCENDING), (EventFields.CREATED_AT, DESCENDING)]
    )
    await db["events"].create_index(
        [(EventFields.RELATED_IDENTITY_ID, ASCENDING), (EventFields.CREATED_AT, DESCENDING)]
    )
    logger.info("MongoDB indexes ensured")


def close_database() -> None:
    """Close the shared client (call on application shutdown)."""
    global _mongo_client, _mongo_database
    if _mongo_client is not None:
        _mongo_client.close()
    _mongo_client = None
    _mongo_database = None
