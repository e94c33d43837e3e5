from .mongo_connection import (
    get_database,
    get_identity_collection,
    get_session_collection,
    get_event_collection,
    get_headshot_bucket,
    ensure_indexes,
)
from .mongo_identity_repository import MongoIdentityRepository
from .mongo_session_repository import MongoSessionRepository
from .mongo_event_repository import MongoEventRepository
from .gridfs_media_storage import GridFSMediaStorage

__all__ = [
    "get_database",
    "get_identity_collection",
    "get_session_collection",
    "get_event_collection",
    "get_headshot_bucket",
    "ensure_indexes",
    "MongoIdentityRepository",
    "MongoSessionRepository",
    "MongoEventRepository",
    "GridFSMediaStorage",
]
