from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.identity_repository import IdentityRepository
from ...domain.repositories.session_repository import SessionRepository
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.media_storage import MediaStorage
from ...infrastructure.db.mongo_identity_repository import MongoIdentityRepository
from ...infrastructure.db.mongo_session_repository import MongoSessionRepository
from ...infrastructure.db.mongo_event_repository import MongoEventRepository
from ...infrastructure.db.gridfs_media_storage import GridFSMediaStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(
            IdentityRepository,
            MongoIdentityRepository(identity_collection=container.get("identity_collection"))
        )

        container.register_singleton(
            SessionRepository,
            MongoSessionRepository(session_collection=container.get("session_collection"))
        )

        container.register_singleton(
            EventRepository,
            MongoEventRepository(event_collection=container.get("event_collection"))
        )

        container.register_singleton(
            MediaStorage,
            GridFSMediaStorage(
                bucket=container.get("headshot_bucket"),
                public_base_url=get_settings().public_media_base_url,
            )
        )
