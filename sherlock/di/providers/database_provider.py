from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_identity_collection,
    get_session_collection,
    get_event_collection,
    get_headshot_bucket,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the database, its collections and the GridFS headshot bucket.
        Repositories only ever receive their collection from here.
        """
        container.register_singleton("database", get_database())
        container.register_singleton("identity_collection", get_identity_collection())
        container.register_singleton("session_collection", get_session_collection())
        container.register_singleton("event_collection", get_event_collection())
        container.register_singleton("headshot_bucket", get_headshot_bucket())
