from .identity_repository import IdentityRepository
from .session_repository import SessionRepository
from .event_repository import EventRepository
from .media_storage import MediaStorage

__all__ = ["IdentityRepository", "SessionRepository", "EventRepository", "MediaStorage"]
