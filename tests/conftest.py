"""
Shared pytest fixtures for sherlock tests.

In-memory repositories implement the domain interfaces so pipeline services
can be exercised end to end without MongoDB.
"""
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from sherlock.domain.models.event import Event
from sherlock.domain.models.identity import Identity
from sherlock.domain.models.session import Session
from sherlock.domain.repositories.event_repository import EventRepository
from sherlock.domain.repositories.identity_repository import IdentityRepository
from sherlock.domain.repositories.media_storage import MediaStorage
from sherlock.domain.repositories.session_repository import SessionRepository
from sherlock.utils.datetime_utils import utc_now
from sherlock.utils.face_embedding import find_nearest


class InMemoryIdentityRepository(IdentityRepository):
    def __init__(self) -> None:
        self.items: Dict[str, Identity] = {}
        self._next_id = 1

    async def create(self, identity: Identity) -> Identity:
        identity.id = f"id-{self._next_id}"
        self._next_id += 1
        identity.created_at = identity.created_at or utc_now()
        self.items[identity.id] = identity
        return identity

    async def get_by_id(self, identity_id: str) -> Optional[Identity]:
        return self.items.get(identity_id)

    async def update(self, identity_id: str, updates: Dict[str, Any]) -> Optional[Identity]:
        identity = self.items.get(identity_id)
        if identity is None:
            return None
        for key, value in updates.items():
            setattr(identity, key, value)
        return identity

    async def find_nearest(self, embedding: Sequence[float]) -> Optional[Tuple[Identity, float]]:
        candidates = [(i.id, i.face_embedding) for i in self.items.values() if i.face_embedding]
        nearest = find_nearest(embedding, candidates)
        if nearest is None:
            return None
        identity_id, similarity = nearest
        return self.items[identity_id], similarity

    async def list(self, limit: int, skip: int) -> List[Identity]:
        return list(self.items.values())[skip:skip + limit]


class InMemorySessionRepository(SessionRepository):
    def __init__(self) -> None:
        self.sessions: List[Session] = []

    async def find_active(self) -> Optional[Session]:
        active = [s for s in self.sessions if s.is_active]
        return active[-1] if active else None

    async def get_or_create_active(self, started_at: datetime, title: Optional[str] = None) -> Session:
        active = await self.find_active()
        if active is not None:
            return active
        session = Session(id=f"session-{len(self.sessions) + 1}", started_at=started_at, title=title)
        self.sessions.append(session)
        return session

    async def end(self, session_id: str, ended_at: datetime) -> Optional[Session]:
        for session in self.sessions:
            if session.id == session_id:
                session.ended_at = ended_at
                return session
        return None


class InMemoryEventRepository(EventRepository):
    def __init__(self) -> None:
        self.events: List[Event] = []

    async def create(self, event: Event) -> Event:
        event.id = f"event-{len(self.events) + 1}"
        event.created_at = utc_now()
        self.events.append(event)
        return event

    async def list(self, session_id: Optional[str], identity_id: Optional[str], limit: int) -> List[Event]:
        items = [
            e for e in reversed(self.events)
            if (session_id is None or e.session_id == session_id)
            and (identity_id is None or e.related_identity_id == identity_id)
        ]
        return items[:limit]


class InMemoryMediaStorage(MediaStorage):
    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}
        self.upload_calls = 0

    async def upload(self, filename: str, data: bytes, content_type: str) -> str:
        self.upload_calls += 1
        if filename in self.files:
            raise FileExistsError(filename)
        self.files[filename] = data
        return filename

    def get_public_url(self, filename: str) -> str:
        return f"http://media.test/headshots/{filename}"

    async def download(self, filename: str) -> Optional[bytes]:
        return self.files.get(filename)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_sherlock_db",
        "LOCAL_TIMEZONE": "UTC",
        "MATCH_THRESHOLD": "0.7",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches modules that import it at load time."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.local_timezone = "UTC"
    mock.match_threshold = 0.7
    mock.embedding_dimension = 1024

    with patch("sherlock.core.config.get_settings", return_value=mock), patch(
        "sherlock.utils.datetime_utils.get_settings", return_value=mock
    ):
        yield mock


@pytest.fixture
def identity_repo():
    return InMemoryIdentityRepository()


@pytest.fixture
def session_repo():
    return InMemorySessionRepository()


@pytest.fixture
def event_repo():
    return InMemoryEventRepository()


@pytest.fixture
def media_storage():
    return InMemoryMediaStorage()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2025, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


@pytest.fixture
def frame():
    """A 200x200 BGR frame with some structure so JPEG encoding is non-trivial."""
    image = np.zeros((200, 200, 3), dtype=np.uint8)
    image[50:150, 50:150] = (40, 120, 200)
    return image
