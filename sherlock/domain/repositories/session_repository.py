from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..models.session import Session


class SessionRepository(ABC):
    """Repository interface - recording sessions"""

    @abstractmethod
    async def find_active(self) -> Optional[Session]:
        """Newest session with no ended_at, if any"""
        pass

    @abstractmethod
    async def get_or_create_active(self, started_at: datetime, title: Optional[str] = None) -> Session:
        """Atomically return the active session, creating it when none exists"""
        pass

    @abstractmethod
    async def end(self, session_id: str, ended_at: datetime) -> Optional[Session]:
        """Set ended_at on a session; returns None if it does not exist"""
        pass
