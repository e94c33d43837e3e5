from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.event import Event


class EventRepository(ABC):
    """Repository interface - append-only event log"""

    @abstractmethod
    async def create(self, event: Event) -> Event:
        """Insert event and return it with id and created_at set"""
        pass

    @abstractmethod
    async def list(
        self,
        session_id: Optional[str],
        identity_id: Optional[str],
        limit: int,
    ) -> List[Event]:
        """List events newest first, optionally filtered by session and/or identity"""
        pass
