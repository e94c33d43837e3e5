from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.identity import Identity


class IdentityRepository(ABC):
    """Repository interface - identity records plus nearest-neighbour lookup by face embedding"""

    @abstractmethod
    async def create(self, identity: Identity) -> Identity:
        """Create identity and return it with id and created_at set"""
        pass

    @abstractmethod
    async def get_by_id(self, identity_id: str) -> Optional[Identity]:
        """Get identity by ID"""
        pass

    @abstractmethod
    async def update(self, identity_id: str, updates: Dict[str, Any]) -> Optional[Identity]:
        """Apply a partial update; returns the updated identity or None if it does not exist"""
        pass

    @abstractmethod
    async def find_nearest(self, embedding: Sequence[float]) -> Optional[Tuple[Identity, float]]:
        """Return the single closest identity and its cosine similarity in [0, 1]"""
        pass

    @abstractmethod
    async def list(self, limit: int, skip: int) -> List[Identity]:
        """List identities, newest first"""
        pass
