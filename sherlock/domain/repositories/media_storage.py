from abc import ABC, abstractmethod
from typing import Optional


class MediaStorage(ABC):
    """Binary store for headshot images"""

    @abstractmethod
    async def upload(self, filename: str, data: bytes, content_type: str) -> str:
        """Store bytes under filename (never overwrites); returns the stored file id"""
        pass

    @abstractmethod
    def get_public_url(self, filename: str) -> str:
        """Public URL under which filename is served"""
        pass

    @abstractmethod
    async def download(self, filename: str) -> Optional[bytes]:
        """Read a stored file back; None if it does not exist"""
        pass
