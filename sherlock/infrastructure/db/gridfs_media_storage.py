# Standard library imports
import logging
from typing import Optional
from urllib.parse import quote

# External package imports
from motor.motor_asyncio import AsyncIOMotorGridFSBucket
from gridfs.errors import NoFile
from pymongo.errors import PyMongoError

# Local application imports
from ...agents.exceptions import MediaStorageError
from ...core.config import get_settings
from ...domain.repositories.media_storage import MediaStorage
from .mongo_connection import get_headshot_bucket

logger = logging.getLogger(__name__)


class GridFSMediaStorage(MediaStorage):
    """MediaStorage backed by a MongoDB GridFS bucket; files are served by the media router"""

    def __init__(
        self,
        bucket: Optional[AsyncIOMotorGridFSBucket] = None,
        public_base_url: Optional[str] = None,
    ) -> None:
        self.bucket = bucket if bucket is not None else get_headshot_bucket()
        self.public_base_url = (public_base_url or get_settings().public_media_base_url).rstrip("/")

    async def upload(self, filename: str, data: bytes, content_type: str) -> str:
        if not filename:
            raise ValueError("Filename is required")
        if not data:
            raise ValueError("Cannot upload empty file")

        cursor = self.bucket.find({"filename": filename}, limit=1)
        async for _existing in cursor:
            raise FileExistsError(f"Media file already exists: {filename}")

        try:
            file_id = await self.bucket.upload_from_stream(
                filename,
                data,
                metadata={"contentType": content_type},
            )
        except PyMongoError as e:
            raise MediaStorageError(f"Failed to store {filename}: {e}") from e
        logger.debug(f"Stored {len(data)} bytes as {filename} ({file_id})")
        return str(file_id)

    def get_public_url(self, filename: str) -> str:
        return f"{self.public_base_url}/{quote(filename)}"

    async def download(self, filename: str) -> Optional[bytes]:
        try:
            stream = await self.bucket.open_download_stream_by_name(filename)
        except NoFile:
            return None
        return await stream.read()
