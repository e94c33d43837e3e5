# Standard library imports
import asyncio
import logging
import os
import tempfile
from typing import List, Optional

# External package imports
import httpx

# Local application imports
from ...utils.face_embedding import (
    DEFAULT_EMBEDDING_MODEL,
    compute_face_embedding,
    normalize_embedding,
)
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


class HeadshotEmbedder:
    """
    Turns a headshot URL into a canonical-length face embedding.

    Downloads the image with the shared httpx client, writes it to a temp
    file and runs DeepFace in a worker thread. Any failure (HTTP error,
    non-image payload, no face found) yields None.
    """

    def __init__(
        self,
        embedding_dimension: int = 1024,
        model_name: str = DEFAULT_EMBEDDING_MODEL,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.embedding_dimension = embedding_dimension
        self.model_name = model_name
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client or get_shared_http_client()

    async def embed_from_url(self, url: str) -> Optional[List[float]]:
        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to download headshot {url}: {e}")
            return None

        if not response.content:
            logger.warning(f"Headshot {url} is empty")
            return None

        fd, path = tempfile.mkstemp(suffix=".jpg", prefix="headshot_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(response.content)
            embedding = await asyncio.to_thread(compute_face_embedding, path, self.model_name)
        except Exception as e:
            logger.warning(f"Embedding generation failed for {url}: {e}")
            return None
        finally:
            try:
                os.remove(path)
            except OSError:
                pass

        if not embedding:
            return None
        return normalize_embedding(embedding, self.embedding_dimension)
