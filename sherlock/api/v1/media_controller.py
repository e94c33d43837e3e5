"""Media API: serves stored headshot images."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...di.container import get_container
from ...domain.repositories.media_storage import MediaStorage

logger = logging.getLogger(__name__)
router = APIRouter(tags=["media"])


@router.get("/headshots/{filename}")
async def get_headshot(filename: str) -> Response:
    if "/" in filename or "\\" in filename or not filename.lower().endswith((".jpg", ".jpeg")):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid headshot name")

    storage = get_container().get(MediaStorage)
    try:
        data = await storage.download(filename)
    except Exception as e:
        logger.error("Error reading headshot %s: %s", filename, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Media storage unavailable")
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Headshot not found")
    return Response(
        content=data,
        media_type="image/jpeg",
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
