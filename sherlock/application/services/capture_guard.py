"""
Headshot capture for newly created identities.

At most one headshot is captured per identity. The durable flag is the
identity's headshot_media_url; the in-memory attempt map only stops two
concurrent attempts for the same identity from both uploading. A failed
attempt releases its slot so a later sighting can retry.
"""
import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from ...domain.constants.identity_fields import IdentityFields
from ...domain.repositories.identity_repository import IdentityRepository
from ...domain.repositories.media_storage import MediaStorage
from ...utils.datetime_utils import epoch_millis
from ...utils.headshot_image import crop_face, encode_jpeg
from ...utils.timeouts import with_timeout

logger = logging.getLogger(__name__)

HEADSHOT_CONTENT_TYPE = "image/jpeg"


class CaptureState(str, Enum):
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class CaptureStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"  # uploaded, identity record not updated
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class CaptureResult:
    status: CaptureStatus
    identity_id: Optional[str]
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == CaptureStatus.SUCCESS


class CaptureGuard:
    def __init__(
        self,
        identity_repository: IdentityRepository,
        media_storage: MediaStorage,
        padding_ratio: float = 0.2,
        jpeg_quality: int = 90,
        timeout_seconds: Optional[float] = None,
        clock_millis: Callable[[], int] = epoch_millis,
    ) -> None:
        self._identity_repository = identity_repository
        self._media_storage = media_storage
        self._padding_ratio = padding_ratio
        self._jpeg_quality = jpeg_quality
        self._timeout_seconds = timeout_seconds
        self._clock_millis = clock_millis
        self._attempts: Dict[str, CaptureState] = {}
        self._lock = threading.Lock()

    def state_of(self, identity_id: str) -> Optional[CaptureState]:
        with self._lock:
            return self._attempts.get(identity_id)

    def _reserve(self, identity_id: str) -> bool:
        with self._lock:
            if self._attempts.get(identity_id) in (CaptureState.PENDING, CaptureState.DONE):
                return False
            self._attempts[identity_id] = CaptureState.PENDING
            return True

    def _finish(self, identity_id: str, state: CaptureState) -> None:
        with self._lock:
            self._attempts[identity_id] = state

    def _encode_headshot(self, frame: np.ndarray, box: Sequence[float]) -> bytes:
        crop = crop_face(frame, box, self._padding_ratio)
        return encode_jpeg(crop, self._jpeg_quality)

    async def attempt_capture(
        self,
        identity_id: Optional[str],
        frame: Optional[np.ndarray],
        box: Sequence[float],
    ) -> CaptureResult:
        if not identity_id:
            return CaptureResult(status=CaptureStatus.FAILED, identity_id=identity_id, error="Identity ID is required")

        if not self._reserve(identity_id):
            logger.debug(f"Headshot for {identity_id} already captured or in flight")
            return CaptureResult(status=CaptureStatus.SKIPPED, identity_id=identity_id)

        try:
            identity = await with_timeout(
                self._identity_repository.get_by_id(identity_id),
                self._timeout_seconds,
                "get_identity",
            )
            if identity is None:
                raise ValueError(f"Identity {identity_id} not found")
            if identity.headshot_media_url:
                self._finish(identity_id, CaptureState.DONE)
                return CaptureResult(
                    status=CaptureStatus.SKIPPED,
                    identity_id=identity_id,
                    url=identity.headshot_media_url,
                )

            if frame is None:
                raise ValueError("No frame available for headshot")
            data = await asyncio.to_thread(self._encode_headshot, frame, box)

            filename = f"{identity_id}-{self._clock_millis()}.jpg"
            await with_timeout(
                self._media_storage.upload(filename, data, HEADSHOT_CONTENT_TYPE),
                self._timeout_seconds,
                "upload_headshot",
            )
        except Exception as e:
            self._finish(identity_id, CaptureState.FAILED)
            logger.error(f"Headshot capture failed for {identity_id}: {e}")
            return CaptureResult(status=CaptureStatus.FAILED, identity_id=identity_id, error=str(e))

        url: Optional[str] = None
        try:
            url = self._media_storage.get_public_url(filename)
            updated = await with_timeout(
                self._identity_repository.update(identity_id, {IdentityFields.HEADSHOT_MEDIA_URL: url}),
                self._timeout_seconds,
                "update_identity_headshot",
            )
            if updated is None:
                raise ValueError(f"Identity {identity_id} disappeared before headshot update")
        except Exception as e:
            self._finish(identity_id, CaptureState.FAILED)
            logger.error(f"Headshot {filename} uploaded but identity {identity_id} not updated: {e}")
            return CaptureResult(
                status=CaptureStatus.PARTIAL,
                identity_id=identity_id,
                url=url,
                error="Upload succeeded but update failed",
            )

        self._finish(identity_id, CaptureState.DONE)
        logger.info(f"Captured headshot for {identity_id}: {url}")
        return CaptureResult(status=CaptureStatus.SUCCESS, identity_id=identity_id, url=url)
