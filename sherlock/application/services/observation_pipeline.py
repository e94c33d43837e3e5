"""
Frame-level entry point of the recognition pipeline.

The face detector delivers per-frame results (boxes plus embeddings) through
submit_frame(). The pipeline picks the primary face, throttles processing to
one frame every `processing_interval_seconds`, and resolves it on a
background task so detection is never blocked by store round-trips. Results
land on the VisualContextBus; brand-new identities get a headshot attempt.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Set

import numpy as np

from ...domain.models.visual_context import VisualContextSnapshot
from .capture_guard import CaptureGuard
from .identity_resolver import IdentityResolver, ResolutionResult, ResolutionStatus
from .visual_context_bus import VisualContextBus

logger = logging.getLogger(__name__)


@dataclass
class FaceObservation:
    box: Sequence[float]  # [x, y, width, height]
    embedding: Optional[List[float]] = None

    @property
    def area(self) -> float:
        return max(0.0, float(self.box[2])) * max(0.0, float(self.box[3]))


def select_primary_face(faces: Sequence[FaceObservation]) -> Optional[FaceObservation]:
    """Largest face that carries an embedding."""
    candidates = [face for face in faces if face.embedding]
    if not candidates:
        return None
    return max(candidates, key=lambda face: face.area)


class ObservationPipeline:
    def __init__(
        self,
        resolver: IdentityResolver,
        capture_guard: CaptureGuard,
        bus: VisualContextBus,
        processing_interval_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._resolver = resolver
        self._capture_guard = capture_guard
        self._bus = bus
        self._processing_interval_seconds = processing_interval_seconds
        self._clock = clock
        self._wall_clock = wall_clock
        self._running = False
        self._last_processed: Optional[float] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last_processed = None
        logger.info("Observation pipeline started")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info(f"Observation pipeline stopped ({len(self._tasks)} in flight)")

    def submit_frame(
        self,
        faces: Sequence[FaceObservation],
        frame: Optional[np.ndarray] = None,
    ) -> Optional[asyncio.Task]:
        """
        Accept one detector result. Returns the background task when the frame
        was taken for processing, None when it was dropped.
        """
        if not self._running:
            return None

        primary = select_primary_face(faces)
        if primary is None:
            return None

        current = self._clock()
        if (
            self._last_processed is not None
            and current - self._last_processed < self._processing_interval_seconds
        ):
            return None
        self._last_processed = current

        task = asyncio.get_running_loop().create_task(self._process(primary, frame))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _process(self, face: FaceObservation, frame: Optional[np.ndarray]) -> Optional[ResolutionResult]:
        try:
            result = await self._resolver.resolve(face.embedding)

            # Stopped while resolving: the bus belongs to whoever restarts us
            if not self._running:
                return result

            # Store failure: keep the last known person
            if result.status == ResolutionStatus.FAILED:
                logger.warning(f"Resolution failed, visual context unchanged: {result.error}")
                return result

            identity = result.identity
            if identity is None:
                self._bus.update(VisualContextSnapshot(found=False, last_seen=self._wall_clock()))
                return result

            self._bus.update(VisualContextSnapshot(
                found=True,
                id=identity.id,
                name=identity.name,
                relationship_status=identity.relationship_status,
                similarity=result.similarity,
                last_seen=self._wall_clock(),
            ))

            if not result.matched_existing and frame is not None:
                await self._capture_guard.attempt_capture(identity.id, frame, face.box)
            return result
        except Exception as e:
            logger.error(f"Error processing face observation: {e}", exc_info=True)
            return None

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight observations to finish."""
        if not self._tasks:
            return
        pending = list(self._tasks)
        done, not_done = await asyncio.wait(pending, timeout=timeout)
        for task in not_done:
            task.cancel()
        if not_done:
            logger.warning(f"Cancelled {len(not_done)} observation tasks on drain")
