"""
Unit tests for ObservationPipeline: primary face selection, throttling, bus
updates and headshot capture for new identities.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sherlock.application.services.capture_guard import CaptureGuard
from sherlock.application.services.event_log import EventLog
from sherlock.application.services.identity_resolver import (
    IdentityResolver,
    ResolutionResult,
    ResolutionStatus,
)
from sherlock.application.services.observation_pipeline import (
    FaceObservation,
    ObservationPipeline,
    select_primary_face,
)
from sherlock.application.services.session_manager import SessionManager
from sherlock.application.services.similarity_matcher import SimilarityMatcher
from sherlock.application.services.visual_context_bus import VisualContextBus
from sherlock.domain.models.identity import Identity
from sherlock.domain.models.visual_context import VisualContextSnapshot

DIM = 8


def _vector(index: int):
    vector = [0.0] * DIM
    vector[index] = 1.0
    return vector


class FakeClock:
    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value


@pytest.fixture
def pipeline_parts(identity_repo, session_repo, event_repo, media_storage, fixed_clock):
    resolver = IdentityResolver(
        session_manager=SessionManager(session_repo),
        matcher=SimilarityMatcher(identity_repo, threshold=0.7, embedding_dimension=DIM),
        identity_repository=identity_repo,
        event_log=EventLog(event_repo),
        embedding_dimension=DIM,
        clock=fixed_clock,
    )
    guard = CaptureGuard(identity_repo, media_storage)
    bus = VisualContextBus()
    clock = FakeClock()
    pipeline = ObservationPipeline(resolver, guard, bus, processing_interval_seconds=2.0, clock=clock, wall_clock=lambda: 1000.0)
    return pipeline, bus, clock


class TestSelectPrimaryFace:
    def test_largest_face_wins(self):
        small = FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])
        large = FaceObservation(box=[0, 0, 50, 40], embedding=[2.0])
        assert select_primary_face([small, large]) is large

    def test_faces_without_embedding_ignored(self):
        large_no_embedding = FaceObservation(box=[0, 0, 100, 100], embedding=None)
        small = FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])
        assert select_primary_face([large_no_embedding, small]) is small

    def test_no_faces(self):
        assert select_primary_face([]) is None


class TestObservationPipeline:
    @pytest.mark.asyncio
    async def test_not_running_drops_frames(self, pipeline_parts):
        pipeline, bus, _ = pipeline_parts
        assert pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=_vector(0))]) is None
        assert bus.current() is None

    @pytest.mark.asyncio
    async def test_new_face_publishes_and_captures(self, pipeline_parts, identity_repo, media_storage, frame):
        pipeline, bus, _ = pipeline_parts
        pipeline.start()

        task = pipeline.submit_frame([FaceObservation(box=[50, 50, 100, 100], embedding=_vector(0))], frame)
        result = await task

        assert result.status == ResolutionStatus.RESOLVED
        snapshot = bus.current()
        assert snapshot.found is True
        assert snapshot.id == result.identity.id
        assert snapshot.similarity == 1.0
        assert snapshot.last_seen == 1000.0
        assert media_storage.upload_calls == 1
        assert identity_repo.items[result.identity.id].headshot_media_url is not None

    @pytest.mark.asyncio
    async def test_matched_face_not_captured(self, pipeline_parts, identity_repo, media_storage, frame):
        pipeline, bus, clock = pipeline_parts
        await identity_repo.create(Identity(id=None, name="Ada", relationship_status="Friend", face_embedding=_vector(3)))
        pipeline.start()

        await pipeline.submit_frame([FaceObservation(box=[50, 50, 100, 100], embedding=_vector(3))], frame)

        assert bus.current().name == "Ada"
        assert media_storage.upload_calls == 0

    @pytest.mark.asyncio
    async def test_throttle_drops_frames_within_interval(self, pipeline_parts):
        pipeline, _, clock = pipeline_parts
        pipeline.start()
        face = [FaceObservation(box=[0, 0, 10, 10], embedding=_vector(0))]

        first = pipeline.submit_frame(face)
        clock.value = 1.5
        dropped = pipeline.submit_frame(face)
        clock.value = 2.0
        accepted = pipeline.submit_frame(face)
        await asyncio.gather(first, accepted)

        assert first is not None
        assert dropped is None
        assert accepted is not None

    @pytest.mark.asyncio
    async def test_frame_without_embedding_not_throttled(self, pipeline_parts):
        pipeline, _, _ = pipeline_parts
        pipeline.start()

        assert pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10])]) is None
        task = pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=_vector(1))])
        assert task is not None
        await task

    @pytest.mark.asyncio
    async def test_stop_before_completion_skips_bus_update(self):
        release = asyncio.Event()
        resolver = MagicMock()

        async def slow_resolve(_):
            await release.wait()
            return ResolutionResult(
                status=ResolutionStatus.RESOLVED,
                identity=Identity(id="id-1", name="Ada"),
                similarity=0.9,
                matched_existing=True,
            )

        resolver.resolve = slow_resolve
        bus = VisualContextBus()
        guard = AsyncMock()
        pipeline = ObservationPipeline(resolver, guard, bus)
        pipeline.start()

        task = pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])])
        await asyncio.sleep(0)
        pipeline.stop()
        release.set()
        await task

        assert bus.current() is None
        guard.attempt_capture.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_resolution_keeps_current_person(self):
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=ResolutionResult(status=ResolutionStatus.FAILED, error="down"))
        bus = VisualContextBus()
        seen = VisualContextSnapshot(found=True, id="id-1", name="Ada", last_seen=1.0)
        bus.update(seen)
        guard = AsyncMock()
        pipeline = ObservationPipeline(resolver, guard, bus, wall_clock=lambda: 5.0)
        pipeline.start()

        await pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])])

        assert bus.current() == seen
        guard.attempt_capture.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unresolved_face_publishes_not_found(self):
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=ResolutionResult(status=ResolutionStatus.SKIPPED))
        bus = VisualContextBus()
        pipeline = ObservationPipeline(resolver, AsyncMock(), bus, wall_clock=lambda: 5.0)
        pipeline.start()

        await pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])])

        assert bus.current().found is False
        assert bus.current().last_seen == 5.0

    @pytest.mark.asyncio
    async def test_unexpected_error_contained(self):
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=RuntimeError("bug"))
        pipeline = ObservationPipeline(resolver, AsyncMock(), VisualContextBus())
        pipeline.start()

        result = await pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=[1.0])])

        assert result is None

    @pytest.mark.asyncio
    async def test_drain_waits_for_in_flight(self, pipeline_parts):
        pipeline, bus, _ = pipeline_parts
        pipeline.start()
        pipeline.submit_frame([FaceObservation(box=[0, 0, 10, 10], embedding=_vector(0))])

        await pipeline.drain(timeout=5)

        assert pipeline.in_flight == 0
        assert bus.current() is not None
