from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.identity_repository import IdentityRepository
from ...domain.repositories.session_repository import SessionRepository
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.media_storage import MediaStorage
from ...application.services.similarity_matcher import SimilarityMatcher
from ...application.services.session_manager import SessionManager
from ...application.services.event_log import EventLog
from ...application.services.identity_resolver import IdentityResolver
from ...application.services.capture_guard import CaptureGuard
from ...application.services.visual_context_bus import VisualContextBus
from ...application.services.notification_debouncer import NotificationDebouncer
from ...application.services.observation_pipeline import ObservationPipeline
from ...infrastructure.notifications.websocket_manager import WebSocketManager
from ...infrastructure.notifications.voice_agent_channel import (
    VoiceAgentChannel,
    WebSocketVoiceAgentChannel,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class PipelineProvider:
    """
    Recognition pipeline provider.

    Everything here is a process-wide singleton: the bus, the capture guard's
    attempt map and the debouncer's last-forward state must be shared.
    """

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()
        timeout = settings.store_timeout_seconds

        session_manager = SessionManager(
            session_repository=container.get(SessionRepository),
            timeout_seconds=timeout,
        )
        event_log = EventLog(
            event_repository=container.get(EventRepository),
            timeout_seconds=timeout,
        )
        matcher = SimilarityMatcher(
            identity_repository=container.get(IdentityRepository),
            threshold=settings.match_threshold,
            embedding_dimension=settings.embedding_dimension,
            timeout_seconds=timeout,
        )
        resolver = IdentityResolver(
            session_manager=session_manager,
            matcher=matcher,
            identity_repository=container.get(IdentityRepository),
            event_log=event_log,
            embedding_dimension=settings.embedding_dimension,
            timeout_seconds=timeout,
        )
        capture_guard = CaptureGuard(
            identity_repository=container.get(IdentityRepository),
            media_storage=container.get(MediaStorage),
            padding_ratio=settings.headshot_padding_ratio,
            jpeg_quality=settings.headshot_jpeg_quality,
            timeout_seconds=timeout,
        )
        bus = VisualContextBus()

        container.register_singleton(SessionManager, session_manager)
        container.register_singleton(EventLog, event_log)
        container.register_singleton(SimilarityMatcher, matcher)
        container.register_singleton(IdentityResolver, resolver)
        container.register_singleton(CaptureGuard, capture_guard)
        container.register_singleton(VisualContextBus, bus)

        websocket_manager = WebSocketManager()
        channel = WebSocketVoiceAgentChannel(websocket_manager)
        container.register_singleton(WebSocketManager, websocket_manager)
        container.register_singleton(VoiceAgentChannel, channel)

        container.register_singleton(
            NotificationDebouncer,
            NotificationDebouncer(channel=channel, interval_seconds=settings.notify_interval_seconds),
        )
        container.register_singleton(
            ObservationPipeline,
            ObservationPipeline(
                resolver=resolver,
                capture_guard=capture_guard,
                bus=bus,
                processing_interval_seconds=settings.processing_interval_seconds,
            ),
        )
