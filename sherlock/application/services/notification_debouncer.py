import logging
import threading
import time
from typing import Callable, Optional, Tuple

from ...domain.models.identity import NEW_RELATIONSHIP_STATUS, PLACEHOLDER_NAME_PREFIX
from ...domain.models.visual_context import VisualContextSnapshot
from ...infrastructure.notifications.voice_agent_channel import VoiceAgentChannel
from .visual_context_bus import VisualContextBus

logger = logging.getLogger(__name__)


def is_placeholder_snapshot(snapshot: VisualContextSnapshot) -> bool:
    return (
        (snapshot.name or "").startswith(PLACEHOLDER_NAME_PREFIX)
        or snapshot.relationship_status == NEW_RELATIONSHIP_STATUS
    )


def build_agent_message(snapshot: VisualContextSnapshot) -> str:
    """Text pushed into the voice agent conversation for one identified person."""
    if is_placeholder_snapshot(snapshot):
        return (
            "System Update: A new face has been detected. "
            f"Identity ID: {snapshot.id}. "
            f'The identity currently has placeholder name "{snapshot.name}" '
            f'and status "{snapshot.relationship_status or NEW_RELATIONSHIP_STATUS}". '
            "Observe conversations silently and infer the person's name and relationship from context. "
            "Use the 'update_identity' tool silently when you have high confidence. "
            "Do NOT ask the user questions."
        )
    return (
        f"System Update: The user is looking at {snapshot.name}. "
        f"Relationship: {snapshot.relationship_status or 'Unknown'}. "
        f"Identity ID: {snapshot.id}. "
        "Observe and infer any new information from conversations."
    )


class NotificationDebouncer:
    """
    Bus subscriber that forwards identified people to the voice agent.

    A snapshot is forwarded when its identity differs from the last forwarded
    one, or when at least `interval_seconds` passed since that forward. The
    last-forwarded pair is only recorded when the channel accepts the message.
    """

    def __init__(
        self,
        channel: VoiceAgentChannel,
        interval_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._channel = channel
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._last_forward: Optional[Tuple[str, float]] = None
        self._lock = threading.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, bus: VisualContextBus) -> None:
        self.detach()
        self._unsubscribe = bus.subscribe(self.on_snapshot)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def last_forward(self) -> Optional[Tuple[str, float]]:
        with self._lock:
            return self._last_forward

    def _should_forward(self, identity_id: str, at: float) -> bool:
        if self._last_forward is None:
            return True
        last_id, last_at = self._last_forward
        return identity_id != last_id or (at - last_at) >= self._interval_seconds

    def on_snapshot(self, snapshot: VisualContextSnapshot) -> bool:
        """Returns True when a message was handed to the voice agent."""
        if not snapshot.found or not snapshot.id:
            return False

        at = snapshot.last_seen if snapshot.last_seen is not None else self._clock()
        with self._lock:
            if not self._should_forward(snapshot.id, at):
                return False
            if not self._channel.push(build_agent_message(snapshot)):
                return False
            self._last_forward = (snapshot.id, at)

        logger.info(f"Forwarded identity {snapshot.id} to voice agent")
        return True
