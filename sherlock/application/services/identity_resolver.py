"""
Identity resolution for one observed face.

Flow for every embedding:
    1. Get (or lazily create) the active session
    2. Ask the SimilarityMatcher for a match at or above the threshold
    3. No match: create a placeholder identity carrying the embedding
    4. Append a visual_observation event linking session and identity

The resolver never raises. Every outcome, including partial ones, comes back
as a ResolutionResult.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from ...domain.models.event import EventType
from ...domain.models.identity import Identity, NEW_RELATIONSHIP_STATUS, PLACEHOLDER_NAME_PREFIX
from ...domain.repositories.identity_repository import IdentityRepository
from ...utils.datetime_utils import now
from ...utils.face_embedding import normalize_embedding
from ...utils.timeouts import with_timeout
from .event_log import EventLog
from .session_manager import SessionManager
from .similarity_matcher import SimilarityMatcher

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    EVENT_NOT_RECORDED = "event_not_recorded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ResolutionResult:
    status: ResolutionStatus
    matched_existing: bool = False
    identity: Optional[Identity] = None
    similarity: Optional[float] = None
    session_id: Optional[str] = None
    event_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def resolved(self) -> bool:
        """An identity was matched or created, whether or not the event was logged."""
        return self.identity is not None


def placeholder_name(at: datetime) -> str:
    return f"{PLACEHOLDER_NAME_PREFIX} {at.strftime('%Y-%m-%d %H:%M:%S')}"


class IdentityResolver:
    def __init__(
        self,
        session_manager: SessionManager,
        matcher: SimilarityMatcher,
        identity_repository: IdentityRepository,
        event_log: EventLog,
        embedding_dimension: int = 1024,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self._session_manager = session_manager
        self._matcher = matcher
        self._identity_repository = identity_repository
        self._event_log = event_log
        self._embedding_dimension = embedding_dimension
        self._timeout_seconds = timeout_seconds
        self._clock = clock

    async def resolve(self, embedding: Optional[Sequence[float]]) -> ResolutionResult:
        if not embedding:
            return ResolutionResult(status=ResolutionStatus.SKIPPED, error="No embedding")

        # A sighting without a session is still logged (session_id stays null)
        session_id: Optional[str] = None
        try:
            session = await self._session_manager.get_or_create_active_session()
            session_id = session.id
        except Exception as e:
            logger.error(f"Could not obtain active session, logging sighting without one: {e}")

        match = await self._matcher.match(embedding)

        if match is not None:
            identity = match.identity
            similarity = match.similarity
            content = f"Recognized {identity.name} ({identity.relationship_status or 'Unknown'})"
            logger.info(f"Matched identity {identity.id} with similarity {similarity:.3f}")
        else:
            try:
                identity = await self._create_placeholder(embedding)
            except Exception as e:
                logger.error(f"Failed to create identity for new face: {e}")
                return ResolutionResult(
                    status=ResolutionStatus.FAILED,
                    session_id=session_id,
                    error=str(e),
                )
            similarity = 1.0
            content = f"First sighting of {identity.name}"
            logger.info(f"Created identity {identity.id} ({identity.name})")

        matched_existing = match is not None
        try:
            event = await self._event_log.record(
                EventType.VISUAL_OBSERVATION,
                content,
                session_id=session_id,
                related_identity_id=identity.id,
            )
        except Exception as e:
            logger.error(f"Identity {identity.id} resolved but observation event was not recorded: {e}")
            return ResolutionResult(
                status=ResolutionStatus.EVENT_NOT_RECORDED,
                matched_existing=matched_existing,
                identity=identity,
                similarity=similarity,
                session_id=session_id,
                error=str(e),
            )

        return ResolutionResult(
            status=ResolutionStatus.RESOLVED,
            matched_existing=matched_existing,
            identity=identity,
            similarity=similarity,
            session_id=session_id,
            event_id=event.id,
        )

    async def _create_placeholder(self, embedding: Sequence[float]) -> Identity:
        identity = Identity(
            id=None,
            name=placeholder_name(self._clock()),
            relationship_status=NEW_RELATIONSHIP_STATUS,
            face_embedding=normalize_embedding(embedding, self._embedding_dimension),
            metadata={"created_via": "visual_scan"},
        )
        return await with_timeout(
            self._identity_repository.create(identity),
            self._timeout_seconds,
            "create_identity",
        )
