import logging
from typing import Optional

from ...domain.models.session import Session
from ...domain.repositories.session_repository import SessionRepository
from ...utils.datetime_utils import utc_now
from ...utils.timeouts import with_timeout

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Keeps exactly one active recording session, creating it lazily.

    The repository performs get-or-create as one atomic upsert, so concurrent
    pipeline starts converge on the same session.
    """

    def __init__(self, session_repository: SessionRepository, timeout_seconds: Optional[float] = None) -> None:
        self._session_repository = session_repository
        self._timeout_seconds = timeout_seconds

    async def get_or_create_active_session(self, title: Optional[str] = None) -> Session:
        return await with_timeout(
            self._session_repository.get_or_create_active(utc_now(), title),
            self._timeout_seconds,
            "get_or_create_active_session",
        )

    async def end_active_session(self) -> Optional[Session]:
        active = await with_timeout(
            self._session_repository.find_active(),
            self._timeout_seconds,
            "find_active_session",
        )
        if active is None:
            return None
        ended = await with_timeout(
            self._session_repository.end(active.id, utc_now()),
            self._timeout_seconds,
            "end_session",
        )
        logger.info(f"Ended session {active.id}")
        return ended

    async def start_new_session(self, title: Optional[str] = None) -> Session:
        """End whatever session is active and open a fresh one."""
        await self.end_active_session()
        session = await self.get_or_create_active_session(title)
        logger.info(f"Started session {session.id} ({title or 'untitled'})")
        return session
