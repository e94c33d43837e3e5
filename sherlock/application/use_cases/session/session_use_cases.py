from typing import Optional

from ....domain.models.session import Session
from ...dto.session_dto import SessionResponse
from ...services.session_manager import SessionManager


def session_to_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.id or "",
        started_at=session.started_at,
        ended_at=session.ended_at,
        title=session.title,
        summary=session.summary,
        is_active=session.is_active,
    )


class GetActiveSessionUseCase:
    """Return the active session, opening one if none exists."""

    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def execute(self) -> SessionResponse:
        return session_to_response(await self._session_manager.get_or_create_active_session())


class StartSessionUseCase:
    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def execute(self, title: Optional[str] = None) -> SessionResponse:
        return session_to_response(await self._session_manager.start_new_session(title))


class EndSessionUseCase:
    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def execute(self) -> Optional[SessionResponse]:
        ended = await self._session_manager.end_active_session()
        return session_to_response(ended) if ended else None
