from typing import TYPE_CHECKING

from ...domain.repositories.event_repository import EventRepository
from ...application.services.event_log import EventLog
from ...application.services.session_manager import SessionManager
from ...application.use_cases.event.list_events import ListEventsUseCase
from ...application.use_cases.event.record_note import RecordNoteUseCase
from ...application.use_cases.session.session_use_cases import (
    EndSessionUseCase,
    GetActiveSessionUseCase,
    StartSessionUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class EventsProvider:
    """Events and session use case provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_factory(
            ListEventsUseCase,
            lambda: ListEventsUseCase(event_repository=container.get(EventRepository)),
        )

        container.register_factory(
            RecordNoteUseCase,
            lambda: RecordNoteUseCase(
                session_manager=container.get(SessionManager),
                event_log=container.get(EventLog),
            ),
        )

        container.register_factory(
            GetActiveSessionUseCase,
            lambda: GetActiveSessionUseCase(session_manager=container.get(SessionManager)),
        )

        container.register_factory(
            StartSessionUseCase,
            lambda: StartSessionUseCase(session_manager=container.get(SessionManager)),
        )

        container.register_factory(
            EndSessionUseCase,
            lambda: EndSessionUseCase(session_manager=container.get(SessionManager)),
        )
