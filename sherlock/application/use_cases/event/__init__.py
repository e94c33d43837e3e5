from .list_events import ListEventsUseCase, event_to_response
from .record_note import RecordNoteUseCase

__all__ = [
    "ListEventsUseCase",
    "event_to_response",
    "RecordNoteUseCase",
]
