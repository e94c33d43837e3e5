from .identity import (
    GetIdentityUseCase,
    ListIdentitiesUseCase,
    UpdateIdentityUseCase,
    ImportIdentitiesUseCase,
)
from .event import ListEventsUseCase, RecordNoteUseCase
from .session import GetActiveSessionUseCase, StartSessionUseCase, EndSessionUseCase

__all__ = [
    "GetIdentityUseCase",
    "ListIdentitiesUseCase",
    "UpdateIdentityUseCase",
    "ImportIdentitiesUseCase",
    "ListEventsUseCase",
    "RecordNoteUseCase",
    "GetActiveSessionUseCase",
    "StartSessionUseCase",
    "EndSessionUseCase",
]
