from .session_use_cases import (
    GetActiveSessionUseCase,
    StartSessionUseCase,
    EndSessionUseCase,
    session_to_response,
)

__all__ = [
    "GetActiveSessionUseCase",
    "StartSessionUseCase",
    "EndSessionUseCase",
    "session_to_response",
]
