from .identity_controller import router as identity_router
from .events_controller import router as events_router
from .session_controller import router as session_router
from .observation_controller import router as observation_router
from .voice_agent_controller import router as voice_agent_router
from .media_controller import router as media_router


__all__ = [
    "identity_router",
    "events_router",
    "session_router",
    "observation_router",
    "voice_agent_router",
    "media_router",
]
