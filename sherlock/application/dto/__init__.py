from .identity_dto import (
    IdentityResponse,
    IdentityListResponse,
    IdentityUpdateRequest,
    IdentityImportResponse,
)
from .event_dto import EventResponse, EventListResponse, NoteCreateRequest
from .session_dto import SessionResponse, SessionStartRequest
from .observation_dto import (
    FaceObservationRequest,
    FrameObservationRequest,
    FrameObservationResponse,
    PipelineStatusResponse,
)
from .visual_context_dto import (
    VisualContextResponse,
    UpdateIdentityToolRequest,
    ToolResultResponse,
    AgentToolInfo,
    VoiceAgentManifestResponse,
)

__all__ = [
    "IdentityResponse",
    "IdentityListResponse",
    "IdentityUpdateRequest",
    "IdentityImportResponse",
    "EventResponse",
    "EventListResponse",
    "NoteCreateRequest",
    "SessionResponse",
    "SessionStartRequest",
    "FaceObservationRequest",
    "FrameObservationRequest",
    "FrameObservationResponse",
    "PipelineStatusResponse",
    "VisualContextResponse",
    "UpdateIdentityToolRequest",
    "ToolResultResponse",
    "AgentToolInfo",
    "VoiceAgentManifestResponse",
]
