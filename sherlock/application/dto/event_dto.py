from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ...domain.models.event import EventType


class EventResponse(BaseModel):
    id: str
    session_id: Optional[str] = None
    type: EventType
    content: str
    related_identity_id: Optional[str] = None
    created_at: Optional[datetime] = None


class EventListResponse(BaseModel):
    total: int = 0
    items: List[EventResponse] = Field(default_factory=list)


class NoteCreateRequest(BaseModel):
    """A manual note or conversation note appended to the active session"""
    content: str
    type: EventType = EventType.NOTES
    related_identity_id: Optional[str] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("content must not be blank")
        return value.strip()

    @field_validator("type")
    @classmethod
    def not_visual_observation(cls, value: EventType) -> EventType:
        if value == EventType.VISUAL_OBSERVATION:
            raise ValueError("visual observations are recorded by the pipeline only")
        return value
