from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Kinds of audit-log entries."""
    VISUAL_OBSERVATION = "VISUAL_OBSERVATION"
    CONVERSATION_NOTE = "CONVERSATION_NOTE"
    AGENT_WHISPER = "AGENT_WHISPER"
    NOTES = "NOTES"


@dataclass
class Event:
    """Domain model for an append-only audit event"""

    id: Optional[str]
    session_id: Optional[str]
    type: EventType
    content: str
    related_identity_id: Optional[str] = None
    created_at: Optional[datetime] = None
