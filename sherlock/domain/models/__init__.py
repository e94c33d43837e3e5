from .identity import Identity
from .session import Session
from .event import Event, EventType
from .visual_context import VisualContextSnapshot

__all__ = ["Identity", "Session", "Event", "EventType", "VisualContextSnapshot"]
