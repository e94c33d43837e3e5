from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class VisualContextSnapshot:
    """
    Who is currently being observed. In-memory only; the bus replaces the
    whole snapshot on every update, fields are never merged.
    """
    found: bool
    id: Optional[str] = None
    name: Optional[str] = None
    relationship_status: Optional[str] = None
    similarity: Optional[float] = None
    last_seen: Optional[float] = None  # epoch seconds
