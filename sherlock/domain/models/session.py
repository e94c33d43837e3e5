from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Session:
    """Domain model for a recording session (a bounded interval grouping events)"""

    id: Optional[str]
    started_at: datetime
    ended_at: Optional[datetime] = None
    title: Optional[str] = None
    summary: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None
