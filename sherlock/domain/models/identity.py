# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

PLACEHOLDER_NAME_PREFIX = "New Contact"
NEW_RELATIONSHIP_STATUS = "New"


@dataclass
class Identity:
    """
    Pure domain model for a recognized person.

    Created once (visual scan or bulk import), later corrected by name /
    relationship status or given a headshot. Never deleted by the pipeline.
    """
    id: Optional[str]
    name: str
    relationship_status: Optional[str] = None
    face_embedding: Optional[List[float]] = None
    headshot_media_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.name or not self.name.strip():
            raise ValueError("Identity name is required")
