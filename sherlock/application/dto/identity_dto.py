from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class IdentityResponse(BaseModel):
    """DTO for identity response (the embedding itself is never returned)"""
    id: str
    name: str
    relationship_status: Optional[str] = None
    headshot_media_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    has_embedding: bool = False


class IdentityListResponse(BaseModel):
    total: int = 0
    items: List[IdentityResponse] = Field(default_factory=list)


class IdentityUpdateRequest(BaseModel):
    """Partial update: only supplied fields are written"""
    name: Optional[str] = None
    relationship_status: Optional[str] = None
    linkedin_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("name must not be blank")
        return value.strip() if value is not None else value


class IdentityImportResponse(BaseModel):
    """Outcome of a CSV bulk import"""
    success: bool = True
    processed: int = 0
    created: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)
