from typing import List, Optional

from pydantic import BaseModel


class VisualContextResponse(BaseModel):
    found: bool = False
    id: Optional[str] = None
    name: Optional[str] = None
    relationship_status: Optional[str] = None
    similarity: Optional[float] = None
    last_seen: Optional[float] = None


class UpdateIdentityToolRequest(BaseModel):
    """Arguments of the voice agent's update_identity tool"""
    identityId: str
    name: Optional[str] = None
    relationship_status: Optional[str] = None


class ToolResultResponse(BaseModel):
    result: str


class AgentToolInfo(BaseModel):
    name: str
    description: str = ""


class VoiceAgentManifestResponse(BaseModel):
    """The voice agent's definition, so the voice client registers the same tools"""
    name: str
    description: str = ""
    model: str
    instruction: str
    tools: List[AgentToolInfo]
