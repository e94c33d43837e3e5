"""
Voice agent API.

- /ws: the host page of the voice agent connects here and receives
  `agent_message` payloads to inject into the conversation
- /tools/*: HTTP bindings of the agent's client tools
- /visual-context: raw current snapshot
- /manifest: the ADK agent definition (instruction, model, tool list)
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from google.adk.agents import LlmAgent

from ...agents.visual_tools import VisualContextTools
from ...application.dto.visual_context_dto import (
    AgentToolInfo,
    ToolResultResponse,
    UpdateIdentityToolRequest,
    VisualContextResponse,
    VoiceAgentManifestResponse,
)
from ...application.services.visual_context_bus import VisualContextBus
from ...di.container import get_container
from ...infrastructure.notifications.voice_agent_channel import VOICE_AGENT_CHANNEL
from ...infrastructure.notifications.websocket_manager import WebSocketManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["voice-agent"])


@router.websocket("/ws")
async def voice_agent_socket(websocket: WebSocket):
    manager = get_container().get(WebSocketManager)

    await websocket.accept()
    logger.info("Voice agent WebSocket connected")

    try:
        await manager.add_connection(VOICE_AGENT_CHANNEL, websocket)
        await websocket.send_json({
            "type": "connection_established",
            "message": "Connected to visual context updates",
        })

        while True:
            try:
                message = await websocket.receive_text()
                if message == "ping":
                    await websocket.send_text("pong")
                elif message != "pong":
                    logger.debug(f"Received message from voice agent: {message}")
            except WebSocketDisconnect:
                logger.info("Voice agent WebSocket disconnected")
                break
            except Exception as e:
                logger.error(f"Error handling voice agent message: {e}", exc_info=True)
                break
    finally:
        await manager.remove_connection(VOICE_AGENT_CHANNEL, websocket)


@router.get("/visual-context", response_model=VisualContextResponse)
async def current_visual_context() -> VisualContextResponse:
    snapshot = get_container().get(VisualContextBus).current()
    if snapshot is None:
        return VisualContextResponse(found=False)
    return VisualContextResponse(
        found=snapshot.found,
        id=snapshot.id,
        name=snapshot.name,
        relationship_status=snapshot.relationship_status,
        similarity=snapshot.similarity,
        last_seen=snapshot.last_seen,
    )


@router.get("/tools/get_visual_context", response_model=ToolResultResponse)
async def get_visual_context_tool() -> ToolResultResponse:
    tools = get_container().get(VisualContextTools)
    return ToolResultResponse(result=await tools.get_visual_context())


@router.post("/tools/update_identity", response_model=ToolResultResponse)
async def update_identity_tool(request: UpdateIdentityToolRequest) -> ToolResultResponse:
    tools = get_container().get(VisualContextTools)
    result = await tools.update_identity(
        request.identityId,
        name=request.name,
        relationship_status=request.relationship_status,
    )
    return ToolResultResponse(result=result)


@router.get("/manifest", response_model=VoiceAgentManifestResponse)
async def voice_agent_manifest() -> VoiceAgentManifestResponse:
    agent = get_container().get(LlmAgent)
    return VoiceAgentManifestResponse(
        name=agent.name,
        description=agent.description or "",
        model=agent.model if isinstance(agent.model, str) else getattr(agent.model, "model", ""),
        instruction=agent.instruction if isinstance(agent.instruction, str) else "",
        tools=[
            AgentToolInfo(name=tool.name, description=tool.description or "")
            for tool in agent.tools
        ],
    )
