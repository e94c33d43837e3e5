"""Notifications infrastructure: WebSocket fan-out and the voice agent channel"""

from .websocket_manager import WebSocketManager
from .voice_agent_channel import (
    VOICE_AGENT_CHANNEL,
    VoiceAgentChannel,
    WebSocketVoiceAgentChannel,
)

__all__ = [
    "WebSocketManager",
    "VOICE_AGENT_CHANNEL",
    "VoiceAgentChannel",
    "WebSocketVoiceAgentChannel",
]
