"""
Outbound message channel to the conversational voice agent.

The voice agent runs client-side; its host page connects to the voice-agent
WebSocket and forwards each `agent_message` into the agent conversation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .websocket_manager import WebSocketManager

logger = logging.getLogger(__name__)

VOICE_AGENT_CHANNEL = "voice-agent"


class VoiceAgentChannel(ABC):
    """Contract for pushing free-text messages into the voice agent conversation"""

    @abstractmethod
    def is_connected(self) -> bool:
        """True when an agent conversation is attached"""
        pass

    @abstractmethod
    def push(self, message: str) -> bool:
        """
        Hand a message to the agent without blocking.

        Returns:
            True if the message was accepted for delivery
        """
        pass


class WebSocketVoiceAgentChannel(VoiceAgentChannel):
    """
    VoiceAgentChannel over the shared WebSocketManager.

    push() only enqueues; run() drains the queue and performs the sends, so
    callers on the frame hot path never wait on network I/O.
    """

    def __init__(
        self,
        websocket_manager: WebSocketManager,
        channel: str = VOICE_AGENT_CHANNEL,
        max_queue_size: int = 100,
    ) -> None:
        self._manager = websocket_manager
        self._channel = channel
        self._queue: "asyncio.Queue[dict]" = asyncio.Queue(maxsize=max_queue_size)

    @property
    def channel(self) -> str:
        return self._channel

    def is_connected(self) -> bool:
        return self._manager.has_connections(self._channel)

    def push(self, message: str) -> bool:
        if not self.is_connected():
            logger.debug("Voice agent not connected, dropping message")
            return False
        try:
            self._queue.put_nowait({"type": "agent_message", "text": message})
        except asyncio.QueueFull:
            logger.warning("Voice agent queue full, dropping message")
            return False
        return True

    async def run(self, poll_timeout: Optional[float] = None) -> None:
        """Background task: deliver queued messages until cancelled."""
        logger.info("Voice agent message sender started")
        while True:
            try:
                if poll_timeout is None:
                    payload = await self._queue.get()
                else:
                    payload = await asyncio.wait_for(self._queue.get(), timeout=poll_timeout)
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                logger.info("Voice agent message sender cancelled")
                raise

            try:
                sent = await self._manager.send_to_channel(self._channel, payload)
                if sent == 0:
                    logger.warning("Voice agent disconnected before message could be delivered")
            except Exception as e:
                logger.error(f"Error delivering voice agent message: {e}", exc_info=True)
            finally:
                self._queue.task_done()
