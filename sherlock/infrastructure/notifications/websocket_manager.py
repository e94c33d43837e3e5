"""WebSocket Manager for managing client connections and broadcasting messages"""

import logging
from typing import Dict, Set
from threading import Lock
import json

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WebSocketManager:
    """
    Manages WebSocket connections grouped by channel name and sends JSON
    messages to every connection on a channel.

    Thread-safe connection management.
    """

    def __init__(self):
        """Initialize WebSocket manager"""
        # Map channel -> Set of WebSocket connections
        self._connections: Dict[str, Set[WebSocket]] = {}
        self._lock = Lock()
        logger.info("WebSocketManager initialized")

    async def add_connection(self, channel: str, websocket: WebSocket) -> None:
        """
        Add a WebSocket connection to a channel.

        Args:
            channel: Channel name the connection listens on
            websocket: WebSocket connection instance
        """
        with self._lock:
            self._connections.setdefault(channel, set()).add(websocket)

        logger.info(f"Added WebSocket connection on '{channel}'. Total connections: {self.get_total_connections()}")

    async def remove_connection(self, channel: str, websocket: WebSocket) -> None:
        """
        Remove a WebSocket connection from a channel.

        Args:
            channel: Channel name the connection listens on
            websocket: WebSocket connection instance
        """
        with self._lock:
            if channel in self._connections:
                self._connections[channel].discard(websocket)

                # Clean up empty sets
                if not self._connections[channel]:
                    del self._connections[channel]

        logger.info(f"Removed WebSocket connection on '{channel}'. Total connections: {self.get_total_connections()}")

    async def send_to_channel(self, channel: str, message: dict) -> int:
        """
        Send a message to all WebSocket connections on a channel.

        Args:
            channel: Channel to send to
            message: Message dictionary (will be JSON serialized)

        Returns:
            Number of connections the message was successfully sent to
        """
        with self._lock:
            connections = self._connections.get(channel, set()).copy()

        if not connections:
            logger.debug(f"No connections on channel '{channel}'")
            return 0

        try:
            message_json = json.dumps(message)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize message to JSON: {e}")
            return 0

        sent_count = 0
        disconnected_connections = []

        for websocket in connections:
            try:
                await websocket.send_text(message_json)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send message on channel '{channel}': {e}")
                disconnected_connections.append(websocket)

        if disconnected_connections:
            with self._lock:
                if channel in self._connections:
                    for ws in disconnected_connections:
                        self._connections[channel].discard(ws)
                    if not self._connections[channel]:
                        del self._connections[channel]

        logger.debug(f"Sent message to {sent_count}/{len(connections)} connections on '{channel}'")
        return sent_count

    def get_total_connections(self) -> int:
        """Total number of active WebSocket connections across all channels."""
        with self._lock:
            return sum(len(connections) for connections in self._connections.values())

    def has_connections(self, channel: str) -> bool:
        """True if the channel has at least one active connection."""
        with self._lock:
            return bool(self._connections.get(channel))
