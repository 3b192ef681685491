"""
Music Industry Simulator: WebSocket Manager
Pushes real-time state updates to connected browser clients.
"""

import json
import asyncio
import logging
from fastapi import WebSocket

logger = logging.getLogger("mis.ws")


class ConnectionManager:
    """Manages active WebSocket connections and broadcasts events."""

    def __init__(self):
        self.active: list[WebSocket] = []
        self._loop: asyncio.AbstractEventLoop = None

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)
        self._loop = asyncio.get_running_loop()

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)

    async def broadcast(self, event: str, data: dict = None):
        """Send an event to all connected clients."""
        message = json.dumps({"event": event, "data": data or {}})
        disconnected = []
        for ws in self.active:
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.debug(f"Dropping client: {e}")
                disconnected.append(ws)
        for ws in disconnected:
            self.disconnect(ws)

    def broadcast_threadsafe(self, event: str, data: dict = None):
        """
        Schedule a broadcast from a non-async thread (the game loop).
        Skipped when no client has connected yet.
        """
        loop = self._loop
        if loop is None or loop.is_closed() or not self.active:
            return
        asyncio.run_coroutine_threadsafe(self.broadcast(event, data), loop)

    @property
    def client_count(self) -> int:
        return len(self.active)
