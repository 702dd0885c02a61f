"""
WebSocket Manager

Tracks live board viewers and fans board events out to them. Clients are
sent to concurrently; a client that cannot take a message within
send_timeout seconds is dropped rather than holding up the others.
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket


class WebSocketManager:
    """Manages board viewer connections"""

    def __init__(self, send_timeout: float = 2.0):
        self.send_timeout = send_timeout
        self.active_connections: Set[WebSocket] = set()

    @staticmethod
    def encode(event_type: str, data: Dict[str, Any]) -> str:
        """Wire format shared by every board message"""
        return json.dumps({"event": event_type, "data": data})

    async def connect(self, websocket: WebSocket, board_state: Optional[dict] = None):
        """Accept a viewer and send it the full board state"""
        await websocket.accept()
        self.active_connections.add(websocket)
        logging.info(f"Board viewer connected ({len(self.active_connections)} total)")

        if board_state is not None:
            if not await self._send(websocket, self.encode("board_state", board_state)):
                self.active_connections.discard(websocket)

    async def disconnect(self, websocket: WebSocket):
        self.active_connections.discard(websocket)
        logging.info(f"Board viewer disconnected ({len(self.active_connections)} total)")

    async def _send(self, websocket: WebSocket, message: str) -> bool:
        try:
            await asyncio.wait_for(websocket.send_text(message), timeout=self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logging.warning(f"Board viewer did not accept a message within {self.send_timeout}s")
        except Exception as e:
            logging.warning(f"Failed to send to board viewer: {e}")
        return False

    async def broadcast(self, event_type: str, data: Dict[str, Any]):
        """Send one event to every viewer, dropping those that fail or stall"""
        if not self.active_connections:
            return

        message = self.encode(event_type, data)
        connections = list(self.active_connections)
        delivered = await asyncio.gather(*(self._send(ws, message) for ws in connections))

        dropped = [ws for ws, ok in zip(connections, delivered) if not ok]
        for websocket in dropped:
            self.active_connections.discard(websocket)

        if dropped:
            logging.info(f"Dropped {len(dropped)} board viewers after {event_type}")

    def get_connection_count(self) -> int:
        return len(self.active_connections)
