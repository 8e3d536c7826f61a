"""WebSocket-backed presence connection."""

from typing import Any
from uuid import uuid4

from fastapi import WebSocket

from relay.domain.service import Connection
from relay.domain.value import ConnectionId


class WebSocketConnection(Connection):
    """One accepted WebSocket, addressable through the presence directory.

    Frames are ``{"event": <name>, "data": <payload>}`` JSON text.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.connection_id = ConnectionId(uuid4().hex)

    async def emit(self, event: str, data: Any) -> None:
        await self.websocket.send_json({"event": event, "data": data})

    def __repr__(self) -> str:
        return f"WebSocketConnection({self.connection_id})"
