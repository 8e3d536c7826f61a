"""Realtime gateway.

Accepts WebSocket clients on ``/ws`` and dispatches their events to the
application layer. Each event runs in its own dishka REQUEST scope, so it
gets its own database session. Failures are reported to the originating
connection only; a bad frame never closes the socket.

Frames from one connection are handled one at a time, in arrival order. A
send waiting on a slow push holds up that client's next event, not other
clients.
"""

from typing import Any, Awaitable, Callable

from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import logfire
from pydantic import ValidationError as PydanticValidationError

from relay.application.usecase.follow import (
    FollowFanOut,
    FollowRequest,
    FollowUserUseCase,
    UnfollowUserUseCase,
)
from relay.application.usecase.message import (
    SendMessageRequest,
    SendMessageUseCase,
    SendStatus,
)
from relay.domain.error import DomainError, ValidationError
from relay.domain.service import PresenceDirectory
from relay.interface.error import FrameError
from relay.interface.realtime.connection import WebSocketConnection
from relay.interface.realtime.events import (
    FollowEvent,
    SendMessageEvent,
    decode_envelope,
    join_identity,
)

router = APIRouter(tags=["realtime"])


class RealtimeSession:
    """Event dispatch for one connection."""

    def __init__(
        self,
        container: AsyncContainer,
        presence: PresenceDirectory,
        connection: WebSocketConnection,
    ) -> None:
        """Initialize realtime session.

        Args:
            container: App-scoped DI container
            presence: Process-wide presence directory
            connection: Connection this session serves
        """
        self.container = container
        self.presence = presence
        self.connection = connection
        self._handlers: dict[str, Callable[[Any], Awaitable[None]]] = {
            "join": self.on_join,
            "sendMessage": self.on_send_message,
            "followUser": self.on_follow,
            "unfollowUser": self.on_unfollow,
        }

    async def dispatch(self, raw: str) -> None:
        """Decode one text frame and run its handler."""
        try:
            envelope = decode_envelope(raw)
        except FrameError as e:
            logfire.warn(
                "Malformed realtime frame",
                connection=self.connection.connection_id,
                error=str(e),
            )
            await self.connection.emit("error", {"error": str(e)})
            return

        handler = self._handlers.get(envelope.event)
        if handler is None:
            await self.connection.emit(
                "error", {"error": f"Unknown event: {envelope.event}"}
            )
            return

        await handler(envelope.data)

    async def on_join(self, data: Any) -> None:
        try:
            identity = self.presence.join(join_identity(data), self.connection)
        except ValidationError as e:
            await self.connection.emit("joined", {"success": False, "error": str(e)})
            return
        logfire.info(
            "Client joined",
            identity=identity.root,
            connection=self.connection.connection_id,
        )
        await self.connection.emit("joined", {"success": True})

    async def on_send_message(self, data: Any) -> None:
        try:
            event = SendMessageEvent.model_validate(data)
        except PydanticValidationError:
            await self.connection.emit(
                "sendError", {"error": "senderId, receiverId and text are required"}
            )
            return

        request = SendMessageRequest(
            sender_id=event.sender_id,
            receiver_id=event.receiver_id,
            text=event.text,
        )
        outcome = None
        try:
            async with self.container() as scope:
                use_case = await scope.get(SendMessageUseCase)
                outcome = await use_case.execute(request)
        except Exception as e:
            logfire.error(
                "sendMessage handler failed",
                connection=self.connection.connection_id,
                error=str(e),
                error_type=type(e).__name__,
            )

        if outcome is None:
            await self.connection.emit("sendError", {"error": "Failed to send message"})
        elif outcome.status is SendStatus.FAILED:
            await self.connection.emit("sendError", {"error": outcome.error})
        else:
            await self.connection.emit("messageSent", outcome.message.wire())

    async def on_follow(self, data: Any) -> None:
        await self._follow(data, FollowUserUseCase, "Failed to follow user")

    async def on_unfollow(self, data: Any) -> None:
        await self._follow(data, UnfollowUserUseCase, "Failed to unfollow user")

    async def _follow(
        self,
        data: Any,
        use_case_type: type[FollowUserUseCase] | type[UnfollowUserUseCase],
        failure: str,
    ) -> None:
        try:
            event = FollowEvent.model_validate(data)
        except PydanticValidationError:
            await self.connection.emit(
                "followError", {"error": "Both user identities are required"}
            )
            return

        request = FollowRequest(
            follower_id=event.follower_id, following_id=event.following_id
        )
        try:
            async with self.container() as scope:
                use_case = await scope.get(use_case_type)
                response = await use_case.execute(request)
        except DomainError as e:
            await self.connection.emit("followError", {"error": str(e)})
            return
        except Exception as e:
            logfire.error(
                "Follow handler failed",
                connection=self.connection.connection_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            await self.connection.emit("followError", {"error": failure})
            return

        fan_out = await self.container.get(FollowFanOut)
        await fan_out.announce(response, source=self.connection)


@router.websocket("/ws")
async def realtime(websocket: WebSocket) -> None:
    """Realtime channel.

    Frames are JSON text ``{"event": <name>, "data": <payload>}``.
    """
    container: AsyncContainer = websocket.app.state.dishka_container
    presence = await container.get(PresenceDirectory)

    await websocket.accept()
    connection = WebSocketConnection(websocket)
    session = RealtimeSession(container, presence, connection)
    logfire.info("Client connected", connection=connection.connection_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            text = message.get("text")
            if text is None:
                await connection.emit(
                    "error", {"error": "Only text frames are supported"}
                )
                continue
            await session.dispatch(text)
    except WebSocketDisconnect:
        pass
    finally:
        presence.remove(connection)
        logfire.info("Client disconnected", connection=connection.connection_id)
