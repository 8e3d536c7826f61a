"""Send message use case.

Pipeline per request: resolve recipient -> persist -> deliver. The caller
acknowledges the sender from the returned outcome.
"""

from enum import Enum
from typing import Optional

import logfire
from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.application.usecase.payload import MessagePayload
from relay.domain.error import DomainError, RecipientNotFoundError
from relay.domain.model import Message, Profile
from relay.domain.service import (
    MessageService,
    PresenceDirectory,
    ProfileService,
    PushNotifier,
)
from relay.domain.value import DeliveryPath, Identity, PushNotification, PushResult

# Push notification bodies are truncated to keep payloads small
NOTIFICATION_BODY_LIMIT = 180


class SendMessageRequest(BaseModel):
    """Send message request."""

    sender_id: str
    receiver_id: str
    text: str


class SendStatus(str, Enum):
    """Terminal state of a send request."""

    DELIVERED = "delivered"
    FAILED = "failed"


class SendMessageOutcome(BaseModel):
    """Tagged result of a send request.

    DELIVERED means the message was persisted; delivered_via lists the
    paths that reached the recipient and may be empty.
    """

    status: SendStatus
    message: Optional[MessagePayload] = None
    error: Optional[str] = None
    delivered_via: list[DeliveryPath] = []

    @classmethod
    def failed(cls, error: str) -> "SendMessageOutcome":
        return cls(status=SendStatus.FAILED, error=error)


def build_notification(sender: Optional[Profile], message: Message) -> PushNotification:
    """Push notification announcing ``message`` to its recipient."""
    title = sender.display_name if sender else message.sender_id.root
    body = message.text
    if len(body) > NOTIFICATION_BODY_LIMIT:
        body = body[: NOTIFICATION_BODY_LIMIT - 1] + "…"
    return PushNotification(
        title=title,
        body=body,
        image_url=sender.profile_pic_url if sender else None,
        data={
            "type": "message",
            "senderId": message.sender_id.root,
            "messageId": str(message.id),
        },
    )


class SendMessageUseCase(BaseUseCase):
    """Use case for relaying a chat message."""

    def __init__(
        self,
        message_service: MessageService,
        profile_service: ProfileService,
        presence: PresenceDirectory,
        notifier: PushNotifier,
        push_when_online: bool = False,
    ) -> None:
        """Initialize send message use case.

        Args:
            message_service: Message domain service
            profile_service: Profile domain service
            presence: Process-wide presence directory
            notifier: Push notifier
            push_when_online: Also push when the recipient is connected
        """
        self.message_service = message_service
        self.profile_service = profile_service
        self.presence = presence
        self.notifier = notifier
        self.push_when_online = push_when_online

    async def execute(self, request: SendMessageRequest) -> SendMessageOutcome:
        """Execute send message flow.

        Steps:
        1. Validate and resolve the recipient profile
        2. Persist the message (durability boundary)
        3. Deliver live and/or by push

        Never raises; failures before persistence come back as FAILED.

        Args:
            request: Send message request

        Returns:
            Outcome to acknowledge the sender with
        """
        with logfire.span(
            "send_message",
            sender_id=request.sender_id,
            receiver_id=request.receiver_id,
        ):
            try:
                sender_id, receiver_id = self._identities(request)
                self.message_service.validate_text(request.text)
                receiver = await self._resolve_recipient(receiver_id)
                message = await self.message_service.create_message(
                    sender_id, receiver.identity, request.text
                )
            except DomainError as e:
                logfire.warn("Message rejected", error=str(e))
                return SendMessageOutcome.failed(str(e))
            except Exception as e:
                logfire.error(
                    "Message persistence failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return SendMessageOutcome.failed("Failed to send message")

            payload = MessagePayload.from_message(message)
            delivered_via = await self._deliver(receiver, message, payload)

            return SendMessageOutcome(
                status=SendStatus.DELIVERED,
                message=payload,
                delivered_via=delivered_via,
            )

    @staticmethod
    def _identities(request: SendMessageRequest) -> tuple[Identity, Identity]:
        return Identity.parse(request.sender_id), Identity.parse(request.receiver_id)

    async def _resolve_recipient(self, receiver_id: Identity) -> Profile:
        receiver = await self.profile_service.find_by_identity(receiver_id)
        if receiver is None:
            raise RecipientNotFoundError(receiver_id.root)
        return receiver

    async def _deliver(
        self, receiver: Profile, message: Message, payload: MessagePayload
    ) -> list[DeliveryPath]:
        delivered_via: list[DeliveryPath] = []

        connection = self.presence.resolve(receiver.identity)
        if connection is not None:
            try:
                await connection.emit("newMessage", payload.wire())
                delivered_via.append(DeliveryPath.LIVE)
            except Exception as e:
                # The socket died before its disconnect was processed
                logfire.warn(
                    "Live delivery failed",
                    receiver_id=receiver.identity.root,
                    connection=connection.connection_id,
                    error=str(e),
                )

        live = DeliveryPath.LIVE in delivered_via
        if receiver.push_token and (not live or self.push_when_online):
            if await self._push(receiver, receiver.push_token, message):
                delivered_via.append(DeliveryPath.PUSH)

        logfire.info(
            "Message delivered",
            message_id=str(message.id),
            delivered_via=[path.value for path in delivered_via],
        )
        return delivered_via

    async def _push(self, receiver: Profile, token: str, message: Message) -> bool:
        try:
            sender = await self.profile_service.find_by_identity(message.sender_id)
            result = await self.notifier.send(token, build_notification(sender, message))
        except Exception as e:
            logfire.warn(
                "Push notification failed",
                receiver_id=receiver.identity.root,
                error=str(e),
            )
            return False

        if result is PushResult.TOKEN_INVALID:
            try:
                await self.profile_service.clear_push_token(receiver.identity, token)
            except Exception as e:
                logfire.warn(
                    "Clearing invalid push token failed",
                    receiver_id=receiver.identity.root,
                    error=str(e),
                )
            return False

        return result is PushResult.OK
