"""Message domain service."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import logfire

from relay.domain.error import ValidationError
from relay.domain.model import Message
from relay.domain.repository import MessageRepository
from relay.domain.value import Identity, MessageId

from .base import Service


class MessageService(Service):
    """Domain service for message operations."""

    def __init__(
        self,
        message_repository: MessageRepository,
        max_text_length: int = 5000,
        ttl: Optional[timedelta] = None,
    ) -> None:
        """Initialize message service.

        Args:
            message_repository: Message repository
            max_text_length: Upper bound on message body length
            ttl: When set, messages are stamped with an expiry
        """
        self.message_repository = message_repository
        self.max_text_length = max_text_length
        self.ttl = ttl

    def validate_text(self, text: str) -> str:
        """Check a message body.

        Raises:
            ValidationError: If the body is blank or too long
        """
        if not text or not text.strip():
            raise ValidationError("Message text must not be empty")
        if len(text) > self.max_text_length:
            raise ValidationError(
                f"Message text must be at most {self.max_text_length} characters"
            )
        return text

    async def create_message(
        self, sender_id: Identity, receiver_id: Identity, text: str
    ) -> Message:
        """Persist a new message.

        Returns once the message is durably stored.

        Raises:
            ValidationError: If the body is invalid
        """
        text = self.validate_text(text)
        expires_at = None
        if self.ttl is not None:
            expires_at = datetime.now(timezone.utc) + self.ttl

        message = Message(
            id=MessageId(uuid4()),
            sender_id=sender_id,
            receiver_id=receiver_id,
            text=text,
            expires_at=expires_at,
        )
        saved = await self.message_repository.save(message)
        logfire.info(
            "Message persisted",
            message_id=str(saved.id),
            sender_id=sender_id.root,
            receiver_id=receiver_id.root,
        )
        return saved

    async def get_conversation(
        self,
        first: Identity,
        second: Identity,
        limit: int,
        before: Optional[datetime] = None,
    ) -> list[Message]:
        """Messages between two identities, newest first."""
        with logfire.span(
            "message_service.get_conversation",
            first=first.root,
            second=second.root,
            limit=limit,
        ):
            return await self.message_repository.find_conversation(
                first, second, limit=limit, before=before
            )
