"""Message repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from relay.domain.model import Message
from relay.domain.value import Identity, MessageId


class MessageRepository(ABC):
    """Repository for Message entity."""

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        pass

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Durably store a new message.

        This is the durability boundary of the message relay: when it
        returns, the message is committed and carries the store-assigned
        created_at.

        Args:
            message: Message to store (created_at ignored)

        Returns:
            The stored message with created_at set
        """
        pass

    @abstractmethod
    async def find_conversation(
        self,
        first: Identity,
        second: Identity,
        limit: int,
        before: Optional[datetime] = None,
    ) -> list[Message]:
        """Find messages exchanged between two identities, newest first.

        Expired messages (expires_at in the past) are excluded.

        Args:
            first: One participant
            second: The other participant
            limit: Maximum number of messages
            before: Only messages created strictly before this instant

        Returns:
            Messages ordered by created_at descending
        """
        pass
