"""In-memory message repository for testing."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from relay.domain.model import Message
from relay.domain.repository import MessageRepository
from relay.domain.value import Identity, MessageId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    async def save(self, message: Message) -> Message:
        """Store a message, stamping created_at like the database default."""
        created_at = datetime.now(timezone.utc)
        if self._messages and created_at <= self._messages[-1].created_at:
            # Keep insertion order visible when the clock has not advanced
            created_at = self._messages[-1].created_at + timedelta(microseconds=1)
        saved = message.model_copy(update={"created_at": created_at})
        self._messages.append(saved)
        return saved

    async def find_conversation(
        self,
        first: Identity,
        second: Identity,
        limit: int,
        before: Optional[datetime] = None,
    ) -> list[Message]:
        """Find messages exchanged between two identities, newest first."""
        now = datetime.now(timezone.utc)
        pair = {(first, second), (second, first)}
        matches = [
            m
            for m in self._messages
            if (m.sender_id, m.receiver_id) in pair
            and (m.expires_at is None or m.expires_at > now)
            and (before is None or (m.created_at is not None and m.created_at < before))
        ]
        # Stable sort keeps insertion order for equal timestamps, newest first
        matches = list(reversed(matches))
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches[:limit]

    def __len__(self) -> int:
        return len(self._messages)
