"""Realtime wire shapes shared by use cases.

Realtime clients speak camelCase; these models serialize with
``model_dump(by_alias=True, mode="json")``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from relay.domain.model import Message


class WirePayload(BaseModel):
    """Base for payloads sent over the realtime channel."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def wire(self) -> dict:
        """JSON-ready camelCase dict."""
        return self.model_dump(by_alias=True, mode="json")


class MessagePayload(WirePayload):
    """Message as delivered in ``messageSent`` and ``newMessage``."""

    object_id: str
    text: str
    sender_id: str
    receiver_id: str
    created_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessagePayload":
        """Build the payload for a persisted message."""
        if message.created_at is None:
            raise ValueError("Message has not been persisted")
        return cls(
            object_id=str(message.id),
            text=message.text,
            sender_id=message.sender_id.root,
            receiver_id=message.receiver_id.root,
            created_at=message.created_at,
        )
