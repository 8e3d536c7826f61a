"""Inbound realtime frames.

Clients send camelCase keys. Follow events historically used two key sets
(``fromAuth0Id``/``toAuth0Id`` and ``myAuth0Id``/``targetAuth0Id``); both
are accepted for either event.
"""

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from relay.interface.error import FrameError


class Envelope(BaseModel):
    """Outer frame."""

    event: str = Field(min_length=1)
    data: Any = None


class SendMessageEvent(BaseModel):
    """``sendMessage`` payload."""

    model_config = ConfigDict(populate_by_name=True)

    sender_id: str = Field(alias="senderId")
    receiver_id: str = Field(alias="receiverId")
    text: str


class FollowEvent(BaseModel):
    """``followUser`` / ``unfollowUser`` payload."""

    follower_id: str = Field(validation_alias=AliasChoices("fromAuth0Id", "myAuth0Id"))
    following_id: str = Field(
        validation_alias=AliasChoices("toAuth0Id", "targetAuth0Id")
    )


def decode_envelope(raw: str) -> Envelope:
    """Parse a text frame.

    Raises:
        FrameError: If the frame is not a JSON envelope
    """
    try:
        payload = json.loads(raw)
    except ValueError:
        raise FrameError("Frame is not valid JSON")
    if not isinstance(payload, dict):
        raise FrameError("Frame must be an object with an event name")
    try:
        return Envelope.model_validate(payload)
    except PydanticValidationError:
        raise FrameError("Frame must be an object with an event name")


def join_identity(data: Any) -> str:
    """Identity announced by a ``join`` frame.

    Accepts a bare string or ``{"identity": str}``.
    """
    if isinstance(data, dict):
        data = data.get("identity")
    if not isinstance(data, str):
        return ""
    return data
