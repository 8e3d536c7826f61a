"""Message use cases."""

from .get_conversation import (
    GetConversationRequest,
    GetConversationResponse,
    GetConversationUseCase,
)
from .send_message import (
    SendMessageOutcome,
    SendMessageRequest,
    SendMessageUseCase,
    SendStatus,
)

__all__ = [
    "GetConversationRequest",
    "GetConversationResponse",
    "GetConversationUseCase",
    "SendMessageOutcome",
    "SendMessageRequest",
    "SendMessageUseCase",
    "SendStatus",
]
