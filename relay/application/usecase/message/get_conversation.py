"""Get conversation use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import MessageService
from relay.domain.value import Identity


class GetConversationRequest(BaseModel):
    """Get conversation request."""

    first: Identity
    second: Identity
    limit: Optional[int] = Field(default=None, gt=0)
    before: Optional[datetime] = None


class ConversationMessage(BaseModel):
    """Message in a conversation listing."""

    object_id: str
    sender_id: str
    receiver_id: str
    text: str
    created_at: datetime
    expires_at: Optional[datetime] = None


class GetConversationResponse(BaseModel):
    """Get conversation response (newest first)."""

    messages: list[ConversationMessage]
    has_more: bool


class GetConversationUseCase(BaseUseCase):
    """Use case for reading the history between two identities."""

    def __init__(
        self,
        message_service: MessageService,
        default_page_size: int = 50,
        max_page_size: int = 200,
    ) -> None:
        """Initialize get conversation use case.

        Args:
            message_service: Message domain service
            default_page_size: Page size when the request gives none
            max_page_size: Upper bound on requested page size
        """
        self.message_service = message_service
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(self, request: GetConversationRequest) -> GetConversationResponse:
        """Execute get conversation flow.

        Fetches one extra row to tell whether an older page exists.
        """
        limit = min(request.limit or self.default_page_size, self.max_page_size)
        messages = await self.message_service.get_conversation(
            request.first,
            request.second,
            limit=limit + 1,
            before=request.before,
        )
        return GetConversationResponse(
            messages=[
                ConversationMessage(
                    object_id=str(m.id),
                    sender_id=m.sender_id.root,
                    receiver_id=m.receiver_id.root,
                    text=m.text,
                    created_at=m.created_at,
                    expires_at=m.expires_at,
                )
                for m in messages[:limit]
            ],
            has_more=len(messages) > limit,
        )
