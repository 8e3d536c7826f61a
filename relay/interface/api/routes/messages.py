"""Message history routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError as PydanticValidationError

from relay.application.usecase.message import (
    GetConversationRequest,
    GetConversationResponse,
    GetConversationUseCase,
)

router = APIRouter(prefix="/messages", tags=["messages"], route_class=DishkaRoute)


@router.get("/conversation", response_model=GetConversationResponse)
async def get_conversation(
    get_conversation_use_case: FromDishka[GetConversationUseCase],
    a: str = Query(min_length=1),
    b: str = Query(min_length=1),
    limit: int | None = Query(default=None, gt=0),
    before: datetime | None = None,
) -> GetConversationResponse:
    """Messages exchanged between ``a`` and ``b``, newest first.

    Pass the ``created_at`` of the oldest message received as ``before``
    to fetch the next page.
    """
    try:
        request = GetConversationRequest(first=a, second=b, limit=limit, before=before)
    except PydanticValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid identity",
        )

    return await get_conversation_use_case.execute(request)
