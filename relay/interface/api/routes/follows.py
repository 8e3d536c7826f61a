"""Follow graph routes.

Same semantics and realtime fan-out as the ``followUser`` /
``unfollowUser`` events.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import AliasChoices, BaseModel, Field

from relay.application.usecase.follow import (
    FollowFanOut,
    FollowRequest,
    FollowResponse,
    FollowUserUseCase,
    UnfollowUserUseCase,
)
from relay.domain.error import BusinessRuleViolationError, NotFoundError, ValidationError

router = APIRouter(prefix="/follows", tags=["follows"], route_class=DishkaRoute)


class FollowAPIRequest(BaseModel):
    """API request for follow / unfollow."""

    follower_id: str = Field(
        validation_alias=AliasChoices("follower_id", "fromAuth0Id", "myAuth0Id")
    )
    following_id: str = Field(
        validation_alias=AliasChoices("following_id", "toAuth0Id", "targetAuth0Id")
    )


def _to_http(error: Exception) -> HTTPException:
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@router.post("", response_model=FollowResponse)
async def follow_user(
    request: FollowAPIRequest,
    follow_user_use_case: FromDishka[FollowUserUseCase],
    fan_out: FromDishka[FollowFanOut],
) -> FollowResponse:
    """Follow a user.

    Example:
        POST /follows

        Request:
        {"fromAuth0Id": "auth0|alice", "toAuth0Id": "auth0|bob"}

        Response:
        {
            "outcome": "followed",
            "follower_id": "auth0|alice",
            "following_id": "auth0|bob",
            "follower_following_count": 1,
            "following_followers_count": 1
        }
    """
    try:
        response = await follow_user_use_case.execute(
            FollowRequest(
                follower_id=request.follower_id, following_id=request.following_id
            )
        )
    except (ValidationError, BusinessRuleViolationError, NotFoundError) as e:
        raise _to_http(e)

    await fan_out.announce(response)
    return response


@router.delete("", response_model=FollowResponse)
async def unfollow_user(
    request: FollowAPIRequest,
    unfollow_user_use_case: FromDishka[UnfollowUserUseCase],
    fan_out: FromDishka[FollowFanOut],
) -> FollowResponse:
    """Unfollow a user. Unfollowing someone not followed is not an error."""
    try:
        response = await unfollow_user_use_case.execute(
            FollowRequest(
                follower_id=request.follower_id, following_id=request.following_id
            )
        )
    except (ValidationError, BusinessRuleViolationError, NotFoundError) as e:
        raise _to_http(e)

    await fan_out.announce(response)
    return response
