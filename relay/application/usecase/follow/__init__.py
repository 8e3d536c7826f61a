"""Follow use cases."""

from .fanout import FollowFanOut
from .follow_user import FollowRequest, FollowResponse, FollowUserUseCase
from .list_follows import (
    FollowDirection,
    ListFollowsRequest,
    ListFollowsResponse,
    ListFollowsUseCase,
)
from .unfollow_user import UnfollowUserUseCase

__all__ = [
    "FollowDirection",
    "FollowFanOut",
    "FollowRequest",
    "FollowResponse",
    "FollowUserUseCase",
    "ListFollowsRequest",
    "ListFollowsResponse",
    "ListFollowsUseCase",
    "UnfollowUserUseCase",
]
