"""List followers / following use case."""

from enum import Enum

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.application.usecase.profile.get_profile import ProfileResponse
from relay.domain.service import FollowService, ProfileService
from relay.domain.value import Identity


class FollowDirection(str, Enum):
    """Which side of the graph to list."""

    FOLLOWERS = "followers"
    FOLLOWING = "following"


class ListFollowsRequest(BaseModel):
    """List follows request."""

    identity: str
    direction: FollowDirection
    limit: int = Field(default=100, gt=0, le=500)


class ListFollowsResponse(BaseModel):
    """List follows response."""

    identity: str
    direction: FollowDirection
    profiles: list[ProfileResponse]


class ListFollowsUseCase(BaseUseCase):
    """Use case for listing a profile's followers or followees."""

    def __init__(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> None:
        self.follow_service = follow_service
        self.profile_service = profile_service

    async def execute(self, request: ListFollowsRequest) -> ListFollowsResponse:
        """Execute list follows flow.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        identity = Identity(request.identity)
        await self.profile_service.get_by_identity(identity)

        if request.direction == FollowDirection.FOLLOWERS:
            profiles = await self.follow_service.list_followers(identity, request.limit)
        else:
            profiles = await self.follow_service.list_following(identity, request.limit)

        return ListFollowsResponse(
            identity=identity.root,
            direction=request.direction,
            profiles=[ProfileResponse.from_profile(p) for p in profiles],
        )
