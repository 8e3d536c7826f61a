"""Follow user use case."""

from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import FollowService, ProfileService
from relay.domain.value import FollowOutcome, Identity


class FollowRequest(BaseModel):
    """Follow / unfollow request."""

    follower_id: str
    following_id: str

    def identities(self) -> tuple[Identity, Identity]:
        """Validated (follower, following) identities.

        Raises:
            ValidationError: If either identity is rejected
        """
        return Identity.parse(self.follower_id), Identity.parse(self.following_id)


class FollowResponse(BaseModel):
    """Follow / unfollow response.

    Counters are read back after the write.
    """

    outcome: FollowOutcome
    follower_id: str
    following_id: str
    follower_following_count: int
    following_followers_count: int


async def read_counters(
    profile_service: ProfileService,
    outcome: FollowOutcome,
    follower_id: Identity,
    following_id: Identity,
) -> FollowResponse:
    """Build a FollowResponse from the current profile counters."""
    follower = await profile_service.get_by_identity(follower_id)
    following = await profile_service.get_by_identity(following_id)
    return FollowResponse(
        outcome=outcome,
        follower_id=follower_id.root,
        following_id=following_id.root,
        follower_following_count=follower.following_count,
        following_followers_count=following.followers_count,
    )


class FollowUserUseCase(BaseUseCase):
    """Use case for following another user."""

    def __init__(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> None:
        """Initialize follow user use case.

        Args:
            follow_service: Follow domain service
            profile_service: Profile domain service
        """
        self.follow_service = follow_service
        self.profile_service = profile_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Execute follow flow.

        Args:
            request: Follow request

        Returns:
            FOLLOWED or ALREADY_FOLLOWING with current counters

        Raises:
            ValidationError: If an identity is rejected
            SelfFollowError: If following oneself
            ProfileNotFoundError: If either profile is missing
        """
        follower_id, following_id = request.identities()
        outcome = await self.follow_service.follow(follower_id, following_id)
        return await read_counters(
            self.profile_service, outcome, follower_id, following_id
        )
