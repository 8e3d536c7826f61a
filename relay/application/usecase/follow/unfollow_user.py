"""Unfollow user use case."""

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import FollowService, ProfileService

from .follow_user import FollowRequest, FollowResponse, read_counters


class UnfollowUserUseCase(BaseUseCase):
    """Use case for unfollowing a user."""

    def __init__(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> None:
        """Initialize unfollow user use case.

        Args:
            follow_service: Follow domain service
            profile_service: Profile domain service
        """
        self.follow_service = follow_service
        self.profile_service = profile_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Execute unfollow flow.

        Returns:
            UNFOLLOWED or NOT_FOLLOWING with current counters

        Raises:
            ValidationError: If an identity is empty
            SelfFollowError: If unfollowing oneself
            ProfileNotFoundError: If either profile is missing
        """
        follower_id, following_id = request.identities()
        outcome = await self.follow_service.unfollow(follower_id, following_id)
        return await read_counters(
            self.profile_service, outcome, follower_id, following_id
        )
