"""Get profile use case."""

from datetime import datetime

from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.domain.model import Profile
from relay.domain.service import ProfileService
from relay.domain.value import GeoPoint, Identity


class GetProfileRequest(BaseModel):
    """Get profile request."""

    identity: Identity


class ProfileResponse(BaseModel):
    """Public profile.

    The push token is never exposed; has_push_token says whether one is set.
    """

    identity: str
    name: str | None
    username: str | None
    profile_pic_url: str | None
    followers_count: int
    following_count: int
    has_push_token: bool
    location: GeoPoint | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            identity=profile.identity.root,
            name=profile.name,
            username=profile.username,
            profile_pic_url=profile.profile_pic_url,
            followers_count=profile.followers_count,
            following_count=profile.following_count,
            has_push_token=profile.push_token is not None,
            location=profile.location,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class GetProfileUseCase(BaseUseCase):
    """Use case for reading a profile by identity."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize get profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: GetProfileRequest) -> ProfileResponse | None:
        """Execute get profile flow.

        Returns:
            Profile if it exists, None otherwise
        """
        profile = await self.profile_service.find_by_identity(request.identity)
        if not profile:
            return None
        return ProfileResponse.from_profile(profile)
