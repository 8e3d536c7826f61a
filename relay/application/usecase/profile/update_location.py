"""Update location use case."""

from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import ProfileService
from relay.domain.value import GeoPoint, Identity

from .get_profile import ProfileResponse


class UpdateLocationRequest(BaseModel):
    """Update location request."""

    identity: Identity
    location: GeoPoint


class UpdateLocationUseCase(BaseUseCase):
    """Use case for storing a profile's last known location."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: UpdateLocationRequest) -> ProfileResponse:
        """Execute update location flow.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        profile = await self.profile_service.update_location(
            request.identity, request.location
        )
        return ProfileResponse.from_profile(profile)
