"""Create or update profile use case."""

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import ProfileService
from relay.domain.value import Identity

from .get_profile import ProfileResponse


class UpsertProfileRequest(BaseModel):
    """Upsert profile request.

    Fields left as None keep their stored value.
    """

    identity: Identity
    name: str | None = Field(default=None, max_length=200)
    username: str | None = Field(default=None, max_length=100)
    profile_pic_url: str | None = Field(default=None, max_length=2048)


class UpsertProfileUseCase(BaseUseCase):
    """Use case for creating a profile or editing its descriptive fields.

    Social counters and push tokens are not writable here.
    """

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: UpsertProfileRequest) -> ProfileResponse:
        profile = await self.profile_service.upsert(
            request.identity,
            name=request.name,
            username=request.username,
            profile_pic_url=request.profile_pic_url,
        )
        return ProfileResponse.from_profile(profile)
