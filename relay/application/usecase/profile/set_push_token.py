"""Register / remove push token use case."""

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.domain.error import ValidationError
from relay.domain.service import ProfileService
from relay.domain.value import Identity

from .get_profile import ProfileResponse


class SetPushTokenRequest(BaseModel):
    """Set push token request. A None token removes the registration."""

    identity: Identity
    push_token: str | None = Field(default=None, max_length=255)


class SetPushTokenUseCase(BaseUseCase):
    """Use case for registering a device push token."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize set push token use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: SetPushTokenRequest) -> ProfileResponse:
        """Execute set push token flow.

        Raises:
            ValidationError: If the token is blank
            ProfileNotFoundError: If the profile does not exist
        """
        token = request.push_token
        if token is not None:
            token = token.strip()
            if not token:
                raise ValidationError("Push token must not be blank")

        profile = await self.profile_service.set_push_token(request.identity, token)
        return ProfileResponse.from_profile(profile)
