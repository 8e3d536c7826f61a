"""Find nearby profiles use case."""

from typing import Optional

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.domain.error import ValidationError
from relay.domain.service import ProfileService
from relay.domain.value import GeoPoint, Identity

from .get_profile import ProfileResponse


class FindNearbyRequest(BaseModel):
    """Find nearby request.

    ``exclude`` is typically the caller, who would otherwise match at 0 m.
    """

    location: GeoPoint
    radius_m: Optional[float] = Field(default=None, gt=0)
    exclude: Optional[Identity] = None


class NearbyProfile(BaseModel):
    """A profile and its distance from the search centre."""

    profile: ProfileResponse
    distance_m: float


class FindNearbyResponse(BaseModel):
    """Find nearby response, closest first."""

    radius_m: float
    profiles: list[NearbyProfile]


class FindNearbyUseCase(BaseUseCase):
    """Use case for listing profiles near a point."""

    def __init__(
        self,
        profile_service: ProfileService,
        default_radius: float = 20.0,
        max_radius: float = 50_000.0,
    ) -> None:
        """Initialize find nearby use case.

        Args:
            profile_service: Profile domain service
            default_radius: Radius in metres when the request gives none
            max_radius: Largest radius accepted, in metres
        """
        self.profile_service = profile_service
        self.default_radius = default_radius
        self.max_radius = max_radius

    async def execute(self, request: FindNearbyRequest) -> FindNearbyResponse:
        """Execute find nearby flow.

        Raises:
            ValidationError: If the radius exceeds the configured maximum
        """
        radius = request.radius_m if request.radius_m is not None else self.default_radius
        if radius > self.max_radius:
            raise ValidationError(f"Radius must be at most {self.max_radius:g} metres")

        hits = await self.profile_service.find_nearby(request.location, radius)
        return FindNearbyResponse(
            radius_m=radius,
            profiles=[
                NearbyProfile(
                    profile=ProfileResponse.from_profile(profile),
                    distance_m=round(distance, 2),
                )
                for profile, distance in hits
                if profile.identity != request.exclude
            ],
        )
