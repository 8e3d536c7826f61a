"""Profile use cases."""

from .find_nearby import (
    FindNearbyRequest,
    FindNearbyResponse,
    FindNearbyUseCase,
    NearbyProfile,
)
from .get_profile import GetProfileRequest, GetProfileUseCase, ProfileResponse
from .set_push_token import SetPushTokenRequest, SetPushTokenUseCase
from .update_location import UpdateLocationRequest, UpdateLocationUseCase
from .upsert_profile import UpsertProfileRequest, UpsertProfileUseCase

__all__ = [
    "FindNearbyRequest",
    "FindNearbyResponse",
    "FindNearbyUseCase",
    "GetProfileRequest",
    "GetProfileUseCase",
    "NearbyProfile",
    "ProfileResponse",
    "SetPushTokenRequest",
    "SetPushTokenUseCase",
    "UpdateLocationRequest",
    "UpdateLocationUseCase",
    "UpsertProfileRequest",
    "UpsertProfileUseCase",
]
