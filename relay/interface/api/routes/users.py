"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from relay.application.usecase.follow import (
    FollowDirection,
    ListFollowsRequest,
    ListFollowsResponse,
    ListFollowsUseCase,
)
from relay.application.usecase.profile import (
    FindNearbyRequest,
    FindNearbyResponse,
    FindNearbyUseCase,
    GetProfileRequest,
    GetProfileUseCase,
    ProfileResponse,
    SetPushTokenRequest,
    SetPushTokenUseCase,
    UpdateLocationRequest,
    UpdateLocationUseCase,
    UpsertProfileRequest,
    UpsertProfileUseCase,
)
from relay.domain.error import NotFoundError, ValidationError
from relay.domain.value import GeoPoint, Identity

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpsertProfileAPIRequest(BaseModel):
    """API request for creating or updating a profile."""

    name: str | None = Field(None, max_length=200)
    username: str | None = Field(None, max_length=100)
    profile_pic_url: str | None = Field(None, max_length=2048)


class PushTokenAPIRequest(BaseModel):
    """API request for registering a push token."""

    push_token: str = Field(min_length=1, max_length=255)


class LocationAPIRequest(BaseModel):
    """API request for updating a location."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


def _identity(identity: str) -> Identity:
    try:
        return Identity.parse(identity)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("/nearby", response_model=FindNearbyResponse)
async def find_nearby(
    find_nearby_use_case: FromDishka[FindNearbyUseCase],
    latitude: float = Query(ge=-90.0, le=90.0),
    longitude: float = Query(ge=-180.0, le=180.0),
    max_distance: float | None = Query(default=None, gt=0),
    exclude: str | None = None,
) -> FindNearbyResponse:
    """List profiles within ``max_distance`` metres of a point.

    Example:
        GET /users/nearby?latitude=52.52&longitude=13.405&max_distance=20
    """
    try:
        return await find_nearby_use_case.execute(
            FindNearbyRequest(
                location=GeoPoint(latitude=latitude, longitude=longitude),
                radius_m=max_distance,
                exclude=_identity(exclude) if exclude else None,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{identity}", response_model=ProfileResponse)
async def get_profile(
    identity: str,
    get_profile_use_case: FromDishka[GetProfileUseCase],
) -> ProfileResponse:
    """Get profile by identity.

    Raises:
        HTTPException: If the profile does not exist
    """
    profile = await get_profile_use_case.execute(
        GetProfileRequest(identity=_identity(identity))
    )

    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Profile not found: {identity}",
        )

    return profile


@router.put("/{identity}", response_model=ProfileResponse)
async def upsert_profile(
    identity: str,
    request: UpsertProfileAPIRequest,
    upsert_profile_use_case: FromDishka[UpsertProfileUseCase],
) -> ProfileResponse:
    """Create a profile or update its name, username and picture.

    Example:
        PUT /users/auth0|alice

        Request:
        {
            "name": "Alice",
            "username": "alice",
            "profile_pic_url": "https://example.com/alice.jpg"
        }
    """
    return await upsert_profile_use_case.execute(
        UpsertProfileRequest(
            identity=_identity(identity),
            name=request.name,
            username=request.username,
            profile_pic_url=request.profile_pic_url,
        )
    )


@router.put("/{identity}/push-token", response_model=ProfileResponse)
async def register_push_token(
    identity: str,
    request: PushTokenAPIRequest,
    set_push_token_use_case: FromDishka[SetPushTokenUseCase],
) -> ProfileResponse:
    """Register the device push token for a profile."""
    return await _set_push_token(
        set_push_token_use_case, identity, request.push_token
    )


@router.delete("/{identity}/push-token", response_model=ProfileResponse)
async def remove_push_token(
    identity: str,
    set_push_token_use_case: FromDishka[SetPushTokenUseCase],
) -> ProfileResponse:
    """Remove the device push token for a profile."""
    return await _set_push_token(set_push_token_use_case, identity, None)


async def _set_push_token(
    use_case: SetPushTokenUseCase, identity: str, token: str | None
) -> ProfileResponse:
    try:
        return await use_case.execute(
            SetPushTokenRequest(identity=_identity(identity), push_token=token)
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{identity}/location", response_model=ProfileResponse)
async def update_location(
    identity: str,
    request: LocationAPIRequest,
    update_location_use_case: FromDishka[UpdateLocationUseCase],
) -> ProfileResponse:
    """Store the current location of a profile."""
    try:
        return await update_location_use_case.execute(
            UpdateLocationRequest(
                identity=_identity(identity),
                location=GeoPoint(
                    latitude=request.latitude, longitude=request.longitude
                ),
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{identity}/followers", response_model=ListFollowsResponse)
async def list_followers(
    identity: str,
    list_follows_use_case: FromDishka[ListFollowsUseCase],
    limit: int = Query(default=100, gt=0, le=500),
) -> ListFollowsResponse:
    """Profiles following ``identity``, most recent first."""
    return await _list_follows(
        list_follows_use_case, identity, FollowDirection.FOLLOWERS, limit
    )


@router.get("/{identity}/following", response_model=ListFollowsResponse)
async def list_following(
    identity: str,
    list_follows_use_case: FromDishka[ListFollowsUseCase],
    limit: int = Query(default=100, gt=0, le=500),
) -> ListFollowsResponse:
    """Profiles ``identity`` follows, most recent first."""
    return await _list_follows(
        list_follows_use_case, identity, FollowDirection.FOLLOWING, limit
    )


async def _list_follows(
    use_case: ListFollowsUseCase,
    identity: str,
    direction: FollowDirection,
    limit: int,
) -> ListFollowsResponse:
    try:
        return await use_case.execute(
            ListFollowsRequest(
                identity=_identity(identity).root, direction=direction, limit=limit
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
