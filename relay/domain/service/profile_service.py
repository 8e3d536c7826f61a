"""Profile domain service."""

import math
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from relay.domain.error import ProfileNotFoundError
from relay.domain.model import Profile
from relay.domain.repository import ProfileRepository
from relay.domain.value import GeoPoint, Identity, ProfileId

from .base import Service

EARTH_RADIUS_M = 6_371_000.0


def distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points (haversine), in metres."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def _wrap_longitude(longitude: float) -> float:
    if longitude < -180.0:
        return longitude + 360.0
    if longitude > 180.0:
        return longitude - 360.0
    return longitude


def bounding_box(center: GeoPoint, radius_m: float) -> tuple[GeoPoint, GeoPoint]:
    """Lat/lon box that contains every point within ``radius_m`` of ``center``.

    Longitudes wrap at the antimeridian: a box that crosses it comes back
    with ``south_west.longitude > north_east.longitude``. A box reaching a
    pole spans every longitude.
    """
    r = radius_m / EARTH_RADIUS_M
    dlat = math.degrees(r)
    south = center.latitude - dlat
    north = center.latitude + dlat

    ratio = 1.0
    if south > -90.0 and north < 90.0:
        ratio = math.sin(r) / math.cos(math.radians(center.latitude))
    if ratio >= 1.0:
        west, east = -180.0, 180.0
    else:
        dlon = math.degrees(math.asin(ratio))
        west = _wrap_longitude(center.longitude - dlon)
        east = _wrap_longitude(center.longitude + dlon)

    south_west = GeoPoint(latitude=max(-90.0, south), longitude=west)
    north_east = GeoPoint(latitude=min(90.0, north), longitude=east)
    return south_west, north_east


class ProfileService(Service):
    """Domain service for profile operations."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
        """
        self.profile_repository = profile_repository

    async def find_by_identity(self, identity: Identity) -> Optional[Profile]:
        """Get profile by identity, or None."""
        return await self.profile_repository.find_by_identity(identity)

    async def get_by_identity(self, identity: Identity) -> Profile:
        """Get profile by identity.

        Raises:
            ProfileNotFoundError: If no profile exists for the identity
        """
        with logfire.span("profile_service.get_by_identity", identity=identity.root):
            profile = await self.profile_repository.find_by_identity(identity)
            if not profile:
                logfire.warn("Profile not found", identity=identity.root)
                raise ProfileNotFoundError(identity.root)
            return profile

    async def get_many(self, identities: Sequence[Identity]) -> list[Profile]:
        """Get the profiles that exist among ``identities``."""
        if not identities:
            return []
        return await self.profile_repository.find_by_identities(identities)

    async def upsert(
        self,
        identity: Identity,
        name: Optional[str] = None,
        username: Optional[str] = None,
        profile_pic_url: Optional[str] = None,
    ) -> Profile:
        """Create a profile or update its descriptive attributes.

        Only fields passed as non-None are changed on an existing profile.
        Counters, push token and location are never touched here.
        """
        with logfire.span("profile_service.upsert", identity=identity.root):
            existing = await self.profile_repository.find_by_identity(identity)
            if existing is None:
                profile = Profile(
                    id=ProfileId(uuid4()),
                    identity=identity,
                    name=name,
                    username=username,
                    profile_pic_url=profile_pic_url,
                )
                logfire.info("Profile created", identity=identity.root)
            else:
                updates = {
                    key: value
                    for key, value in {
                        "name": name,
                        "username": username,
                        "profile_pic_url": profile_pic_url,
                    }.items()
                    if value is not None
                }
                profile = existing.model_copy(update=updates)
            return await self.profile_repository.save(profile)

    async def set_push_token(self, identity: Identity, token: Optional[str]) -> Profile:
        """Register (or, with None, remove) the profile's push token.

        Raises:
            ProfileNotFoundError: If no profile exists for the identity
        """
        updated = await self.profile_repository.set_push_token(identity, token)
        if updated is None:
            logfire.warn("Profile not found", identity=identity.root)
            raise ProfileNotFoundError(identity.root)
        logfire.info(
            "Push token updated", identity=identity.root, registered=token is not None
        )
        return updated

    async def clear_push_token(self, identity: Identity, token: str) -> bool:
        """Clear a push token the notifier reported as permanently invalid.

        A token registered after the failing send is left alone.
        """
        cleared = await self.profile_repository.clear_push_token(identity, token)
        if cleared:
            logfire.info("Invalid push token cleared", identity=identity.root)
        return cleared

    async def update_location(self, identity: Identity, location: GeoPoint) -> Profile:
        """Store the profile's current location.

        Raises:
            ProfileNotFoundError: If no profile exists for the identity
        """
        updated = await self.profile_repository.set_location(identity, location)
        if updated is None:
            logfire.warn("Profile not found", identity=identity.root)
            raise ProfileNotFoundError(identity.root)
        return updated

    async def find_nearby(
        self, center: GeoPoint, radius_m: float
    ) -> list[tuple[Profile, float]]:
        """Profiles within ``radius_m`` metres of ``center``, closest first.

        Returns:
            (profile, distance in metres) pairs
        """
        with logfire.span(
            "profile_service.find_nearby",
            latitude=center.latitude,
            longitude=center.longitude,
            radius_m=radius_m,
        ):
            south_west, north_east = bounding_box(center, radius_m)
            candidates = await self.profile_repository.find_within_box(
                south_west, north_east
            )
            hits = []
            for profile in candidates:
                if profile.location is None:
                    continue
                d = distance_m(center, profile.location)
                if d <= radius_m:
                    hits.append((profile, d))
            hits.sort(key=lambda pair: pair[1])
            return hits
