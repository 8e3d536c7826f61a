"""In-memory profile repository for testing."""

from datetime import datetime, timezone
from typing import Optional, Sequence

from relay.domain.model import Profile
from relay.domain.repository import ProfileRepository
from relay.domain.value import CounterField, GeoPoint, Identity


def _in_longitude_span(longitude: float, west: float, east: float) -> bool:
    if west <= east:
        return west <= longitude <= east
    return longitude >= west or longitude <= east


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[Identity, Profile] = {}

    async def find_by_identity(self, identity: Identity) -> Optional[Profile]:
        """Find a profile by identity."""
        return self._profiles.get(identity)

    async def find_by_identities(
        self, identities: Sequence[Identity]
    ) -> list[Profile]:
        """Find profiles for several identities."""
        return [self._profiles[i] for i in set(identities) if i in self._profiles]

    async def find_within_box(
        self, south_west: GeoPoint, north_east: GeoPoint
    ) -> list[Profile]:
        """Find profiles whose location lies inside a bounding box."""
        return [
            p
            for p in self._profiles.values()
            if p.location is not None
            and south_west.latitude <= p.location.latitude <= north_east.latitude
            and _in_longitude_span(
                p.location.longitude, south_west.longitude, north_east.longitude
            )
        ]

    async def save(self, profile: Profile) -> Profile:
        """Save or update a profile.

        On update, stored counters, push token and location are kept.
        """
        existing = self._profiles.get(profile.identity)
        if existing:
            profile = profile.model_copy(
                update={
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "followers_count": existing.followers_count,
                    "following_count": existing.following_count,
                    "push_token": existing.push_token,
                    "location": existing.location,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
        self._profiles[profile.identity] = profile
        return profile

    async def set_push_token(
        self, identity: Identity, token: Optional[str]
    ) -> Optional[Profile]:
        """Overwrite only the push token."""
        return self._update(identity, push_token=token)

    async def set_location(
        self, identity: Identity, location: GeoPoint
    ) -> Optional[Profile]:
        """Overwrite only the location."""
        return self._update(identity, location=location)

    async def clear_push_token(self, identity: Identity, token: str) -> bool:
        """Clear the push token if it still equals ``token``."""
        profile = self._profiles.get(identity)
        if profile is None or profile.push_token != token:
            return False
        self._profiles[identity] = profile.model_copy(update={"push_token": None})
        return True

    async def increment_counter(self, identity: Identity, field: CounterField) -> None:
        """Increment a counter by 1."""
        profile = self._profiles.get(identity)
        if profile:
            value = getattr(profile, field.value) + 1
            self._profiles[identity] = profile.model_copy(update={field.value: value})

    async def decrement_counter(self, identity: Identity, field: CounterField) -> None:
        """Decrement a counter by 1 (minimum 0)."""
        profile = self._profiles.get(identity)
        if profile:
            value = max(0, getattr(profile, field.value) - 1)
            self._profiles[identity] = profile.model_copy(update={field.value: value})

    def _update(self, identity: Identity, **fields: object) -> Optional[Profile]:
        profile = self._profiles.get(identity)
        if profile is None:
            return None
        fields["updated_at"] = datetime.now(timezone.utc)
        self._profiles[identity] = profile.model_copy(update=fields)
        return self._profiles[identity]
