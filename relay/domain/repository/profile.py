"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from relay.domain.model import Profile
from relay.domain.value import CounterField, GeoPoint, Identity


class ProfileRepository(ABC):
    """Repository for Profile aggregate.

    Defines the contract for profile persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_identity(self, identity: Identity) -> Optional[Profile]:
        """Find a profile by identity.

        Args:
            identity: External identity

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_identities(
        self, identities: Sequence[Identity]
    ) -> list[Profile]:
        """Find profiles for several identities (batch query).

        Missing identities are skipped; order is unspecified.
        """
        pass

    @abstractmethod
    async def find_within_box(
        self, south_west: GeoPoint, north_east: GeoPoint
    ) -> list[Profile]:
        """Find profiles whose location lies inside a bounding box.

        When ``south_west.longitude > north_east.longitude`` the box crosses
        the antimeridian and covers both sides of it.

        Args:
            south_west: Lower-left corner
            north_east: Upper-right corner

        Returns:
            Candidate profiles (callers refine by exact distance)
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        On update only descriptive attributes are written. Counters change
        through increment_counter/decrement_counter, the push token through
        set_push_token/clear_push_token and the location through set_location.

        Args:
            profile: Profile to save

        Returns:
            The stored profile
        """
        pass

    @abstractmethod
    async def set_push_token(
        self, identity: Identity, token: Optional[str]
    ) -> Optional[Profile]:
        """Overwrite only the push token column.

        Returns:
            The updated profile, or None if no profile has the identity
        """
        pass

    @abstractmethod
    async def set_location(
        self, identity: Identity, location: GeoPoint
    ) -> Optional[Profile]:
        """Overwrite only the location columns.

        Returns:
            The updated profile, or None if no profile has the identity
        """
        pass

    @abstractmethod
    async def clear_push_token(self, identity: Identity, token: str) -> bool:
        """Clear the push token if it still equals ``token``.

        Args:
            identity: Profile identity
            token: Token reported invalid by the notifier

        Returns:
            True if a token was cleared
        """
        pass

    @abstractmethod
    async def increment_counter(self, identity: Identity, field: CounterField) -> None:
        """Atomically increment a counter by 1."""
        pass

    @abstractmethod
    async def decrement_counter(self, identity: Identity, field: CounterField) -> None:
        """Atomically decrement a counter by 1 (minimum 0)."""
        pass
