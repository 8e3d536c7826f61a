"""Follow repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from relay.domain.model import Follow
from relay.domain.value import Identity


class FollowRepository(ABC):
    """Repository for Follow edges.

    Edge writes are batch writes: the edge and both endpoint counters
    change in one transaction, or not at all.
    """

    @abstractmethod
    async def find(
        self, follower_id: Identity, following_id: Identity
    ) -> Optional[Follow]:
        """Find the edge for an ordered pair."""
        pass

    @abstractmethod
    async def add(self, follow: Follow) -> Follow:
        """Create an edge and increment both counters.

        following_count of the follower and followers_count of the
        followed profile are incremented in the same transaction.

        Raises:
            IntegrityError: If the edge already exists (duplicate)
        """
        pass

    @abstractmethod
    async def remove(self, follower_id: Identity, following_id: Identity) -> bool:
        """Delete an edge and decrement both counters (clamped at 0).

        Returns:
            True if an edge was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def find_followers(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges pointing at ``identity``, newest first."""
        pass

    @abstractmethod
    async def find_following(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges starting at ``identity``, newest first."""
        pass
