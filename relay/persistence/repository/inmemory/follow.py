"""In-memory follow repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from relay.domain.model import Follow
from relay.domain.repository import FollowRepository, ProfileRepository
from relay.domain.value import CounterField, Identity


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        self._follows: list[Follow] = []
        self.profile_repository = profile_repository

    async def find(
        self, follower_id: Identity, following_id: Identity
    ) -> Optional[Follow]:
        """Find the edge for an ordered pair."""
        for follow in self._follows:
            if follow.follower_id == follower_id and follow.following_id == following_id:
                return follow
        return None

    async def add(self, follow: Follow) -> Follow:
        """Create an edge and increment both counters.

        Raises:
            IntegrityError: If the edge already exists (duplicate)
        """
        if await self.find(follow.follower_id, follow.following_id):
            raise IntegrityError("Duplicate follow", None, Exception())

        self._follows.append(follow)
        await self.profile_repository.increment_counter(
            follow.follower_id, CounterField.FOLLOWING
        )
        await self.profile_repository.increment_counter(
            follow.following_id, CounterField.FOLLOWERS
        )
        return follow

    async def remove(self, follower_id: Identity, following_id: Identity) -> bool:
        """Delete an edge and decrement both counters (clamped at 0)."""
        for i, follow in enumerate(self._follows):
            if follow.follower_id == follower_id and follow.following_id == following_id:
                self._follows.pop(i)
                await self.profile_repository.decrement_counter(
                    follower_id, CounterField.FOLLOWING
                )
                await self.profile_repository.decrement_counter(
                    following_id, CounterField.FOLLOWERS
                )
                return True
        return False

    async def find_followers(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges pointing at ``identity``, newest first."""
        edges = [f for f in reversed(self._follows) if f.following_id == identity]
        return edges[:limit]

    async def find_following(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges starting at ``identity``, newest first."""
        edges = [f for f in reversed(self._follows) if f.follower_id == identity]
        return edges[:limit]

    def __len__(self) -> int:
        return len(self._follows)
