"""PostgreSQL implementation of Follow repository."""

from typing import Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.model import Follow
from relay.domain.repository import FollowRepository, ProfileRepository
from relay.domain.value import CounterField, Identity
from relay.persistence.mappers import follow_to_dict, row_to_follow
from relay.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository.

    Edge and counter writes share the session transaction and are
    committed together.
    """

    def __init__(
        self, session: AsyncSession, profile_repository: ProfileRepository
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            profile_repository: Profile repository bound to the same session
        """
        self.session = session
        self.profile_repository = profile_repository

    async def find(
        self, follower_id: Identity, following_id: Identity
    ) -> Optional[Follow]:
        """Find the edge for an ordered pair."""
        stmt = select(follows_table).where(
            and_(
                follows_table.c.follower_id == follower_id.root,
                follows_table.c.following_id == following_id.root,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_follow(dict(row)) if row else None

    async def add(self, follow: Follow) -> Follow:
        """Create an edge and increment both counters."""
        # Savepoint keeps the session usable if the unique constraint fires
        async with self.session.begin_nested():
            await self.session.execute(
                insert(follows_table).values(**follow_to_dict(follow))
            )
        await self.profile_repository.increment_counter(
            follow.follower_id, CounterField.FOLLOWING
        )
        await self.profile_repository.increment_counter(
            follow.following_id, CounterField.FOLLOWERS
        )
        await self.session.commit()
        return follow

    async def remove(self, follower_id: Identity, following_id: Identity) -> bool:
        """Delete an edge and decrement both counters (clamped at 0)."""
        stmt = delete(follows_table).where(
            and_(
                follows_table.c.follower_id == follower_id.root,
                follows_table.c.following_id == following_id.root,
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            return False

        await self.profile_repository.decrement_counter(
            follower_id, CounterField.FOLLOWING
        )
        await self.profile_repository.decrement_counter(
            following_id, CounterField.FOLLOWERS
        )
        await self.session.commit()
        return True

    async def find_followers(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges pointing at ``identity``, newest first."""
        stmt = (
            select(follows_table)
            .where(follows_table.c.following_id == identity.root)
            .order_by(follows_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(dict(row)) for row in result.mappings().all()]

    async def find_following(self, identity: Identity, limit: int) -> list[Follow]:
        """Edges starting at ``identity``, newest first."""
        stmt = (
            select(follows_table)
            .where(follows_table.c.follower_id == identity.root)
            .order_by(follows_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(dict(row)) for row in result.mappings().all()]
