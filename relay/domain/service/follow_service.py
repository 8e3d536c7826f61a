"""Follow domain service."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from relay.domain.error import SelfFollowError
from relay.domain.model import Follow, Profile
from relay.domain.repository import FollowRepository
from relay.domain.value import FollowId, FollowOutcome, Identity

from .base import Service
from .profile_service import ProfileService


class FollowService(Service):
    """Domain service for the follow graph."""

    def __init__(
        self,
        follow_repository: FollowRepository,
        profile_service: ProfileService,
    ) -> None:
        """Initialize follow service.

        Args:
            follow_repository: Follow repository
            profile_service: Profile domain service
        """
        self.follow_repository = follow_repository
        self.profile_service = profile_service

    async def follow(
        self, follower_id: Identity, following_id: Identity
    ) -> FollowOutcome:
        """Make ``follower_id`` follow ``following_id``.

        Creates the edge and increments both counters in one batch write.
        Following someone already followed is a no-op.

        Returns:
            FOLLOWED or ALREADY_FOLLOWING

        Raises:
            SelfFollowError: If both identities are equal
            ProfileNotFoundError: If either profile is missing
        """
        with logfire.span(
            "follow", follower_id=follower_id.root, following_id=following_id.root
        ):
            await self._check_pair(follower_id, following_id)

            existing = await self.follow_repository.find(follower_id, following_id)
            if existing:
                logfire.info(
                    "Already following",
                    follower_id=follower_id.root,
                    following_id=following_id.root,
                )
                return FollowOutcome.ALREADY_FOLLOWING

            follow = Follow(
                id=FollowId(uuid4()),
                follower_id=follower_id,
                following_id=following_id,
            )
            try:
                await self.follow_repository.add(follow)
            except IntegrityError:
                # Lost a race with a concurrent follow of the same pair
                logfire.warn(
                    "Duplicate follow attempt",
                    follower_id=follower_id.root,
                    following_id=following_id.root,
                )
                return FollowOutcome.ALREADY_FOLLOWING

            return FollowOutcome.FOLLOWED

    async def unfollow(
        self, follower_id: Identity, following_id: Identity
    ) -> FollowOutcome:
        """Remove the edge ``follower_id`` -> ``following_id``.

        Deletes the edge and decrements both counters (never below zero)
        in one batch write.

        Returns:
            UNFOLLOWED or NOT_FOLLOWING

        Raises:
            SelfFollowError: If both identities are equal
            ProfileNotFoundError: If either profile is missing
        """
        with logfire.span(
            "unfollow", follower_id=follower_id.root, following_id=following_id.root
        ):
            await self._check_pair(follower_id, following_id)

            removed = await self.follow_repository.remove(follower_id, following_id)
            if not removed:
                logfire.info(
                    "Not following",
                    follower_id=follower_id.root,
                    following_id=following_id.root,
                )
                return FollowOutcome.NOT_FOLLOWING

            return FollowOutcome.UNFOLLOWED

    async def is_following(self, follower_id: Identity, following_id: Identity) -> bool:
        """Whether the edge exists."""
        return await self.follow_repository.find(follower_id, following_id) is not None

    async def list_followers(self, identity: Identity, limit: int) -> list[Profile]:
        """Profiles following ``identity``, most recent edge first."""
        edges = await self.follow_repository.find_followers(identity, limit)
        return await self._profiles_in_order([edge.follower_id for edge in edges])

    async def list_following(self, identity: Identity, limit: int) -> list[Profile]:
        """Profiles ``identity`` follows, most recent edge first."""
        edges = await self.follow_repository.find_following(identity, limit)
        return await self._profiles_in_order([edge.following_id for edge in edges])

    async def _check_pair(self, follower_id: Identity, following_id: Identity) -> None:
        if follower_id == following_id:
            logfire.warn("Self follow attempt", identity=follower_id.root)
            raise SelfFollowError(follower_id.root)
        await self.profile_service.get_by_identity(follower_id)
        await self.profile_service.get_by_identity(following_id)

    async def _profiles_in_order(self, identities: list[Identity]) -> list[Profile]:
        profiles = await self.profile_service.get_many(identities)
        by_identity = {profile.identity: profile for profile in profiles}
        return [by_identity[i] for i in identities if i in by_identity]
