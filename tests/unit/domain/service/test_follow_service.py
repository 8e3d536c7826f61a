"""Unit tests for FollowService."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from relay.domain.error import ProfileNotFoundError, SelfFollowError
from relay.domain.repository import FollowRepository, ProfileRepository
from relay.domain.service import FollowService
from relay.domain.value import CounterField, FollowOutcome, Identity
from tests.conftest import make_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

ALICE = Identity("auth0|alice")
BOB = Identity("auth0|bob")


async def _seed(unit_env, *identities: Identity) -> ProfileRepository:
    profile_repo = await unit_env.get(ProfileRepository)
    for identity in identities:
        await profile_repo.save(make_profile(identity.root))
    return profile_repo


async def _counters(profile_repo: ProfileRepository, identity: Identity) -> tuple[int, int]:
    profile = await profile_repo.find_by_identity(identity)
    return profile.followers_count, profile.following_count


class TestFollow:
    """Tests for follow."""

    @pytest.mark.asyncio
    async def test_follow_creates_edge_and_increments_counters(self, unit_env):
        profile_repo = await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)
        follow_repo = await unit_env.get(FollowRepository)

        outcome = await follow_service.follow(ALICE, BOB)

        assert outcome is FollowOutcome.FOLLOWED
        assert await follow_repo.find(ALICE, BOB) is not None
        assert await _counters(profile_repo, ALICE) == (0, 1)
        assert await _counters(profile_repo, BOB) == (1, 0)

    @pytest.mark.asyncio
    async def test_follow_twice_is_already_following(self, unit_env):
        """Second follow changes nothing."""
        profile_repo = await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)
        follow_repo = await unit_env.get(FollowRepository)

        await follow_service.follow(ALICE, BOB)
        outcome = await follow_service.follow(ALICE, BOB)

        assert outcome is FollowOutcome.ALREADY_FOLLOWING
        assert len(follow_repo) == 1
        assert await _counters(profile_repo, ALICE) == (0, 1)
        assert await _counters(profile_repo, BOB) == (1, 0)

    @pytest.mark.asyncio
    async def test_follow_self_raises(self, unit_env):
        await _seed(unit_env, ALICE)
        follow_service = await unit_env.get(FollowService)
        follow_repo = await unit_env.get(FollowRepository)

        with pytest.raises(SelfFollowError, match="cannot follow yourself"):
            await follow_service.follow(ALICE, ALICE)

        assert len(follow_repo) == 0

    @pytest.mark.asyncio
    async def test_follow_missing_target_raises(self, unit_env):
        await _seed(unit_env, ALICE)
        follow_service = await unit_env.get(FollowService)

        with pytest.raises(ProfileNotFoundError, match="Profile not found"):
            await follow_service.follow(ALICE, BOB)

    @pytest.mark.asyncio
    async def test_lost_race_reports_already_following(self, unit_env):
        """A duplicate insert (concurrent follow) is not an error."""
        await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)
        follow_repo = await unit_env.get(FollowRepository)

        await follow_service.follow(ALICE, BOB)

        # The pre-check misses the edge another request just wrote
        with (
            patch.object(follow_repo, "find", AsyncMock(return_value=None)),
            patch.object(
                follow_repo,
                "add",
                AsyncMock(side_effect=IntegrityError("duplicate", None, Exception())),
            ),
        ):
            outcome = await follow_service.follow(ALICE, BOB)

        assert outcome is FollowOutcome.ALREADY_FOLLOWING
        assert len(follow_repo) == 1


class TestUnfollow:
    """Tests for unfollow."""

    @pytest.mark.asyncio
    async def test_follow_then_unfollow_restores_counters(self, unit_env):
        profile_repo = await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)

        before = (await _counters(profile_repo, ALICE), await _counters(profile_repo, BOB))
        await follow_service.follow(ALICE, BOB)
        outcome = await follow_service.unfollow(ALICE, BOB)
        after = (await _counters(profile_repo, ALICE), await _counters(profile_repo, BOB))

        assert outcome is FollowOutcome.UNFOLLOWED
        assert before == after

    @pytest.mark.asyncio
    async def test_unfollow_without_edge_is_not_following(self, unit_env):
        profile_repo = await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)

        outcome = await follow_service.unfollow(ALICE, BOB)

        assert outcome is FollowOutcome.NOT_FOLLOWING
        assert await _counters(profile_repo, BOB) == (0, 0)

    @pytest.mark.asyncio
    async def test_unfollow_self_raises(self, unit_env):
        await _seed(unit_env, ALICE)
        follow_service = await unit_env.get(FollowService)

        with pytest.raises(SelfFollowError):
            await follow_service.unfollow(ALICE, ALICE)

    @pytest.mark.asyncio
    async def test_counters_never_negative(self, unit_env):
        """Any sequence of follow/unfollow keeps counters at zero or above."""
        carol = Identity("auth0|carol")
        profile_repo = await _seed(unit_env, ALICE, BOB, carol)
        follow_service = await unit_env.get(FollowService)

        sequence = [
            ("unfollow", ALICE, BOB),
            ("follow", ALICE, BOB),
            ("unfollow", ALICE, BOB),
            ("unfollow", ALICE, BOB),
            ("follow", carol, BOB),
            ("follow", carol, BOB),
            ("unfollow", BOB, carol),
            ("unfollow", carol, BOB),
            ("unfollow", carol, BOB),
        ]
        for action, source, target in sequence:
            if action == "follow":
                await follow_service.follow(source, target)
            else:
                await follow_service.unfollow(source, target)

            for identity in (ALICE, BOB, carol):
                followers, following = await _counters(profile_repo, identity)
                assert followers >= 0
                assert following >= 0

        for identity in (ALICE, BOB, carol):
            assert await _counters(profile_repo, identity) == (0, 0)

    @pytest.mark.asyncio
    async def test_decrement_clamps_drifted_counter(self, unit_env):
        """A counter already at zero stays at zero when its edge is removed."""
        profile_repo = await _seed(unit_env, ALICE, BOB)
        follow_service = await unit_env.get(FollowService)

        await follow_service.follow(ALICE, BOB)
        # Simulate drift: counter lost its increment
        await profile_repo.decrement_counter(BOB, CounterField.FOLLOWERS)
        await follow_service.unfollow(ALICE, BOB)

        assert await _counters(profile_repo, BOB) == (0, 0)


class TestListing:
    """Tests for followers/following listings."""

    @pytest.mark.asyncio
    async def test_lists_most_recent_first(self, unit_env):
        carol = Identity("auth0|carol")
        await _seed(unit_env, ALICE, BOB, carol)
        follow_service = await unit_env.get(FollowService)

        await follow_service.follow(ALICE, carol)
        await follow_service.follow(BOB, carol)

        followers = await follow_service.list_followers(carol, limit=10)
        following = await follow_service.list_following(ALICE, limit=10)

        assert [p.identity for p in followers] == [BOB, ALICE]
        assert [p.identity for p in following] == [carol]
        assert await follow_service.is_following(ALICE, carol)
        assert not await follow_service.is_following(carol, ALICE)
