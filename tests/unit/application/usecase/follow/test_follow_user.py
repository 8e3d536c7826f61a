"""Unit tests for follow use cases and fan-out."""

import pytest

from relay.application.usecase.follow import (
    FollowDirection,
    FollowFanOut,
    FollowRequest,
    FollowUserUseCase,
    ListFollowsRequest,
    ListFollowsUseCase,
    UnfollowUserUseCase,
)
from relay.domain.error import ProfileNotFoundError, SelfFollowError, ValidationError
from relay.domain.repository import ProfileRepository
from relay.domain.service import PresenceDirectory
from relay.domain.value import FollowOutcome
from tests.conftest import RecordingConnection, make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

FOLLOW = FollowRequest(follower_id="auth0|alice", following_id="auth0|bob")


async def _seed(unit_env) -> None:
    profile_repo = await unit_env.get(ProfileRepository)
    await profile_repo.save(make_profile("auth0|alice"))
    await profile_repo.save(make_profile("auth0|bob"))


class TestFollowUserUseCase:
    """Tests for FollowUserUseCase / UnfollowUserUseCase."""

    @pytest.mark.asyncio
    async def test_follow_returns_counters_after_write(self, unit_env):
        await _seed(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)

        response = await use_case.execute(FOLLOW)

        assert response.outcome is FollowOutcome.FOLLOWED
        assert response.follower_following_count == 1
        assert response.following_followers_count == 1

    @pytest.mark.asyncio
    async def test_second_follow_reports_unchanged_counters(self, unit_env):
        await _seed(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)

        await use_case.execute(FOLLOW)
        response = await use_case.execute(FOLLOW)

        assert response.outcome is FollowOutcome.ALREADY_FOLLOWING
        assert response.following_followers_count == 1

    @pytest.mark.asyncio
    async def test_unfollow_returns_counters_after_write(self, unit_env):
        await _seed(unit_env)
        follow = await unit_env.get(FollowUserUseCase)
        unfollow = await unit_env.get(UnfollowUserUseCase)

        await follow.execute(FOLLOW)
        response = await unfollow.execute(FOLLOW)

        assert response.outcome is FollowOutcome.UNFOLLOWED
        assert response.follower_following_count == 0
        assert response.following_followers_count == 0

    @pytest.mark.asyncio
    async def test_self_follow_raises(self, unit_env):
        await _seed(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)

        with pytest.raises(SelfFollowError):
            await use_case.execute(
                FollowRequest(follower_id="auth0|alice", following_id="auth0|alice")
            )

    @pytest.mark.asyncio
    async def test_empty_identity_raises_validation_error(self, unit_env):
        use_case = await unit_env.get(FollowUserUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                FollowRequest(follower_id="", following_id="auth0|bob")
            )

    @pytest.mark.asyncio
    async def test_overlong_identity_reports_length_limit(self, unit_env):
        use_case = await unit_env.get(FollowUserUseCase)

        with pytest.raises(ValidationError, match="at most 255 characters"):
            await use_case.execute(
                FollowRequest(follower_id="auth0|alice", following_id="x" * 300)
            )

    @pytest.mark.asyncio
    async def test_missing_profile_raises(self, unit_env):
        await _seed(unit_env)
        use_case = await unit_env.get(UnfollowUserUseCase)

        with pytest.raises(ProfileNotFoundError):
            await use_case.execute(
                FollowRequest(follower_id="auth0|alice", following_id="auth0|ghost")
            )


class TestFollowFanOut:
    """Tests for FollowFanOut."""

    @pytest.mark.asyncio
    async def test_follow_acks_source_and_updates_target(self, unit_env):
        await _seed(unit_env)
        presence = await unit_env.get(PresenceDirectory)
        fan_out = await unit_env.get(FollowFanOut)
        alice, bob = RecordingConnection("alice"), RecordingConnection("bob")
        presence.join("auth0|alice", alice)
        presence.join("auth0|bob", bob)
        use_case = await unit_env.get(FollowUserUseCase)

        await fan_out.announce(await use_case.execute(FOLLOW), source=alice)

        [ack] = alice.named("followSuccess")
        assert ack["status"] == "followed"
        assert ack["followingCount"] == 1
        assert bob.named("followUpdate") == [
            {
                "followerId": "auth0|alice",
                "targetId": "auth0|bob",
                "action": "follow",
                "followersCount": 1,
            }
        ]

    @pytest.mark.asyncio
    async def test_no_op_outcome_does_not_notify_target(self, unit_env):
        await _seed(unit_env)
        presence = await unit_env.get(PresenceDirectory)
        fan_out = await unit_env.get(FollowFanOut)
        alice, bob = RecordingConnection("alice"), RecordingConnection("bob")
        presence.join("auth0|alice", alice)
        presence.join("auth0|bob", bob)
        use_case = await unit_env.get(UnfollowUserUseCase)

        await fan_out.announce(await use_case.execute(FOLLOW), source=alice)

        [ack] = alice.named("unfollowSuccess")
        assert ack["status"] == "not_following"
        assert bob.events == []

    @pytest.mark.asyncio
    async def test_source_defaults_to_follower_presence(self, unit_env):
        """HTTP-originated follows still reach the follower's socket."""
        await _seed(unit_env)
        presence = await unit_env.get(PresenceDirectory)
        fan_out = await unit_env.get(FollowFanOut)
        alice = RecordingConnection("alice")
        presence.join("auth0|alice", alice)
        use_case = await unit_env.get(FollowUserUseCase)

        await fan_out.announce(await use_case.execute(FOLLOW))

        assert len(alice.named("followSuccess")) == 1

    @pytest.mark.asyncio
    async def test_dead_target_connection_is_ignored(self, unit_env):
        await _seed(unit_env)
        presence = await unit_env.get(PresenceDirectory)
        fan_out = await unit_env.get(FollowFanOut)
        alice = RecordingConnection("alice")
        presence.join("auth0|bob", RecordingConnection("bob", fail=True))
        use_case = await unit_env.get(FollowUserUseCase)

        await fan_out.announce(await use_case.execute(FOLLOW), source=alice)

        assert len(alice.named("followSuccess")) == 1


class TestListFollowsUseCase:
    """Tests for ListFollowsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_followers(self, unit_env):
        await _seed(unit_env)
        follow = await unit_env.get(FollowUserUseCase)
        list_follows = await unit_env.get(ListFollowsUseCase)

        await follow.execute(FOLLOW)
        response = await list_follows.execute(
            ListFollowsRequest(identity="auth0|bob", direction=FollowDirection.FOLLOWERS)
        )

        assert [p.identity for p in response.profiles] == ["auth0|alice"]

    @pytest.mark.asyncio
    async def test_unknown_profile_raises(self, unit_env):
        list_follows = await unit_env.get(ListFollowsUseCase)

        with pytest.raises(ProfileNotFoundError):
            await list_follows.execute(
                ListFollowsRequest(
                    identity="auth0|ghost", direction=FollowDirection.FOLLOWING
                )
            )
