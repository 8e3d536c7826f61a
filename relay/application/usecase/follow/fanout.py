"""Realtime fan-out of follow graph changes.

Runs after the edge write has been committed.
"""

from typing import Optional

import logfire

from relay.domain.service import Connection, PresenceDirectory
from relay.domain.value import FollowOutcome, Identity

from .follow_user import FollowResponse

_ACK_EVENTS = {
    FollowOutcome.FOLLOWED: "followSuccess",
    FollowOutcome.ALREADY_FOLLOWING: "followSuccess",
    FollowOutcome.UNFOLLOWED: "unfollowSuccess",
    FollowOutcome.NOT_FOLLOWING: "unfollowSuccess",
}

_ACTIONS = {
    FollowOutcome.FOLLOWED: "follow",
    FollowOutcome.UNFOLLOWED: "unfollow",
}


class FollowFanOut:
    """Tells both parties about a follow/unfollow result."""

    def __init__(self, presence: PresenceDirectory) -> None:
        """Initialize fan-out.

        Args:
            presence: Process-wide presence directory
        """
        self.presence = presence

    async def announce(
        self, response: FollowResponse, source: Optional[Connection] = None
    ) -> None:
        """Acknowledge the source and update the target.

        Args:
            response: Result of the follow/unfollow use case
            source: Connection the request came in on; defaults to the
                follower's live connection, if any
        """
        if source is None:
            source = self.presence.resolve(Identity(response.follower_id))

        if source is not None:
            await self._emit(
                source,
                _ACK_EVENTS[response.outcome],
                {
                    "status": response.outcome.value,
                    "fromAuth0Id": response.follower_id,
                    "toAuth0Id": response.following_id,
                    "followingCount": response.follower_following_count,
                    "targetFollowersCount": response.following_followers_count,
                },
            )

        if not response.outcome.mutated:
            return

        target = self.presence.resolve(Identity(response.following_id))
        if target is not None:
            await self._emit(
                target,
                "followUpdate",
                {
                    "followerId": response.follower_id,
                    "targetId": response.following_id,
                    "action": _ACTIONS[response.outcome],
                    "followersCount": response.following_followers_count,
                },
            )

    @staticmethod
    async def _emit(connection: Connection, event: str, data: dict) -> None:
        try:
            await connection.emit(event, data)
        except Exception as e:
            logfire.warn(
                "Follow fan-out failed",
                event=event,
                connection=connection.connection_id,
                error=str(e),
            )
