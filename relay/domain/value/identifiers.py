"""Strongly typed identifiers for relay domain entities.

Using NewType for strong typing prevents mixing up different entity IDs.
"""

from typing import NewType
from uuid import UUID

ProfileId = NewType("ProfileId", UUID)
MessageId = NewType("MessageId", UUID)
FollowId = NewType("FollowId", UUID)

# Transient handle for a live realtime connection (never persisted)
ConnectionId = NewType("ConnectionId", str)
