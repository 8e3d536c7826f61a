"""Domain value objects for the relay."""

from relay.domain.value.identifiers import (
    ConnectionId,
    FollowId,
    MessageId,
    ProfileId,
)
from relay.domain.value.types import (
    CounterField,
    DeliveryPath,
    FollowOutcome,
    GeoPoint,
    Identity,
    PushNotification,
    PushResult,
)

__all__ = [
    # Identifiers
    "ConnectionId",
    "FollowId",
    "MessageId",
    "ProfileId",
    # Types
    "CounterField",
    "DeliveryPath",
    "FollowOutcome",
    "GeoPoint",
    "Identity",
    "PushNotification",
    "PushResult",
]
