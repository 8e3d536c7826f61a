"""Repository interfaces for the relay domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from relay.domain.repository.follow import FollowRepository
from relay.domain.repository.message import MessageRepository
from relay.domain.repository.profile import ProfileRepository

__all__ = [
    "FollowRepository",
    "MessageRepository",
    "ProfileRepository",
]
