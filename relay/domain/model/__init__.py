"""Domain models."""

from relay.domain.model.follow import Follow
from relay.domain.model.message import Message
from relay.domain.model.profile import Profile

__all__ = ["Follow", "Message", "Profile"]
