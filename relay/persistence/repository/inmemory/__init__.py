"""In-memory repository implementations for testing."""

from .follow import InMemoryFollowRepository
from .message import InMemoryMessageRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryFollowRepository",
    "InMemoryMessageRepository",
    "InMemoryProfileRepository",
]
