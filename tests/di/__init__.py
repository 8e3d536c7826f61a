"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .push import MockPushProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockPushProvider",
    "build_test_container",
]
