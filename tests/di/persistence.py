"""Mock persistence providers for testing."""

from dishka import Scope, provide

from relay.domain.repository import (
    FollowRepository,
    MessageRepository,
    ProfileRepository,
)
from relay.persistence.repository.inmemory import (
    InMemoryFollowRepository,
    InMemoryMessageRepository,
    InMemoryProfileRepository,
)
from relay.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope so state survives across the per-event REQUEST scopes of the
    realtime gateway. Each test builds its own container, so tests stay
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_profile_repository(self) -> ProfileRepository:
        """Provide in-memory profile repository."""
        return InMemoryProfileRepository()

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        """Provide in-memory message repository."""
        return InMemoryMessageRepository()

    @provide(scope=Scope.APP)
    def get_follow_repository(
        self, profile_repository: ProfileRepository
    ) -> FollowRepository:
        """Provide in-memory follow repository."""
        return InMemoryFollowRepository(profile_repository)
