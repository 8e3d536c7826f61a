"""Mock push providers for testing."""

from dishka import Scope, provide

from relay.adapter.expo import MockPushNotifier
from relay.domain.service import PushNotifier
from relay.util.di.infrastructure.push import PushProvider


class MockPushProvider(PushProvider):
    """Mock push provider recording every notification."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_push_notifier(self) -> PushNotifier:
        """Provide mock push notifier."""
        return MockPushNotifier()
