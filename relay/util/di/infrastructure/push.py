"""Push notification infrastructure providers."""

from dishka import Scope, provide

from relay.adapter.expo import ExpoPushNotifier, NullPushNotifier
from relay.config import Settings
from relay.domain.service import PushNotifier
from relay.util.di.base import ProviderBase
from relay.util.error import ConfigurationError


class PushProvider(ProviderBase):
    """Push component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production push provider (Expo)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_push_notifier(self, settings: Settings) -> PushNotifier:
        """Provide push notifier.

        Returns:
            Expo notifier, or a no-op notifier when push is disabled

        Raises:
            ConfigurationError: If push is enabled without an endpoint
        """
        if not settings.push.enabled:
            return NullPushNotifier()

        if not settings.push.expo_push_url:
            raise ConfigurationError("Expo push URL must be configured")

        return ExpoPushNotifier(
            push_url=settings.push.expo_push_url,
            access_token=settings.push.access_token,
            timeout_seconds=settings.push.timeout_seconds,
        )
