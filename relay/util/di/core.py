"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from relay.config import MessagingSettings, Settings
from relay.domain.service import PresenceDirectory
from relay.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_messaging_settings(self, settings: Settings) -> MessagingSettings:
        """Provide messaging settings."""
        return settings.messaging


class ProdPresenceProvider(ProviderBase):
    """Presence directory provider.

    One directory per process; every connection and request shares it.
    """

    @provide(scope=Scope.APP)
    def get_presence_directory(self) -> PresenceDirectory:
        """Provide the process-wide presence directory."""
        return PresenceDirectory()
