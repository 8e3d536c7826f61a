"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from relay.config import MessagingSettings
from relay.domain.repository import (
    FollowRepository,
    MessageRepository,
    ProfileRepository,
)
from relay.domain.service import FollowService, MessageService, ProfileService
from relay.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request and each realtime event gets fresh service instances.
    """

    scope = Scope.REQUEST

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_message_service(
        self, message_repository: MessageRepository, messaging: MessagingSettings
    ) -> MessageService:
        """Provide message domain service."""
        ttl = None
        if messaging.message_ttl_hours:
            ttl = timedelta(hours=messaging.message_ttl_hours)
        return MessageService(
            message_repository=message_repository,
            max_text_length=messaging.max_text_length,
            ttl=ttl,
        )

    @provide
    def get_follow_service(
        self, follow_repository: FollowRepository, profile_service: ProfileService
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            follow_repository=follow_repository, profile_service=profile_service
        )
