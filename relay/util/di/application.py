"""Application layer DI providers."""

from dishka import Scope, provide

from relay.application.usecase.follow import (
    FollowFanOut,
    FollowUserUseCase,
    ListFollowsUseCase,
    UnfollowUserUseCase,
)
from relay.application.usecase.message import (
    GetConversationUseCase,
    SendMessageUseCase,
)
from relay.application.usecase.profile import (
    FindNearbyUseCase,
    GetProfileUseCase,
    SetPushTokenUseCase,
    UpdateLocationUseCase,
    UpsertProfileUseCase,
)
from relay.config import MessagingSettings, Settings
from relay.domain.service import (
    FollowService,
    MessageService,
    PresenceDirectory,
    ProfileService,
    PushNotifier,
)
from relay.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Message use cases
    @provide(scope=Scope.REQUEST)
    def get_send_message_use_case(
        self,
        message_service: MessageService,
        profile_service: ProfileService,
        presence: PresenceDirectory,
        notifier: PushNotifier,
        messaging: MessagingSettings,
    ) -> SendMessageUseCase:
        """Provide send message use case."""
        return SendMessageUseCase(
            message_service=message_service,
            profile_service=profile_service,
            presence=presence,
            notifier=notifier,
            push_when_online=messaging.push_when_online,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_conversation_use_case(
        self, message_service: MessageService, messaging: MessagingSettings
    ) -> GetConversationUseCase:
        """Provide get conversation use case."""
        return GetConversationUseCase(
            message_service=message_service,
            default_page_size=messaging.history_page_size,
            max_page_size=messaging.history_max_page_size,
        )

    # Follow use cases
    @provide(scope=Scope.REQUEST)
    def get_follow_user_use_case(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> FollowUserUseCase:
        """Provide follow user use case."""
        return FollowUserUseCase(
            follow_service=follow_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_unfollow_user_use_case(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> UnfollowUserUseCase:
        """Provide unfollow user use case."""
        return UnfollowUserUseCase(
            follow_service=follow_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_follows_use_case(
        self, follow_service: FollowService, profile_service: ProfileService
    ) -> ListFollowsUseCase:
        """Provide list follows use case."""
        return ListFollowsUseCase(
            follow_service=follow_service, profile_service=profile_service
        )

    @provide(scope=Scope.APP)
    def get_follow_fan_out(self, presence: PresenceDirectory) -> FollowFanOut:
        """Provide follow fan-out."""
        return FollowFanOut(presence=presence)

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, profile_service: ProfileService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_upsert_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpsertProfileUseCase:
        """Provide upsert profile use case."""
        return UpsertProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_set_push_token_use_case(
        self, profile_service: ProfileService
    ) -> SetPushTokenUseCase:
        """Provide set push token use case."""
        return SetPushTokenUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_update_location_use_case(
        self, profile_service: ProfileService
    ) -> UpdateLocationUseCase:
        """Provide update location use case."""
        return UpdateLocationUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_find_nearby_use_case(
        self, profile_service: ProfileService, settings: Settings
    ) -> FindNearbyUseCase:
        """Provide find nearby use case."""
        return FindNearbyUseCase(
            profile_service=profile_service,
            default_radius=settings.geo.default_radius,
            max_radius=settings.geo.max_radius,
        )
