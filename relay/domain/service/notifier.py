"""Push notifier contract."""

from relay.domain.value import PushNotification, PushResult


class PushNotifier:
    """Best-effort push notification delivery to a device token.

    Implementations never raise for delivery problems; they report them
    through the returned PushResult.
    """

    async def send(self, token: str, notification: PushNotification) -> PushResult:
        """Deliver one notification.

        Args:
            token: Device push token
            notification: Notification content

        Returns:
            OK, TOKEN_INVALID (token permanently dead) or ERROR
        """
        raise NotImplementedError
