"""Expo push notification client.

Sends one notification per call to the Expo push API:
https://docs.expo.dev/push-notifications/sending-notifications/

Expo answers a single-message request with a push ticket. A ticket with
``details.error == "DeviceNotRegistered"`` means the token is dead and
should be forgotten; every other failure is transient from our side.
"""

import re
from dataclasses import dataclass, field
from typing import Any

import httpx
import logfire

from relay.adapter.error import ProviderError
from relay.domain.service.notifier import PushNotifier
from relay.domain.value import PushNotification, PushResult

_TOKEN_PATTERN = re.compile(r"^(Exponent|Expo)PushToken\[.+\]$")

# Ticket errors that mean the token will never work again
_DEAD_TOKEN_ERRORS = {"DeviceNotRegistered"}


class ExpoPushError(ProviderError):
    """Malformed or unexpected response from the Expo push API."""

    pass


def is_expo_push_token(token: str) -> bool:
    """Whether ``token`` has the shape of an Expo push token."""
    return bool(_TOKEN_PATTERN.match(token))


def build_message(token: str, notification: PushNotification) -> dict[str, Any]:
    """Build the Expo message body for one notification."""
    message: dict[str, Any] = {
        "to": token,
        "title": notification.title,
        "body": notification.body,
        "sound": "default",
        "data": dict(notification.data),
    }
    if notification.image_url:
        message["richContent"] = {"image": notification.image_url}
    return message


def parse_ticket(payload: Any) -> PushResult:
    """Map an Expo push response body to a PushResult.

    Raises:
        ExpoPushError: If the body is not a push ticket response
    """
    if not isinstance(payload, dict):
        raise ExpoPushError("Push response is not an object")

    if payload.get("errors"):
        # Request-level errors (bad credentials, malformed request)
        return PushResult.ERROR

    ticket = payload.get("data")
    if isinstance(ticket, list):
        if len(ticket) != 1:
            raise ExpoPushError(f"Expected one push ticket, got {len(ticket)}")
        ticket = ticket[0]
    if not isinstance(ticket, dict) or "status" not in ticket:
        raise ExpoPushError("Push response has no ticket")

    if ticket["status"] == "ok":
        return PushResult.OK

    details = ticket.get("details") or {}
    if details.get("error") in _DEAD_TOKEN_ERRORS:
        return PushResult.TOKEN_INVALID
    return PushResult.ERROR


class ExpoPushNotifier(PushNotifier):
    """Push notifier backed by the Expo push service."""

    def __init__(
        self,
        push_url: str,
        access_token: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize Expo push notifier.

        Args:
            push_url: Expo push endpoint
            access_token: Optional Expo access token
            timeout_seconds: Per-request timeout
        """
        self.push_url = push_url
        self.access_token = access_token
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def send(self, token: str, notification: PushNotification) -> PushResult:
        """Send one notification through Expo."""
        if not is_expo_push_token(token):
            logfire.warn("Malformed push token", token_prefix=token[:16])
            return PushResult.TOKEN_INVALID

        with logfire.span("expo_push.send", token_prefix=token[:24]):
            try:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(
                        self.push_url,
                        json=build_message(token, notification),
                        headers=self._headers(),
                    )
                if response.status_code >= 500:
                    logfire.warn(
                        "Expo push service error", status_code=response.status_code
                    )
                    return PushResult.ERROR
                result = parse_ticket(response.json())
            except httpx.HTTPError as e:
                logfire.warn("Expo push request failed", error=str(e))
                return PushResult.ERROR
            except (ValueError, ExpoPushError) as e:
                logfire.warn("Unexpected Expo push response", error=str(e))
                return PushResult.ERROR

            if result is PushResult.TOKEN_INVALID:
                logfire.info("Expo reported dead push token", token_prefix=token[:24])
            elif result is PushResult.ERROR:
                logfire.warn(
                    "Expo push rejected",
                    status_code=response.status_code,
                    body=response.text[:500],
                )
            return result


class NullPushNotifier(PushNotifier):
    """No-op notifier used when push notifications are disabled."""

    async def send(self, token: str, notification: PushNotification) -> PushResult:
        """Drop the notification while recording a debug log."""
        logfire.debug("Push notifications disabled; dropping push", token_prefix=token[:8])
        return PushResult.ERROR


@dataclass
class SentPush:
    """One notification captured by MockPushNotifier."""

    token: str
    notification: PushNotification


@dataclass
class MockPushNotifier(PushNotifier):
    """Mock notifier for development and testing.

    Records every send. Tokens in ``invalid_tokens`` report TOKEN_INVALID,
    tokens in ``failing_tokens`` report ERROR.
    """

    invalid_tokens: set[str] = field(default_factory=set)
    failing_tokens: set[str] = field(default_factory=set)
    sent: list[SentPush] = field(default_factory=list)

    async def send(self, token: str, notification: PushNotification) -> PushResult:
        """Record the notification and report the configured result."""
        self.sent.append(SentPush(token=token, notification=notification))
        if token in self.invalid_tokens:
            return PushResult.TOKEN_INVALID
        if token in self.failing_tokens:
            return PushResult.ERROR
        return PushResult.OK

    def sent_to(self, token: str) -> list[PushNotification]:
        """Notifications sent to ``token``."""
        return [push.notification for push in self.sent if push.token == token]
