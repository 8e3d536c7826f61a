"""Unit tests for the Expo push client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from relay.adapter.expo import ExpoPushNotifier
from relay.adapter.expo.client import (
    ExpoPushError,
    build_message,
    is_expo_push_token,
    parse_ticket,
)
from relay.domain.value import PushNotification, PushResult

PUSH_URL = "https://exp.host/--/api/v2/push/send"
TOKEN = "ExponentPushToken[xxxxxxxxxxxxxxxxxxxxxx]"
NOTIFICATION = PushNotification(
    title="Alice",
    body="hi",
    data={"type": "message", "senderId": "auth0|alice", "messageId": "m1"},
)


def _patched_client(response: httpx.Response | None = None, error: Exception | None = None):
    client = AsyncMock()
    if error is not None:
        client.post.side_effect = error
    else:
        client.post.return_value = response
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = client
    return patch("relay.adapter.expo.client.httpx.AsyncClient", factory), client


def _response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(
        status_code, json=payload, request=httpx.Request("POST", PUSH_URL)
    )


class TestTokenShape:
    """Tests for is_expo_push_token."""

    @pytest.mark.parametrize(
        "token", ["ExponentPushToken[abc]", "ExpoPushToken[abc]"]
    )
    def test_accepts_expo_tokens(self, token):
        assert is_expo_push_token(token)

    @pytest.mark.parametrize("token", ["", "abc", "ExponentPushToken[]", "fcm:abc"])
    def test_rejects_other_tokens(self, token):
        assert not is_expo_push_token(token)


class TestParseTicket:
    """Tests for parse_ticket."""

    def test_ok_ticket(self):
        assert parse_ticket({"data": {"status": "ok", "id": "t1"}}) is PushResult.OK

    def test_ok_ticket_in_list(self):
        assert parse_ticket({"data": [{"status": "ok", "id": "t1"}]}) is PushResult.OK

    def test_device_not_registered_is_token_invalid(self):
        payload = {
            "data": {
                "status": "error",
                "message": "not a registered push notification recipient",
                "details": {"error": "DeviceNotRegistered"},
            }
        }

        assert parse_ticket(payload) is PushResult.TOKEN_INVALID

    def test_other_ticket_error_is_error(self):
        payload = {"data": {"status": "error", "details": {"error": "MessageRateExceeded"}}}

        assert parse_ticket(payload) is PushResult.ERROR

    def test_request_level_errors_are_error(self):
        payload = {"errors": [{"code": "PUSH_TOO_MANY_EXPERIENCE_IDS"}]}

        assert parse_ticket(payload) is PushResult.ERROR

    @pytest.mark.parametrize("payload", [[], {"data": []}, {"data": {"id": "x"}}])
    def test_malformed_response_raises(self, payload):
        with pytest.raises(ExpoPushError):
            parse_ticket(payload)


class TestBuildMessage:
    """Tests for build_message."""

    def test_includes_image_when_present(self):
        notification = NOTIFICATION.model_copy(update={"image_url": "https://x/a.png"})

        message = build_message(TOKEN, notification)

        assert message["to"] == TOKEN
        assert message["title"] == "Alice"
        assert message["data"]["senderId"] == "auth0|alice"
        assert message["richContent"] == {"image": "https://x/a.png"}

    def test_omits_image_when_absent(self):
        assert "richContent" not in build_message(TOKEN, NOTIFICATION)


class TestExpoPushNotifier:
    """Tests for ExpoPushNotifier.send."""

    @pytest.mark.asyncio
    async def test_ok_ticket(self):
        notifier = ExpoPushNotifier(PUSH_URL, access_token="secret")
        patcher, client = _patched_client(
            _response(200, {"data": {"status": "ok", "id": "t1"}})
        )

        with patcher:
            result = await notifier.send(TOKEN, NOTIFICATION)

        assert result is PushResult.OK
        args, kwargs = client.post.call_args
        assert args[0] == PUSH_URL
        assert kwargs["json"]["to"] == TOKEN
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_dead_device(self):
        notifier = ExpoPushNotifier(PUSH_URL)
        patcher, _ = _patched_client(
            _response(
                200,
                {"data": {"status": "error", "details": {"error": "DeviceNotRegistered"}}},
            )
        )

        with patcher:
            result = await notifier.send(TOKEN, NOTIFICATION)

        assert result is PushResult.TOKEN_INVALID

    @pytest.mark.asyncio
    async def test_malformed_token_is_invalid_without_request(self):
        notifier = ExpoPushNotifier(PUSH_URL)
        patcher, client = _patched_client(_response(200, {}))

        with patcher:
            result = await notifier.send("not-a-token", NOTIFICATION)

        assert result is PushResult.TOKEN_INVALID
        client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_server_error_is_error(self):
        notifier = ExpoPushNotifier(PUSH_URL)
        patcher, _ = _patched_client(_response(503, {"errors": []}))

        with patcher:
            result = await notifier.send(TOKEN, NOTIFICATION)

        assert result is PushResult.ERROR

    @pytest.mark.asyncio
    async def test_network_error_is_error(self):
        notifier = ExpoPushNotifier(PUSH_URL, timeout_seconds=0.1)
        patcher, _ = _patched_client(error=httpx.ConnectTimeout("timed out"))

        with patcher:
            result = await notifier.send(TOKEN, NOTIFICATION)

        assert result is PushResult.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_body_is_error(self):
        notifier = ExpoPushNotifier(PUSH_URL)
        patcher, _ = _patched_client(_response(200, {"data": []}))

        with patcher:
            result = await notifier.send(TOKEN, NOTIFICATION)

        assert result is PushResult.ERROR
