"""Unit tests for MessageService."""

from datetime import timedelta

import pytest

from relay.domain.error import ValidationError
from relay.domain.repository import MessageRepository
from relay.domain.service import MessageService
from relay.domain.value import Identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = Identity("auth0|alice")
BOB = Identity("auth0|bob")


class TestCreateMessage:
    """Tests for create_message."""

    @pytest.mark.asyncio
    async def test_create_message_persists_with_timestamp(self, unit_env):
        message_service = await unit_env.get(MessageService)
        message_repo = await unit_env.get(MessageRepository)

        message = await message_service.create_message(ALICE, BOB, "hi")

        assert message.created_at is not None
        assert message.expires_at is None
        assert await message_repo.find_by_id(message.id) == message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   "])
    async def test_blank_text_is_rejected(self, unit_env, text):
        message_service = await unit_env.get(MessageService)
        message_repo = await unit_env.get(MessageRepository)

        with pytest.raises(ValidationError, match="must not be empty"):
            await message_service.create_message(ALICE, BOB, text)

        assert len(message_repo) == 0

    @pytest.mark.asyncio
    async def test_text_over_limit_is_rejected(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)
        message_service = MessageService(message_repo, max_text_length=10)

        with pytest.raises(ValidationError, match="at most 10"):
            await message_service.create_message(ALICE, BOB, "x" * 11)

    @pytest.mark.asyncio
    async def test_ttl_stamps_expiry(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)
        message_service = MessageService(message_repo, ttl=timedelta(hours=24))

        message = await message_service.create_message(ALICE, BOB, "hi")

        assert message.expires_at is not None


class TestConversation:
    """Tests for get_conversation."""

    @pytest.mark.asyncio
    async def test_conversation_covers_both_directions_newest_first(self, unit_env):
        message_service = await unit_env.get(MessageService)
        carol = Identity("auth0|carol")

        first = await message_service.create_message(ALICE, BOB, "one")
        second = await message_service.create_message(BOB, ALICE, "two")
        await message_service.create_message(ALICE, carol, "elsewhere")

        messages = await message_service.get_conversation(BOB, ALICE, limit=10)

        assert [m.id for m in messages] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_expired_messages_are_hidden(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)
        message_service = MessageService(message_repo, ttl=timedelta(seconds=-1))

        await message_service.create_message(ALICE, BOB, "gone")

        assert await message_service.get_conversation(ALICE, BOB, limit=10) == []
