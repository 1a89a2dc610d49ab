"""thread/conversation.py 유닛 테스트"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from slackthread.thread.conversation import (
    Channel,
    ConversationStore,
    DirectMessage,
    OtherConversation,
    SendNotSupportedError,
)


def _make_client():
    client = MagicMock()
    client.chat_postMessage = AsyncMock(return_value={"ok": True, "ts": "1.1"})
    client.conversations_open = AsyncMock(return_value={"channel": {"id": "D999"}})
    client.conversations_info = AsyncMock()
    return client


class TestSend:
    """대화 유형별 전송 테스트"""

    @pytest.mark.asyncio
    async def test_channel_sends_by_channel_id(self):
        client = _make_client()
        conv = Channel("C123")

        await conv.send(client, "hi", thread_ts="1690000000.000100")

        client.chat_postMessage.assert_awaited_once_with(
            channel="C123", text="hi", thread_ts="1690000000.000100"
        )

    @pytest.mark.asyncio
    async def test_channel_uses_thread_marker_by_default(self):
        client = _make_client()
        conv = Channel("C123", thread_ts="1111.2222")

        await conv.send(client, "hi")

        client.chat_postMessage.assert_awaited_once_with(
            channel="C123", text="hi", thread_ts="1111.2222"
        )

    @pytest.mark.asyncio
    async def test_channel_without_thread(self):
        client = _make_client()

        await Channel("C123").send(client, "hi")

        client.chat_postMessage.assert_awaited_once_with(channel="C123", text="hi")

    @pytest.mark.asyncio
    async def test_direct_message_sends_by_user(self):
        client = _make_client()
        conv = DirectMessage("D123", user_id="U42")

        await conv.send(client, "hi", thread_ts="1.5")

        client.conversations_open.assert_awaited_once_with(users="U42")
        client.chat_postMessage.assert_awaited_once_with(
            channel="D999", text="hi", thread_ts="1.5"
        )

    @pytest.mark.asyncio
    async def test_other_is_not_supported(self):
        client = _make_client()

        with pytest.raises(SendNotSupportedError):
            await OtherConversation("G123").send(client, "hi")

        client.chat_postMessage.assert_not_called()


class TestConversationStore:
    """대화 저장소 테스트"""

    @pytest.mark.asyncio
    async def test_channel_id_without_lookup(self):
        client = _make_client()
        store = ConversationStore()

        conv = await store.resolve(client, "C123")

        assert isinstance(conv, Channel)
        client.conversations_info.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_object_for_same_id(self):
        client = _make_client()
        store = ConversationStore()

        first = await store.resolve(client, "C123")
        first.thread_ts = "1.1"
        second = await store.resolve(client, "C123")

        assert first is second
        assert second.thread_ts == "1.1"
        assert store.count() == 1

    @pytest.mark.asyncio
    async def test_im_becomes_direct_message(self):
        client = _make_client()
        client.conversations_info.return_value = {
            "channel": {"id": "D123", "is_im": True, "user": "U42"}
        }
        store = ConversationStore()

        conv = await store.resolve(client, "D123")

        assert isinstance(conv, DirectMessage)
        assert conv.user_id == "U42"

    @pytest.mark.asyncio
    async def test_mpim_becomes_other(self):
        client = _make_client()
        client.conversations_info.return_value = {
            "channel": {"id": "G123", "is_mpim": True}
        }

        conv = await ConversationStore().resolve(client, "G123")

        assert isinstance(conv, OtherConversation)

    @pytest.mark.asyncio
    async def test_private_channel_becomes_channel(self):
        client = _make_client()
        client.conversations_info.return_value = {
            "channel": {"id": "G456", "is_private": True}
        }

        conv = await ConversationStore().resolve(client, "G456")

        assert type(conv) is Channel
