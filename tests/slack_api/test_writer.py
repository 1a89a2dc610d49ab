"""slack/writer.py, slack/helpers.py 유닛 테스트"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from slack_sdk.errors import SlackApiError

from slackthread.slack.helpers import split_long_message
from slackthread.slack.writer import SystemMessageWriter
from slackthread.thread.conversation import Channel


class TestSplitLongMessage:
    def test_short_message_unchanged(self):
        assert split_long_message("hello") == ["hello"]

    def test_splits_on_lines_with_prefix(self):
        text = "\n".join(["a" * 10] * 5)

        chunks = split_long_message(text, max_length=25)

        assert chunks[0].startswith("(1/3)\n")
        assert chunks[-1].startswith("(3/3)\n")
        assert all(len(c.split("\n", 1)[1]) <= 25 for c in chunks)


class TestSystemMessageWriter:
    """ephemeral 시스템 메시지 테스트"""

    @pytest.mark.asyncio
    async def test_write_posts_ephemeral(self):
        client = MagicMock()
        client.chat_postEphemeral = AsyncMock(return_value={"ok": True})
        writer = SystemMessageWriter(client, "U1")

        assert await writer.write(Channel("C123"), "hi")

        client.chat_postEphemeral.assert_awaited_once_with(channel="C123", user="U1", text="hi")

    @pytest.mark.asyncio
    async def test_write_with_attachments(self):
        client = MagicMock()
        client.chat_postEphemeral = AsyncMock(return_value={"ok": True})
        writer = SystemMessageWriter(client, "U1")
        attachments = [{"color": "#abcdef", "text": "x"}]

        await writer.write(Channel("C123"), "hi", attachments=attachments)

        assert client.chat_postEphemeral.await_args.kwargs["attachments"] == attachments

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(self):
        client = MagicMock()
        client.chat_postEphemeral = AsyncMock(
            side_effect=SlackApiError("x", {"ok": False, "error": "channel_not_found"})
        )
        writer = SystemMessageWriter(client, "U1")

        assert not await writer.write(Channel("C123"), "hi")

    @pytest.mark.asyncio
    async def test_write_long_splits(self):
        client = MagicMock()
        client.chat_postEphemeral = AsyncMock(return_value={"ok": True})
        writer = SystemMessageWriter(client, "U1")
        text = "\n".join(["x" * 3000] * 3)

        await writer.write_long(Channel("C123"), text)

        assert client.chat_postEphemeral.await_count == 3
