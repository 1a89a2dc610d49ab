"""스레드 답글 조회

conversations.replies로 스레드 전체를 가져와 요청자에게 보여줍니다.
"""

import logging

from slack_sdk.errors import SlackApiError

logger = logging.getLogger(__name__)

NO_REPLIES_MESSAGE = "Thread has no replies."
FETCH_FAILED_MESSAGE = "Could not fetch thread replies: {error}"


def format_reply(message: dict) -> str:
    """답글 한 건을 "`ts` <@user>: text" 형태로 포맷"""
    ts = message.get("ts", "?")
    user = message.get("user")
    author = f"<@{user}>" if user else message.get("username") or message.get("bot_id") or "unknown"
    text = message.get("text") or ""
    return f"`{ts}` {author}: {text}"


async def fetch_replies(client, channel: str, ts: str) -> list[dict]:
    """스레드의 모든 메시지 조회 (커서 페이지네이션)"""
    messages: list[dict] = []
    cursor = None
    while True:
        kwargs = {"channel": channel, "ts": ts}
        if cursor:
            kwargs["cursor"] = cursor
        response = await client.conversations_replies(**kwargs)
        messages.extend(response.get("messages") or [])
        cursor = (response.get("response_metadata") or {}).get("next_cursor")
        if not cursor:
            return messages


async def get_thread_replies(account, conversation, ts: str) -> list[dict]:
    """스레드 답글을 조회해 시스템 메시지로 보여줌

    Returns:
        조회한 메시지 목록 (실패 시 빈 리스트)
    """
    try:
        replies = await fetch_replies(account.client, conversation.id, ts)
    except SlackApiError as e:
        error = e.response.get("error") or str(e)
        logger.error(f"스레드 답글 조회 실패: channel={conversation.id}, ts={ts}, error={error}")
        await account.writer.write(conversation, FETCH_FAILED_MESSAGE.format(error=error))
        return []

    if not replies:
        await account.writer.write(conversation, NO_REPLIES_MESSAGE)
        return []

    logger.info(f"스레드 답글 {len(replies)}건 조회: channel={conversation.id}, ts={ts}")
    await account.writer.write_long(conversation, "\n".join(format_reply(m) for m in replies))
    return replies
