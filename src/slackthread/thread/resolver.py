"""스레드 타임스탬프 해석 및 작업 실행

사용자가 입력한 ts 또는 시각 표현으로 스레드를 찾아
답글을 달거나(post) 답글 목록을 가져옵니다(get_replies).

ts가 아닌 입력은 해당 1초 구간의 conversations.history를 조회하고,
조회 결과 콜백에서 후보가 정확히 하나일 때만 작업을 재개합니다.
"""

import asyncio
import logging
from datetime import datetime
from functools import partial
from typing import Optional

from slack_sdk.errors import SlackApiError

from slackthread.thread.conversation import Conversation, SendNotSupportedError
from slackthread.thread.operation import PendingOperation, ThreadOp
from slackthread.thread.replies import get_thread_replies
from slackthread.thread.timestamp import (
    history_window,
    is_slack_ts,
    parse_time_str,
    thread_color,
)

logger = logging.getLogger(__name__)

PARSE_FAILED_MESSAGE = "Could not parse thread timestamp."
NOT_FOUND_MESSAGE = (
    "Thread not found. If the thread start date is not today, "
    "make sure you specify the date in the thread timestamp."
)
AMBIGUOUS_MESSAGE = (
    "Thread timestamp is ambiguous. "
    "Please use one of the following unambiguous thread IDs:"
)


# ── 작업 실행 ──────────────────────────────────────────────


async def thread_post(account, conversation: Conversation, ts: str, message: Optional[str]) -> None:
    """ts 스레드에 메시지 전송

    전송하는 동안만 thread marker를 ts로 바꾸고, 끝나면 원래 값으로 되돌립니다.
    같은 대화의 post는 post_lock으로 직렬화됩니다.
    """
    if not message:
        return

    async with conversation.post_lock:
        old_thread_ts = conversation.thread_ts
        conversation.thread_ts = ts
        try:
            await conversation.send(account.client, message, thread_ts=ts)
            logger.info(f"스레드 답글 전송: channel={conversation.id}, thread_ts={ts}")
        except SendNotSupportedError as e:
            logger.error(f"메시지를 전송할 수 없습니다 \"{message}\": {e}")
        except SlackApiError as e:
            logger.error(f"메시지 전송 실패 \"{message}\": {e.response.get('error') or e}")
        finally:
            conversation.thread_ts = old_thread_ts


async def _execute(account, op: PendingOperation, ts: str) -> None:
    """보류 작업을 ts 스레드에 대해 재개"""
    if op.op is ThreadOp.POST:
        await thread_post(account, op.conversation, ts, op.message)
    elif op.op is ThreadOp.GET_REPLIES:
        await get_thread_replies(account, op.conversation, ts)


# ── 조회 결과 처리 ──────────────────────────────────────────


def build_ambiguous_report(messages: list[dict]) -> tuple[str, list[dict]]:
    """후보 메시지 목록을 (텍스트, 색상 attachments)로 렌더링"""
    lines = [AMBIGUOUS_MESSAGE]
    attachments = []
    for entry in messages:
        ts = entry.get("ts")
        if not ts:
            continue
        text = entry.get("text")
        line = f"`{ts}` (\"{text if text is not None else 'NULL'}\")"
        lines.append(line)
        attachments.append({
            "color": f"#{thread_color(ts)}",
            "text": line,
            "fallback": line,
        })
    return "\n".join(lines), attachments


async def _resolve(account, op: PendingOperation, json: Optional[dict], error: Optional[str]) -> None:
    conversation = op.conversation
    messages = json.get("messages") if isinstance(json, dict) else None

    if messages is None or error:
        logger.error(f"스레드 조회 오류: {error or 'missing'}")
    if not isinstance(messages, list):
        messages = []

    if not messages:
        await account.writer.write(conversation, NOT_FOUND_MESSAGE)
        return

    if len(messages) > 1:
        text, attachments = build_ambiguous_report(messages)
        await account.writer.write(conversation, text, attachments=attachments)
        return

    ts = messages[0].get("ts")
    if not ts:
        logger.warning("스레드 조회 결과에 ts 값이 없습니다")
        return

    await _execute(account, op, ts)


async def on_history(account, op: PendingOperation, json: Optional[dict], error: Optional[str]) -> None:
    """conversations.history 조회 완료 콜백

    어떤 분기로 끝나든 보류 작업은 정확히 한 번 해제됩니다.
    """
    if op is None:
        return
    try:
        await _resolve(account, op, json, error)
    finally:
        op.release()


# ── 조회 요청 ──────────────────────────────────────────────


def _release_if_pending(op: PendingOperation, task: asyncio.Task) -> None:
    """콜백이 실행되지 못한 채 끝난 태스크(시작 전 취소 등)의 보류 작업 해제"""
    if not op.released:
        logger.warning(f"콜백 없이 종료된 조회: {op.op.value}")
        op.release()


def call_operation(account, conversation: Conversation, op: PendingOperation, point: datetime) -> asyncio.Task:
    """point가 속한 1초 구간의 메시지를 조회하고 op를 콜백 상태로 전달"""
    oldest, latest = history_window(point)
    logger.debug(f"스레드 조회: channel={conversation.id}, oldest={oldest}, latest={latest}")

    task = account.api.get(
        "conversations.history",
        partial(on_history, account),
        op,
        channel=conversation.id,
        oldest=oldest,
        latest=latest,
    )
    task.add_done_callback(partial(_release_if_pending, op))
    return task


def _new_pending(account, op: PendingOperation) -> PendingOperation:
    op.on_release = account.pending_operations.discard
    account.pending_operations.add(op)
    return op


def _parse(account, time_str: str) -> Optional[datetime]:
    return parse_time_str(
        time_str,
        time_formats=account.time_formats,
        date_formats=account.date_formats,
    )


# ── 진입점 ──────────────────────────────────────────────


async def post_to_timestamp(
    account, conversation: Conversation, time_str: str, message: str
) -> Optional[asyncio.Task]:
    """ts 또는 시각 표현으로 지정한 스레드에 메시지 전송

    Returns:
        조회가 필요한 경우 조회 태스크, 즉시 처리했거나 실패한 경우 None
    """
    if is_slack_ts(time_str):
        await thread_post(account, conversation, time_str, message)
        return None

    point = _parse(account, time_str)
    if point is None:
        await account.writer.write(conversation, PARSE_FAILED_MESSAGE)
        return None

    op = _new_pending(account, PendingOperation.post(conversation, message))
    return call_operation(account, conversation, op, point)


async def get_replies(account, conversation: Conversation, time_str: str) -> Optional[asyncio.Task]:
    """ts 또는 시각 표현으로 지정한 스레드의 답글 조회

    Returns:
        조회가 필요한 경우 조회 태스크, 즉시 처리했거나 실패한 경우 None
    """
    if is_slack_ts(time_str):
        await get_thread_replies(account, conversation, time_str)
        return None

    point = _parse(account, time_str)
    if point is None:
        await account.writer.write(conversation, PARSE_FAILED_MESSAGE)
        return None

    op = _new_pending(account, PendingOperation.get_replies(conversation))
    return call_operation(account, conversation, op, point)
