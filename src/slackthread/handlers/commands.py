"""슬래시 커맨드 핸들러

/thread <ts|시각> <메시지>  - 지정한 스레드에 답글 전송
/getthread <ts|시각>        - 지정한 스레드의 답글 조회

각 핸들러는 keyword-only 인자를 받고, 사용하지 않는 인자는 **_로 흡수합니다.
"""

import logging

from slack_sdk.errors import SlackApiError

from slackthread.thread.resolver import get_replies, post_to_timestamp

logger = logging.getLogger(__name__)

THREAD_USAGE = "Usage: /thread <timestamp|time> <message>"
GETTHREAD_USAGE = "Usage: /getthread <timestamp|time>"


def parse_thread_command(text: str | None) -> tuple[str, str]:
    """커맨드 텍스트를 (시각 문자열, 메시지)로 분리"""
    parts = (text or "").strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


# ── 명령어 핸들러 ──────────────────────────────────────────────


async def handle_thread(*, account, conversation, text, **_):
    """/thread 명령어 핸들러"""
    time_str, message = parse_thread_command(text)
    if not time_str or not message:
        await account.writer.write(conversation, THREAD_USAGE)
        return None
    return await post_to_timestamp(account, conversation, time_str, message)


async def handle_getthread(*, account, conversation, text, **_):
    """/getthread 명령어 핸들러"""
    time_str, _rest = parse_thread_command(text)
    if not time_str:
        await account.writer.write(conversation, GETTHREAD_USAGE)
        return None
    return await get_replies(account, conversation, time_str)


_COMMAND_DISPATCH = {
    "/thread": handle_thread,
    "/getthread": handle_getthread,
}


async def dispatch_command(command: dict, client, respond, build_account):
    """커맨드 payload를 해당 핸들러로 전달

    Args:
        command: 슬래시 커맨드 payload
        client: Slack AsyncWebClient
        respond: Bolt respond 함수 (대화 해석 실패 시 응답용)
        build_account: user_id를 받아 SlackAccount를 만드는 함수
    """
    handler = _COMMAND_DISPATCH.get(command.get("command", ""))
    if handler is None:
        logger.warning(f"알 수 없는 커맨드: {command.get('command')}")
        return None

    account = build_account(command["user_id"])
    channel_id = command["channel_id"]
    try:
        conversation = await account.conversations.resolve(client, channel_id)
    except SlackApiError as e:
        error = e.response.get("error") or str(e)
        logger.error(f"대화 정보 조회 실패: channel={channel_id}, error={error}")
        await respond(f"Could not resolve this conversation: {error}")
        return None

    try:
        return await handler(
            account=account,
            conversation=conversation,
            text=command.get("text", ""),
        )
    except Exception as e:
        logger.exception(f"커맨드 처리 중 오류: {command.get('command')}")
        await respond(f"Command failed: {e}")
        return None


def register_thread_commands(app, dependencies: dict):
    """스레드 커맨드를 앱에 등록

    Args:
        app: Slack Bolt AsyncApp 인스턴스
        dependencies: 핸들러에 필요한 의존성
            - build_account: callable (user_id -> SlackAccount)
    """
    build_account = dependencies["build_account"]

    for name in _COMMAND_DISPATCH:
        @app.command(name)
        async def _on_command(ack, command, client, respond):
            await ack()
            await dispatch_command(command, client, respond, build_account)
