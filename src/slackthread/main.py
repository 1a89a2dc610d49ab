"""slackthread 슬랙 봇 메인

앱 초기화와 진입점만 담당합니다.
"""

import asyncio

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from slackthread.account import SlackAccount
from slackthread.config import Config
from slackthread.handlers import register_all_handlers
from slackthread.logging_config import setup_logging
from slackthread.slack.api import SlackApi
from slackthread.slack.writer import SystemMessageWriter
from slackthread.thread.conversation import ConversationStore

# 로깅 설정
logger = setup_logging()


def create_app() -> tuple[AsyncApp, SlackApi, set]:
    """Bolt 앱 생성 및 핸들러 등록

    Returns:
        (app, api, pending_operations)
    """
    app = AsyncApp(token=Config.slack.bot_token, logger=logger)

    api = SlackApi(app.client, timeout=Config.thread.query_timeout or None)
    conversations = ConversationStore()
    pending_operations: set = set()

    def build_account(user_id: str) -> SlackAccount:
        return SlackAccount(
            api=api,
            writer=SystemMessageWriter(app.client, user_id),
            conversations=conversations,
            pending_operations=pending_operations,
        )

    register_all_handlers(app, {"build_account": build_account})
    return app, api, pending_operations


async def main():
    Config.validate()

    app, api, pending_operations = create_app()
    handler = AsyncSocketModeHandler(app, Config.slack.app_token)

    logger.info("slackthread 봇 시작")
    try:
        await handler.start_async()
    finally:
        cancelled = await api.cancel_all()
        if cancelled:
            logger.info(f"종료 전 조회 {cancelled}개 취소")
        if pending_operations:
            logger.warning(f"해제되지 않은 보류 작업 {len(pending_operations)}개")
        await handler.close_async()


def run():
    """콘솔 스크립트 진입점"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("종료 요청 수신")


if __name__ == "__main__":
    run()
