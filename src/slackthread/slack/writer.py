"""시스템 메시지 전송

스레드 해석 결과(찾지 못함, 모호함, 파싱 실패 등)를
요청한 사용자에게만 보이는 ephemeral 메시지로 전달합니다.
"""

import logging
from typing import Optional

from slack_sdk.errors import SlackApiError

from slackthread.slack.helpers import split_long_message

logger = logging.getLogger(__name__)


class SystemMessageWriter:
    """요청 사용자 대상 시스템 메시지 작성기"""

    def __init__(self, client, user_id: str):
        """
        Args:
            client: Slack AsyncWebClient
            user_id: 메시지를 받을 사용자 ID
        """
        self.client = client
        self.user_id = user_id

    async def write(self, conversation, text: str, attachments: Optional[list[dict]] = None) -> bool:
        """대화에 시스템 메시지 작성

        Returns:
            전송 성공 여부
        """
        msg_kwargs: dict = {
            "channel": conversation.id,
            "user": self.user_id,
            "text": text,
        }
        if attachments:
            msg_kwargs["attachments"] = attachments

        try:
            await self.client.chat_postEphemeral(**msg_kwargs)
            return True
        except SlackApiError as e:
            logger.error(f"시스템 메시지 전송 실패: channel={conversation.id}, error={e}")
            return False

    async def write_long(self, conversation, text: str) -> None:
        """긴 시스템 메시지를 분할해서 작성"""
        for chunk in split_long_message(text):
            await self.write(conversation, chunk)
