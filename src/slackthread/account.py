"""요청 단위 Slack 계정 컨텍스트"""

from dataclasses import dataclass, field

from slackthread.config import Config
from slackthread.slack.api import SlackApi
from slackthread.slack.writer import SystemMessageWriter
from slackthread.thread.conversation import ConversationStore


@dataclass
class SlackAccount:
    """스레드 작업에 필요한 의존성 묶음

    api와 conversations는 앱 전체에서 공유하고,
    writer는 요청한 사용자마다 만듭니다.
    """

    api: SlackApi
    writer: SystemMessageWriter
    conversations: ConversationStore = field(default_factory=ConversationStore)
    # 응답을 기다리는 보류 작업 (해제 시 제거됨)
    pending_operations: set = field(default_factory=set)
    time_formats: list[str] = field(default_factory=lambda: list(Config.thread.time_formats))
    date_formats: list[str] = field(default_factory=lambda: list(Config.thread.date_formats))

    @property
    def client(self):
        """Slack AsyncWebClient"""
        return self.api.client
