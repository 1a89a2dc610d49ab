"""대화(채널/DM) 모델

스레드 작업 대상이 되는 대화 객체와 전송 기능을 정의합니다.
- Channel: 채널 ID로 전송
- DirectMessage: 사용자 ID로 DM을 열어 전송
- OtherConversation: 그룹 DM 등, 전송 미지원
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


class SendNotSupportedError(Exception):
    """대화 유형이 메시지 전송을 지원하지 않음"""

    def __init__(self, conversation: "Conversation"):
        self.conversation = conversation
        super().__init__(
            f"메시지 전송을 지원하지 않는 대화입니다: {conversation.id}"
        )


async def _post_message(client, channel: str, text: str, thread_ts: Optional[str]) -> dict:
    """chat.postMessage 호출 (thread_ts가 있으면 스레드 답글)"""
    msg_kwargs: dict = {"channel": channel, "text": text}
    if thread_ts:
        msg_kwargs["thread_ts"] = thread_ts
    response = await client.chat_postMessage(**msg_kwargs)
    return response


@dataclass(eq=False)
class Conversation:
    """스레드 작업 대상 대화

    thread_ts는 새로 작성하는 메시지가 달릴 스레드(thread marker)입니다.
    """

    id: str
    thread_ts: Optional[str] = None
    _post_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def post_lock(self) -> asyncio.Lock:
        """스레드 답글 전송 직렬화용 락"""
        return self._post_lock

    async def send(self, client, text: str, thread_ts: Optional[str] = None) -> dict:
        """메시지 전송 (thread_ts 생략 시 현재 thread marker 사용)"""
        raise SendNotSupportedError(self)


@dataclass(eq=False)
class Channel(Conversation):
    """공개/비공개 채널"""

    async def send(self, client, text: str, thread_ts: Optional[str] = None) -> dict:
        return await _post_message(client, self.id, text, thread_ts or self.thread_ts)


@dataclass(eq=False)
class DirectMessage(Conversation):
    """1:1 DM

    id는 DM 채널 ID, user_id는 상대 사용자 ID입니다.
    """

    user_id: str = ""

    async def send(self, client, text: str, thread_ts: Optional[str] = None) -> dict:
        response = await client.conversations_open(users=self.user_id)
        channel = response["channel"]["id"]
        return await _post_message(client, channel, text, thread_ts or self.thread_ts)


@dataclass(eq=False)
class OtherConversation(Conversation):
    """전송을 지원하지 않는 대화 (그룹 DM 등)"""


class ConversationStore:
    """채널 ID별 대화 객체 저장소

    같은 ID에는 항상 같은 객체를 돌려주어 thread marker를 공유합니다.
    """

    def __init__(self):
        self._conversations: dict[str, Conversation] = {}

    def get(self, channel_id: str) -> Optional[Conversation]:
        return self._conversations.get(channel_id)

    def add(self, conversation: Conversation) -> Conversation:
        self._conversations[conversation.id] = conversation
        return conversation

    def count(self) -> int:
        return len(self._conversations)

    async def resolve(self, client, channel_id: str) -> Conversation:
        """채널 ID에 해당하는 대화 객체 반환 (없으면 conversations.info로 분류 후 생성)"""
        conversation = self._conversations.get(channel_id)
        if conversation is not None:
            return conversation

        if channel_id.startswith("C"):
            return self.add(Channel(channel_id))

        response = await client.conversations_info(channel=channel_id)
        info = response.get("channel") or {}
        if info.get("is_im"):
            conversation = DirectMessage(channel_id, user_id=info.get("user", ""))
        elif info.get("is_mpim"):
            conversation = OtherConversation(channel_id)
        else:
            conversation = Channel(channel_id)

        logger.debug(f"대화 등록: {channel_id} ({type(conversation).__name__})")
        return self.add(conversation)
