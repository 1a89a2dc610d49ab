"""보류 작업 (continuation context)

conversations.history 조회가 끝날 때까지 보류된 스레드 작업을 표현합니다.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from slackthread.thread.conversation import Conversation

logger = logging.getLogger(__name__)


class ThreadOp(Enum):
    """재개할 작업 유형"""
    POST = "post"
    GET_REPLIES = "get_replies"


@dataclass(eq=False)
class PendingOperation:
    """조회 결과를 기다리는 스레드 작업

    콜백이 실행될 때 정확히 한 번 release()됩니다.
    release 후에는 대화와 메시지 참조를 놓습니다.
    """

    conversation: Optional[Conversation]
    op: ThreadOp
    message: Optional[str] = None
    on_release: Optional[Callable[["PendingOperation"], None]] = field(
        default=None, repr=False
    )
    _released: bool = field(default=False, init=False, repr=False)

    @classmethod
    def post(
        cls,
        conversation: Conversation,
        message: str,
        on_release: Optional[Callable[["PendingOperation"], None]] = None,
    ) -> "PendingOperation":
        return cls(conversation, ThreadOp.POST, message, on_release=on_release)

    @classmethod
    def get_replies(
        cls,
        conversation: Conversation,
        on_release: Optional[Callable[["PendingOperation"], None]] = None,
    ) -> "PendingOperation":
        return cls(conversation, ThreadOp.GET_REPLIES, on_release=on_release)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """보류 작업 해제 (두 번째 호출부터는 무시)"""
        if self._released:
            logger.warning(f"이미 해제된 보류 작업: {self.op.value}")
            return
        self._released = True
        logger.debug(f"보류 작업 해제: {self.op.value}")

        callback = self.on_release
        self.conversation = None
        self.message = None
        self.on_release = None
        if callback is not None:
            callback(self)
