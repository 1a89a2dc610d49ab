"""스레드 해석 패키지"""

from slackthread.thread.conversation import (
    Channel,
    Conversation,
    ConversationStore,
    DirectMessage,
    OtherConversation,
    SendNotSupportedError,
)
from slackthread.thread.operation import PendingOperation, ThreadOp
from slackthread.thread.resolver import get_replies, post_to_timestamp

__all__ = [
    "Channel",
    "Conversation",
    "ConversationStore",
    "DirectMessage",
    "OtherConversation",
    "SendNotSupportedError",
    "PendingOperation",
    "ThreadOp",
    "get_replies",
    "post_to_timestamp",
]
