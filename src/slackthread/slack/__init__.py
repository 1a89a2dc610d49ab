"""Slack 유틸리티 패키지"""

from slackthread.slack.api import SlackApi
from slackthread.slack.helpers import split_long_message
from slackthread.slack.writer import SystemMessageWriter

__all__ = [
    "SlackApi",
    "split_long_message",
    "SystemMessageWriter",
]
