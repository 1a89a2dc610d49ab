"""Slack 이벤트 핸들러 패키지"""

from slackthread.handlers.commands import register_thread_commands


def register_all_handlers(app, dependencies: dict):
    """모든 핸들러를 앱에 등록

    Args:
        app: Slack Bolt AsyncApp 인스턴스
        dependencies: 핸들러에 필요한 의존성
            - build_account: callable (user_id -> SlackAccount)
    """
    register_thread_commands(app, dependencies)


__all__ = [
    "register_all_handlers",
    "register_thread_commands",
]
