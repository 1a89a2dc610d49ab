"""설정 관리

카테고리별로 구분된 설정을 관리합니다.
- 경로 설정: get_*() 메서드 (cwd 기준 계산 필요)
- 그 외 설정: @dataclass 하위 그룹 (모듈 로드 시 평가)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """설정 오류 예외

    필수 환경변수 누락 등 설정 관련 오류 시 발생합니다.
    """

    def __init__(self, missing_vars: List[str]):
        self.missing_vars = missing_vars
        message = f"필수 환경변수가 설정되지 않았습니다: {', '.join(missing_vars)}"
        super().__init__(message)


def _get_path(env_var: str, default_subdir: str) -> str:
    """환경변수가 없으면 현재 경로 하위 폴더 반환"""
    env_value = os.getenv(env_var)
    if env_value:
        return env_value
    return str(Path.cwd() / default_subdir)


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """문자열을 bool로 변환"""
    if value is None:
        return default
    return value.lower() == "true"


def _parse_float(value: str | None, default: float) -> float:
    """문자열을 float로 변환 (실패 시 기본값)"""
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_list(value: str | None, default: list[str]) -> list[str]:
    """쉼표 구분 문자열을 리스트로 변환 (빈 항목 제외)"""
    if not value:
        return list(default)
    items = [v.strip() for v in value.split(",") if v.strip()]
    return items or list(default)


@dataclass
class SlackConfig:
    """Slack 연결 설정"""

    bot_token: str | None = os.getenv("SLACK_BOT_TOKEN")
    app_token: str | None = os.getenv("SLACK_APP_TOKEN")


@dataclass
class ThreadConfig:
    """스레드 타임스탬프 해석 설정"""

    # conversations.history 응답 대기 시간 (초, 0이면 무제한)
    query_timeout: float = _parse_float(os.getenv("THREAD_QUERY_TIMEOUT"), 30.0)
    # strptime 포맷: 시각만 / 날짜 (날짜와 시각은 '-'로 연결)
    time_formats: list[str] = field(
        default_factory=lambda: _parse_list(os.getenv("THREAD_TIME_FORMATS"), ["%X"])
    )
    date_formats: list[str] = field(
        default_factory=lambda: _parse_list(
            os.getenv("THREAD_DATE_FORMATS"), ["%x", "%m/%d/%Y"]
        )
    )


class Config:
    """애플리케이션 설정

    설정 접근 방식:
    - 경로 관련: get_*() 메서드 (런타임에 cwd 기준 계산)
    - 그 외: 하위 설정 그룹 (모듈 로드 시 평가)
    """

    debug: bool = _parse_bool(os.getenv("DEBUG"), False)

    slack = SlackConfig()
    thread = ThreadConfig()

    @staticmethod
    def get_log_path() -> str:
        """로그 경로"""
        return _get_path("LOG_PATH", "logs")

    @classmethod
    def validate(cls) -> None:
        """필수 환경변수 검증

        필수 환경변수가 누락된 경우 ConfigurationError를 발생시킵니다.

        Raises:
            ConfigurationError: 필수 환경변수 누락 시
        """
        missing = []
        if not cls.slack.bot_token:
            missing.append("SLACK_BOT_TOKEN")
        if not cls.slack.app_token:
            missing.append("SLACK_APP_TOKEN")

        if missing:
            raise ConfigurationError(missing)
