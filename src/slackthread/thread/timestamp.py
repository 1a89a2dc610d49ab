"""스레드 타임스탬프 유틸리티

슬랙 메시지 ts 판별, 사람이 입력한 시각 문자열 파싱,
conversations.history 조회 구간 계산, 스레드 색상 계산을 담당합니다.
"""

import hashlib
import math
import re
from datetime import datetime
from typing import Iterable, Optional, Union

# 숫자와 점 하나로만 구성되어야 함 (예: 1690000000.000100)
_SLACK_TS_PATTERN = re.compile(r"[0-9]+\.[0-9]+")

# 날짜와 시각을 잇는 구분자
DATE_TIME_SEPARATOR = "-"

DEFAULT_TIME_FORMATS = ("%X",)
DEFAULT_DATE_FORMATS = ("%x", "%m/%d/%Y")


def is_slack_ts(value: str) -> bool:
    """문자열이 슬랙 메시지 ts 형식(<초>.<소수부>)인지 확인

    숫자와 '.' 외의 문자가 섞여 있으면 ts로 보지 않습니다.
    """
    if not value:
        return False
    return _SLACK_TS_PATTERN.fullmatch(value) is not None


def _strptime(value: str, fmt: str) -> Optional[datetime]:
    """문자열 전체가 포맷과 일치할 때만 datetime 반환"""
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        return None


def parse_time_str(
    time_str: str,
    now: Optional[datetime] = None,
    time_formats: Optional[Iterable[str]] = None,
    date_formats: Optional[Iterable[str]] = None,
) -> Optional[datetime]:
    """사람이 입력한 시각 문자열을 datetime으로 변환

    다음 순서로 시도하며, 문자열 전체가 소비되어야 성공입니다.
    1. 시각만 (날짜는 now의 날짜를 사용)
    2. 날짜-시각 ('-'로 연결)

    Args:
        time_str: 입력 문자열 (예: "14:30:00", "01/02/2023-14:30:00")
        now: 기준 시각 (기본값: 현재 로컬 시각)
        time_formats: 시각 strptime 포맷 목록
        date_formats: 날짜 strptime 포맷 목록

    Returns:
        로컬 시각 기준 datetime, 해석할 수 없으면 None
    """
    if now is None:
        now = datetime.now()
    time_formats = list(time_formats or DEFAULT_TIME_FORMATS)
    date_formats = list(date_formats or DEFAULT_DATE_FORMATS)

    for time_fmt in time_formats:
        parsed = _strptime(time_str, time_fmt)
        if parsed is not None:
            return datetime.combine(now.date(), parsed.time(), tzinfo=now.tzinfo)

    for date_fmt in date_formats:
        for time_fmt in time_formats:
            parsed = _strptime(time_str, f"{date_fmt}{DATE_TIME_SEPARATOR}{time_fmt}")
            if parsed is not None:
                return parsed.replace(tzinfo=now.tzinfo)

    return None


def history_window(point: Union[datetime, float]) -> tuple[str, str]:
    """point가 속한 1초 구간의 (oldest, latest) ts 쌍 반환"""
    if isinstance(point, datetime):
        point = point.timestamp()
    seconds = math.floor(point)
    return f"{seconds}.000000", f"{seconds}.999999"


def thread_color(ts: str) -> str:
    """ts로부터 결정적인 색상(rrggbb hex) 계산

    후보 스레드를 시각적으로 구분하기 위한 용도입니다.
    """
    return hashlib.md5(ts.encode("utf-8")).hexdigest()[:6]
