"""로깅 설정 모듈

로깅 레벨 가이드라인
==================

logger.exception()
    - 예외 처리 블록에서 스택 트레이스가 필요한 경우
    - 예: 슬래시 커맨드 핸들러 내부의 예상치 못한 오류

logger.error()
    - 예상된 오류이거나 스택 트레이스가 불필요한 경우
    - 외부 서비스(Slack) 호출 실패
    - 예: "스레드 조회 실패: {error}", "메시지 전송 실패: {e}"

logger.warning()
    - 복구 가능한 경고 상황
    - 예: 조회 결과에 ts가 없는 후보 메시지

logger.info()
    - 주요 상태 변경, 작업 시작/완료
    - 예: "스레드 답글 전송", "봇 시작"

logger.debug()
    - 상세한 디버깅 정보
    - 예: 조회 구간, 보류 작업 해제
"""

import logging
from datetime import datetime
from pathlib import Path

from slackthread.config import Config


def setup_logging() -> logging.Logger:
    """로깅 설정 및 로거 반환"""
    log_dir = Path(Config.get_log_path())
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"bot_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=logging.DEBUG if Config.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler()
        ]
    )

    # slack_sdk / aiohttp 내부 로그는 디버그 모드에서만 출력
    if not Config.debug:
        logging.getLogger("slack_sdk").setLevel(logging.WARNING)
        logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return logging.getLogger(__name__)
