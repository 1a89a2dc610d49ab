"""slackthread - 시간 표현으로 슬랙 스레드를 찾아 답글을 달거나 조회하는 봇"""

__version__ = "0.1.0"
