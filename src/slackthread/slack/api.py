"""비동기 Slack API 호출

slack_api_get(method, callback, data, ...) 형태로 Web API를 호출하고,
결과를 콜백으로 정확히 한 번 전달합니다. 호출자는 기다리지 않고 즉시 반환됩니다.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError

logger = logging.getLogger(__name__)

# callback(data, json, error)
ApiCallback = Callable[[Any, Optional[dict], Optional[str]], Awaitable[None]]


class SlackApi:
    """AsyncWebClient 위의 콜백 기반 API 호출기

    실행 중인 태스크를 보관하여 완료 전에 GC되지 않도록 합니다.
    """

    def __init__(self, client, timeout: Optional[float] = None):
        """
        Args:
            client: Slack AsyncWebClient
            timeout: 응답 대기 시간 (초, None이면 무제한)
        """
        self.client = client
        self.timeout = timeout
        self._tasks: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """응답을 기다리는 호출 수"""
        return len(self._tasks)

    def get(self, method: str, callback: ApiCallback, data: Any, **params) -> asyncio.Task:
        """GET 방식 API 호출을 예약하고 태스크 반환

        Args:
            method: API 메서드 (예: "conversations.history")
            callback: 완료 시 호출할 코루틴 함수 callback(data, json, error)
            data: 콜백에 그대로 전달할 상태
            **params: 쿼리 파라미터
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._call(method, callback, data, params))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Slack API 콜백 처리 중 오류: {exc!r}", exc_info=exc)

    async def _request(self, method: str, params: dict):
        request = self.client.api_call(method, http_verb="GET", params=params)
        if self.timeout:
            return await asyncio.wait_for(request, timeout=self.timeout)
        return await request

    async def _call(self, method: str, callback: ApiCallback, data: Any, params: dict) -> None:
        json: Optional[dict] = None
        error: Optional[str] = None
        try:
            response = await self._request(method, params)
            json = response.data if isinstance(response.data, dict) else None
        except SlackApiError as e:
            error = e.response.get("error") or str(e)
        except asyncio.TimeoutError:
            error = "timeout"
        except (SlackClientError, aiohttp.ClientError) as e:
            error = str(e) or type(e).__name__
        except asyncio.CancelledError:
            # 취소되어도 콜백은 한 번 실행되어야 보류 작업이 해제됨
            await callback(data, None, "cancelled")
            raise

        if error:
            logger.error(f"Slack API 호출 실패: {method} - {error}")
        await callback(data, json, error)

    async def cancel_all(self) -> int:
        """응답 대기 중인 호출을 모두 취소하고 취소한 수 반환"""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        return len(tasks)
