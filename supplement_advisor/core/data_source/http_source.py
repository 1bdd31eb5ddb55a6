from typing import Any, Dict, Optional
import asyncio
import aiohttp
from supplement_advisor.core.errors import (
    ExternalServiceError, MalformedResponseError, ServiceTimeoutError
)
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('data_source')


class HttpDataSource:
    """aiohttp 기반 외부 API 클라이언트 공통 클래스"""

    name = "external"

    def __init__(self, timeout_seconds: float = 10, session: Optional[aiohttp.ClientSession] = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.session = session

    async def _init_session(self):
        """Initialize aiohttp session if not exists"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)

    async def close(self):
        """Close the session"""
        if self.session:
            await self.session.close()
            self.session = None

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """요청을 보내고 JSON을 반환합니다. 비정상 응답은 ExternalServiceError."""
        await self._init_session()
        try:
            async with self.session.request(
                method, url, headers=headers, params=params, json=json_body, timeout=self.timeout
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"[{self.name}] API 오류: {response.status} - {error_text[:500]}")
                    raise ExternalServiceError(
                        f"{self.name} API error: {response.status}",
                        details=error_text,
                        status_code=response.status
                    )
                return await response.json(content_type=None)
        # aiohttp 예외 중 일부(InvalidURL 등)는 ValueError도 상속하므로 먼저 처리
        except asyncio.TimeoutError:
            logger.error(f"[{self.name}] 응답 시간 초과")
            raise ServiceTimeoutError(details=f"{self.name} API timeout")
        except aiohttp.ClientError as e:
            # URL에 자격 증명이 포함될 수 있어 예외 메시지는 남기지 않음
            logger.error(f"[{self.name}] 연결 실패: {type(e).__name__}")
            raise ExternalServiceError(
                f"{self.name} API connection error", details=type(e).__name__, status_code=502
            )
        except ValueError as e:
            logger.error(f"[{self.name}] JSON 파싱 실패: {type(e).__name__}")
            raise MalformedResponseError(f"{self.name} API 응답 형식이 올바르지 않습니다.", details=type(e).__name__)
