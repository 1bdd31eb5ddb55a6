import json
from typing import Any, Dict, List, Optional
from openai import AsyncOpenAI, APIConnectionError, APIStatusError, APITimeoutError
from supplement_advisor.core.errors import (
    ConfigurationError, ExternalServiceError, MalformedResponseError, ServiceTimeoutError
)
from supplement_advisor.utils.logger_config import setup_logger
from supplement_advisor.config.config_loader import CONFIG

logger = setup_logger('openai_client')


class OpenAIClient:
    """OpenAI 추론 서비스 클라이언트

    JSON 객체 응답 모드로 chat completion을 한 번 호출하고 결과를 dict로 돌려줍니다.
    재시도는 하지 않으며 모든 실패는 서비스 예외로 변환됩니다.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Dict] = None,
        client: Optional[Any] = None
    ):
        self.settings = settings or CONFIG.get_openai_settings()
        self.api_key = api_key if api_key is not None else self.settings.get('api_key')
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                logger.error("[OPENAI] OPENAI_API_KEY가 설정되지 않았습니다.")
                raise ConfigurationError(
                    "OpenAI API key not configured",
                    hint="OPENAI_API_KEY 환경 변수가 설정되지 않았습니다."
                )
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.settings.get('timeout_seconds', 60),
                max_retries=0
            )
            logger.info("OpenAI 클라이언트 초기화 완료")
        return self._client

    async def complete_json(
        self,
        messages: List[Dict[str, str]],
        temperature: float
    ) -> Dict[str, Any]:
        """JSON 응답 모드로 분석을 요청합니다.

        Args:
            messages: system/user 메시지 목록
            temperature: 샘플링 온도

        Returns:
            파싱된 JSON 객체
        """
        client = self.client
        try:
            response = await client.chat.completions.create(
                model=self.settings['chat']['model'],
                messages=messages,
                temperature=temperature,
                response_format={"type": "json_object"}
            )
        except APITimeoutError as e:
            logger.error(f"[OPENAI] 응답 시간 초과: {str(e)}")
            raise ServiceTimeoutError(details="OpenAI API timeout")
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            logger.error(f"[OPENAI] API 오류: {e.status_code} - {body}")
            raise ExternalServiceError(
                f"OpenAI API error: {e.status_code}",
                details=body,
                status_code=e.status_code
            )
        except APIConnectionError as e:
            logger.error(f"[OPENAI] 연결 실패: {str(e)}")
            raise ExternalServiceError("OpenAI API connection error", details=str(e), status_code=502)

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise MalformedResponseError(details=f"응답 구조 오류: {str(e)}")

        try:
            result = json.loads(content or "")
        except ValueError as e:
            logger.error(f"[OPENAI] JSON 파싱 실패: {str(e)}")
            raise MalformedResponseError(details=f"JSON 파싱 실패: {str(e)}")

        if not isinstance(result, dict):
            raise MalformedResponseError(details="응답이 JSON 객체가 아닙니다.")
        return result

    async def close(self):
        """생성된 AsyncOpenAI 클라이언트의 HTTP 연결을 닫습니다."""
        if self._client is not None:
            await self._client.close()
            self._client = None
