from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import copy
import json
import redis.asyncio as redis
from redis.exceptions import RedisError
from supplement_advisor.core.errors import ExternalServiceError, MalformedResponseError
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('key_value_store')


class KeyValueStore(ABC):
    """외부 키-값 저장소 추상 클래스 (스키마 없음, JSON 값)"""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """값 조회 (없으면 None)"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """값 저장 (덮어쓰기)"""
        pass

    async def close(self) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """프로세스 메모리 저장소 (로컬 개발/테스트용)"""

    def __init__(self):
        self._data: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class RedisKeyValueStore(KeyValueStore):
    """Redis 저장소 (값은 JSON 문자열로 저장)"""

    def __init__(self, url: str, socket_timeout: float = 10, socket_connect_timeout: float = 5, client=None):
        self.redis = client or redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout
        )

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self.redis.get(key)
        except RedisError as e:
            logger.error(f"[REDIS] 조회 실패 - key={key}: {str(e)}")
            raise ExternalServiceError("저장소 조회 중 오류가 발생했습니다.", status_code=503)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            # 알 수 없는 값은 덮어쓰지 않음
            logger.error(f"[REDIS] JSON이 아닌 값 - key={key}")
            raise MalformedResponseError("저장소 데이터 형식이 올바르지 않습니다.", details={"key": key})

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.redis.set(key, json.dumps(value, ensure_ascii=False))
        except RedisError as e:
            logger.error(f"[REDIS] 저장 실패 - key={key}: {str(e)}")
            raise ExternalServiceError("저장소 저장 중 오류가 발생했습니다.", status_code=503)

    async def close(self) -> None:
        await self.redis.aclose()
