from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header
from supplement_advisor.config.config_loader import CONFIG
from supplement_advisor.core.data_source.auth_source import SupabaseAuthSource, parse_bearer_token
from supplement_advisor.core.data_source.shopping_sources import FoodSafetySource, NaverShoppingSource
from supplement_advisor.core.ingredients.extractor import IngredientExtractor
from supplement_advisor.core.ingredients.lexicon import IngredientLexicon, build_default_lexicon
from supplement_advisor.core.interactions.request_builder import InteractionRequestBuilder
from supplement_advisor.core.reminders.key_value_store import (
    InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
)
from supplement_advisor.core.reminders.reminder_repository import ReminderRepository
from supplement_advisor.core.reminders.reminder_store import ReminderStore
from supplement_advisor.core.services.interaction_service import InteractionService
from supplement_advisor.core.services.recommendation_service import RecommendationService
from supplement_advisor.core.services.supplement_info_service import SupplementInfoService
from supplement_advisor.models.reminder import AuthenticatedUser
from supplement_advisor.utils.openai_client import OpenAIClient
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('dependencies')

# 프로세스 단위로 한 번만 만들어지는 공유 객체들


@lru_cache
def get_lexicon() -> IngredientLexicon:
    return build_default_lexicon()


@lru_cache
def get_extractor() -> IngredientExtractor:
    return IngredientExtractor(get_lexicon())


@lru_cache
def get_openai_client() -> OpenAIClient:
    return OpenAIClient()


@lru_cache
def get_interaction_service() -> InteractionService:
    temperature = CONFIG.get_openai_settings()['chat']['interaction_temperature']
    return InteractionService(
        InteractionRequestBuilder(get_extractor(), temperature=temperature),
        get_openai_client()
    )


@lru_cache
def get_recommendation_service() -> RecommendationService:
    return RecommendationService(get_openai_client())


@lru_cache
def get_supplement_info_service() -> SupplementInfoService:
    return SupplementInfoService(CONFIG.get_supplement_info())


@lru_cache
def get_key_value_store() -> KeyValueStore:
    settings = CONFIG.get_storage_settings()
    backend = settings.get('backend', 'memory')
    if backend == 'redis':
        redis_settings = settings.get('redis', {})
        url = CONFIG.get_api_key('redis_url') or redis_settings.get('default_url', 'redis://localhost:6379/0')
        logger.info("[STORAGE] Redis 저장소 사용")
        return RedisKeyValueStore(
            url,
            socket_timeout=redis_settings.get('socket_timeout', 10),
            socket_connect_timeout=redis_settings.get('socket_connect_timeout', 5)
        )
    logger.info("[STORAGE] 메모리 저장소 사용")
    return InMemoryKeyValueStore()


@lru_cache
def get_reminder_store() -> ReminderStore:
    return ReminderStore(ReminderRepository(get_key_value_store()), weekdays=CONFIG.get_weekdays())


@lru_cache
def get_auth_source() -> SupabaseAuthSource:
    return SupabaseAuthSource()


@lru_cache
def get_naver_source() -> NaverShoppingSource:
    return NaverShoppingSource()


@lru_cache
def get_food_safety_source() -> FoodSafetySource:
    return FoodSafetySource()


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    auth_source: SupabaseAuthSource = Depends(get_auth_source)
) -> AuthenticatedUser:
    """Bearer 토큰으로 사용자를 확인합니다."""
    token = parse_bearer_token(authorization)
    return await auth_source.get_user(token)


async def close_resources():
    """애플리케이션 종료 시 외부 연결 정리"""
    for getter in (get_auth_source, get_naver_source, get_food_safety_source):
        if getter.cache_info().currsize:
            await getter().close()
    if get_openai_client.cache_info().currsize:
        await get_openai_client().close()
    if get_key_value_store.cache_info().currsize:
        await get_key_value_store().close()
