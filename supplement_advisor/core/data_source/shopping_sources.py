from typing import Any, Dict, Optional
from urllib.parse import quote
from supplement_advisor.config.config_loader import CONFIG
from supplement_advisor.core.data_source.http_source import HttpDataSource
from supplement_advisor.core.errors import ConfigurationError, ValidationError
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('shopping_sources')


class NaverShoppingSource(HttpDataSource):
    """네이버 쇼핑 검색 API 프록시"""

    name = "Naver"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        settings: Optional[Dict] = None,
        session=None
    ):
        self.settings = settings or CONFIG.get_data_source_settings('naver_shopping')
        super().__init__(self.settings.get('timeout_seconds', 10), session=session)
        self.client_id = client_id if client_id is not None else CONFIG.get_api_key('naver_client_id')
        self.client_secret = client_secret if client_secret is not None else CONFIG.get_api_key('naver_client_secret')
        self.base_url = self.settings.get('base_url', 'https://openapi.naver.com/v1/search/shop.json')

    async def search(self, query: str, display: Optional[int] = None) -> Dict[str, Any]:
        if not self.client_id or not self.client_secret:
            logger.error("[Naver API] 자격 증명이 설정되지 않았습니다.")
            raise ConfigurationError(
                "Naver API credentials not configured",
                hint="환경 변수 NAVER_CLIENT_ID와 NAVER_CLIENT_SECRET이 설정되지 않았습니다."
            )
        if not query or not query.strip():
            raise ValidationError("검색어를 입력해주세요.")

        display = display or self.settings.get('default_display', 10)
        logger.info(f"[Naver API] 검색 시작: \"{query}\" (display={display})")
        data = await self._request_json(
            "GET",
            self.base_url,
            headers={
                "X-Naver-Client-Id": self.client_id.strip(),
                "X-Naver-Client-Secret": self.client_secret.strip()
            },
            params={"query": query, "display": display, "sort": self.settings.get('sort', 'sim')}
        )
        logger.info(f"[Naver API] 검색 결과 {len((data or {}).get('items') or [])}개")
        return data


class FoodSafetySource(HttpDataSource):
    """식품안전나라 건강기능식품 정보 API 프록시"""

    name = "FoodSafety"

    def __init__(self, api_key: Optional[str] = None, settings: Optional[Dict] = None, session=None):
        self.settings = settings or CONFIG.get_data_source_settings('food_safety')
        super().__init__(self.settings.get('timeout_seconds', 10), session=session)
        self.api_key = api_key if api_key is not None else CONFIG.get_api_key('food_safety')

    def _build_url(self, product_name: str) -> str:
        return (
            f"{self.settings.get('base_url', 'http://openapi.foodsafetykorea.go.kr/api')}/{self.api_key}/"
            f"{self.settings.get('service_id', 'C003')}/json/"
            f"{self.settings.get('start_index', 1)}/{self.settings.get('end_index', 10)}/"
            f"PRDLST_NM={quote(product_name, safe='')}"
        )

    async def search(self, product_name: str) -> Dict[str, Any]:
        if not self.api_key:
            logger.error("[FoodSafety API] API 키가 설정되지 않았습니다.")
            raise ConfigurationError(
                "Food Safety API key not configured",
                hint="FOOD_SAFETY_API_KEY 환경 변수가 설정되지 않았습니다."
            )
        if not product_name or not product_name.strip():
            raise ValidationError("제품명을 입력해주세요.")

        logger.info(f"[FoodSafety API] 검색: {product_name}")
        return await self._request_json("GET", self._build_url(product_name.strip()))
