from typing import Dict, List, Optional
import yaml
import os
from supplement_advisor.utils.logger_config import setup_logger
from dotenv import load_dotenv

logger = setup_logger('config_loader')

# 환경 변수 이름 -> 내부 키
API_KEY_ENV = {
    'openai': 'OPENAI_API_KEY',
    'naver_client_id': 'NAVER_CLIENT_ID',
    'naver_client_secret': 'NAVER_CLIENT_SECRET',
    'food_safety': 'FOOD_SAFETY_API_KEY',
    'supabase_url': 'SUPABASE_URL',
    'supabase_service_role': 'SUPABASE_SERVICE_ROLE_KEY',
    'redis_url': 'REDIS_URL',
}


class ConfigLoader:
    _instance = None
    _config = None
    _lexicon = None
    _openai_settings = None
    _service_settings = None
    _api_keys = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize configuration and load settings"""
        # 1. 환경 변수 로드
        load_dotenv()
        self._api_keys = {
            name: (os.getenv(env_name) or '').strip() or None
            for name, env_name in API_KEY_ENV.items()
        }

        # 2. 서비스 설정 로드 (config.yaml)
        self._config = self._load_yaml('config.yaml')

        # 3. 성분 사전 로드 (ingredient_lexicon.yaml)
        self._lexicon = self._load_yaml('ingredient_lexicon.yaml')

        # 4. OpenAI 설정
        openai_config = self._config.get('service', {}).get('openai', {})
        self._openai_settings = {
            'api_key': self._api_keys['openai'],
            'chat': {
                'model': openai_config.get('chat', {}).get('model', 'gpt-4o-mini'),
                'recommend_temperature': openai_config.get('chat', {}).get('recommend_temperature', 0.7),
                'interaction_temperature': openai_config.get('chat', {}).get('interaction_temperature', 0.3)
            },
            'timeout_seconds': openai_config.get('timeout_seconds', 60)
        }

        # 5. 서비스 설정
        self._service_settings = self._config.get('service', {})
        logger.info(
            f"[CONFIG] 설정 로드 완료 - 설정된 키: "
            f"{sorted(name for name, value in self._api_keys.items() if value)}"
        )

    def _load_yaml(self, filename: str) -> Dict:
        """config 디렉토리의 YAML 파일 로드"""
        try:
            path = os.path.join(os.path.dirname(__file__), filename)
            with open(path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file) or {}
                logger.info(f"[CONFIG] 설정 파일 경로: {path}")
            return data

        except FileNotFoundError as e:
            logger.error(f"[CONFIG] 설정 파일을 찾을 수 없습니다: {str(e)}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"[CONFIG] YAML 파싱 오류: {str(e)}")
            raise

    def get_fastapi_settings(self) -> Dict:
        """FastAPI 서버 설정을 반환합니다."""
        return self._config.get('fastapi', {})

    def get_service_settings(self) -> Dict:
        """서비스 설정을 반환합니다."""
        return self._service_settings

    def get_api_prefix(self) -> str:
        return self.get_service_settings().get('api_prefix', '/api')

    def get_openai_settings(self) -> Dict:
        """OpenAI 설정을 반환합니다."""
        return self._openai_settings

    def get_storage_settings(self) -> Dict:
        """리마인더 저장소 설정을 반환합니다."""
        return self.get_service_settings().get('storage', {})

    def get_auth_settings(self) -> Dict:
        return self.get_service_settings().get('auth', {})

    def get_data_source_settings(self, name: str) -> Dict:
        """외부 데이터 소스(naver_shopping, food_safety) 설정을 반환합니다."""
        return self._config.get('data_sources', {}).get(name, {})

    def get_api_key(self, name: str) -> Optional[str]:
        """자격 증명을 반환합니다. 설정되지 않았으면 None."""
        return self._api_keys.get(name)

    def get_ingredient_keywords(self) -> Dict[str, List[str]]:
        """표준 성분명 -> 키워드 변형 목록 (선언 순서 유지)"""
        return self._lexicon.get('ingredients', {})

    def get_supplement_info(self) -> Dict[str, Dict]:
        """영양제 기본 정보를 반환합니다."""
        return self._lexicon.get('supplement_info', {})

    def get_weekdays(self) -> List[str]:
        """리마인더 요일 라벨을 반환합니다."""
        return self._config.get('reminders', {}).get('weekdays', ['월', '화', '수', '목', '금', '토', '일'])


CONFIG = ConfigLoader()
