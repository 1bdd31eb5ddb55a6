import json
from typing import Any, Dict, Optional
from supplement_advisor.config.config_loader import CONFIG
from supplement_advisor.core.data_source.http_source import HttpDataSource
from supplement_advisor.core.errors import (
    ConfigurationError, ExternalServiceError, UnauthorizedError, ValidationError
)
from supplement_advisor.models.reminder import AuthenticatedUser
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('auth_source')

# Supabase 오류 메시지 -> 사용자 메시지
SIGNUP_ERROR_MESSAGES = [
    (("already registered", "already exists", "already been registered"), "이미 사용 중인 이메일입니다."),
    (("password",), "비밀번호는 최소 6자 이상이어야 합니다."),
    (("email",), "유효한 이메일 주소를 입력해주세요."),
    (("database", "destination"), "회원가입 처리 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."),
]


def translate_signup_error(message: str) -> str:
    lowered = (message or "").lower()
    for needles, translated in SIGNUP_ERROR_MESSAGES:
        if any(needle in lowered for needle in needles):
            return translated
    return message or "회원가입 중 오류가 발생했습니다."


def parse_bearer_token(authorization: Optional[str]) -> str:
    """Authorization 헤더에서 토큰을 꺼냅니다. 없으면 UnauthorizedError."""
    if not authorization:
        raise UnauthorizedError("Unauthorized - No token provided")
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise UnauthorizedError("Unauthorized - No token provided")
    return parts[1].strip()


class SupabaseAuthSource(HttpDataSource):
    """Supabase Auth REST 클라이언트 (토큰 검증, 관리자 사용자 생성)"""

    name = "SupabaseAuth"

    def __init__(
        self,
        url: Optional[str] = None,
        service_role_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session=None
    ):
        super().__init__(
            timeout_seconds or CONFIG.get_auth_settings().get('timeout_seconds', 10),
            session=session
        )
        self.url = (url if url is not None else CONFIG.get_api_key('supabase_url') or '').rstrip('/')
        self.service_role_key = (
            service_role_key if service_role_key is not None
            else CONFIG.get_api_key('supabase_service_role')
        )

    def _require_config(self):
        if not self.url or not self.service_role_key:
            logger.error("[AUTH] Supabase 설정이 누락되었습니다.")
            raise ConfigurationError(
                "Auth provider not configured",
                hint="SUPABASE_URL과 SUPABASE_SERVICE_ROLE_KEY 환경 변수가 설정되지 않았습니다."
            )

    @staticmethod
    def _to_user(data: Dict[str, Any]) -> AuthenticatedUser:
        metadata = data.get("user_metadata") or {}
        return AuthenticatedUser(id=data["id"], email=data.get("email"), name=metadata.get("name"))

    async def get_user(self, access_token: str) -> AuthenticatedUser:
        """토큰으로 사용자를 확인합니다. 실패하면 UnauthorizedError."""
        self._require_config()
        try:
            data = await self._request_json(
                "GET",
                f"{self.url}/auth/v1/user",
                headers={"apikey": self.service_role_key, "Authorization": f"Bearer {access_token}"}
            )
        except ExternalServiceError as e:
            logger.warning(f"[AUTH] 토큰 검증 실패: status={e.status_code}")
            if e.status_code in (401, 403, 404, 422):
                raise UnauthorizedError()
            raise

        if not isinstance(data, dict) or not data.get("id"):
            raise UnauthorizedError()
        return self._to_user(data)

    async def create_user(self, email: str, password: str, name: str) -> Dict[str, Any]:
        """관리자 API로 사용자를 생성합니다 (이메일 확인 생략)."""
        self._require_config()
        if not email or not password:
            raise ValidationError("이메일과 비밀번호를 입력해주세요.")

        logger.info(f"[Signup] 사용자 생성 시도: {email}")
        try:
            user = await self._request_json(
                "POST",
                f"{self.url}/auth/v1/admin/users",
                headers={
                    "apikey": self.service_role_key,
                    "Authorization": f"Bearer {self.service_role_key}"
                },
                json_body={
                    "email": email,
                    "password": password,
                    "user_metadata": {"name": name},
                    "email_confirm": True
                }
            )
        except ExternalServiceError as e:
            if e.status_code is not None and 400 <= e.status_code < 500:
                upstream = self._error_message(e.details)
                logger.warning(f"[Signup] Supabase 오류 ({email}): {upstream}")
                raise ValidationError(translate_signup_error(upstream), details=upstream)
            raise

        logger.info(f"[Signup] 사용자 생성 완료: {email}, ID: {(user or {}).get('id')}")
        return user

    @staticmethod
    def _error_message(details: Any) -> str:
        if isinstance(details, str):
            try:
                body = json.loads(details)
            except ValueError:
                return details
            if isinstance(body, dict):
                return str(body.get("msg") or body.get("message") or body.get("error_description") or body.get("error") or details)
        return str(details)
