from typing import Any, Dict, Optional


class SupplementAdvisorError(Exception):
    """서비스 공통 예외

    모든 하위 예외는 HTTP 상태 코드와 사용자용 메시지를 가지며,
    요청 경계에서 `to_payload()`로 JSON 응답 본문이 됩니다.
    """

    status_code = 500
    default_message = "요청 처리 중 오류가 발생했습니다."

    def __init__(
        self,
        message: Optional[str] = None,
        hint: Optional[str] = None,
        details: Any = None,
        status_code: Optional[int] = None
    ):
        self.message = message or self.default_message
        self.hint = hint
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.hint:
            payload["hint"] = self.hint
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(SupplementAdvisorError):
    """외부 의존성 자격 증명 누락"""
    status_code = 500
    default_message = "서버 설정이 올바르지 않습니다."


class UnauthorizedError(SupplementAdvisorError):
    """Bearer 토큰 누락/무효"""
    status_code = 401
    default_message = "Unauthorized"

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(SupplementAdvisorError):
    """잘못되었거나 부족한 입력"""
    status_code = 400
    default_message = "요청 데이터가 올바르지 않습니다."


class InsufficientInputError(ValidationError):
    """상호작용 분석에 필요한 제품/성분 수 부족"""
    default_message = "최소 2개 이상의 제품과 2개 이상의 영양 성분이 필요합니다."


class ExternalServiceError(SupplementAdvisorError):
    """외부 서비스 비정상 응답 (상태 코드와 응답 본문 전달)"""
    status_code = 502
    default_message = "외부 서비스 호출 중 오류가 발생했습니다."


class ServiceTimeoutError(ExternalServiceError):
    """외부 서비스 응답 시간 초과"""
    status_code = 504
    default_message = "외부 서비스 응답 시간이 초과되었습니다. 잠시 후 다시 시도해주세요."


class MalformedResponseError(SupplementAdvisorError):
    """외부 서비스 응답이 스키마를 만족하지 않음"""
    status_code = 500
    default_message = "AI 응답 형식이 올바르지 않습니다."


class NotFoundError(SupplementAdvisorError):
    """내부 전용: ID로 찾을 수 없음"""
    status_code = 404
    default_message = "요청한 항목을 찾을 수 없습니다."
