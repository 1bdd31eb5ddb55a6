import json
from typing import Any, Dict, Union
from pydantic import ValidationError as PydanticValidationError
from supplement_advisor.core.errors import MalformedResponseError
from supplement_advisor.models.interaction import (
    InteractionReport, OverallSafety, Severity
)
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('interaction_normalizer')


def _load(raw: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(details=f"JSON 파싱 실패: {str(e)}")
    if not isinstance(raw, dict):
        raise MalformedResponseError(details="응답이 JSON 객체가 아닙니다.")
    return raw


def _classify(report: InteractionReport) -> OverallSafety:
    """findings와 일관된 전체 안전도"""
    if not report.interactions:
        return OverallSafety.SAFE
    if report.overall_safety != OverallSafety.SAFE:
        return report.overall_safety
    highest = max(finding.severity.rank for finding in report.interactions)
    return OverallSafety.WARNING if highest >= Severity.HIGH.rank else OverallSafety.CAUTION


def normalize(raw: Union[str, bytes, Dict[str, Any]]) -> InteractionReport:
    """추론 서비스 응답을 검증하여 InteractionReport로 변환합니다.

    필수 필드 누락, 허용되지 않은 overallSafety/severity 값은
    MalformedResponseError로 처리합니다. findings 순서와 중복은 그대로 유지합니다.
    """
    data = _load(raw)

    for field in ("interactions", "overallSafety"):
        if field not in data or data[field] is None:
            raise MalformedResponseError(details=f"필수 필드 누락: {field}")

    try:
        report = InteractionReport.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        logger.error(f"[INTERACTION] 응답 스키마 검증 실패: {errors}")
        raise MalformedResponseError(details=errors)

    safety = _classify(report)
    if safety != report.overall_safety:
        logger.warning(
            f"[INTERACTION] overallSafety 보정: {report.overall_safety.value} -> {safety.value} "
            f"(findings {len(report.interactions)}개)"
        )
        report = report.model_copy(update={"overall_safety": safety})

    return report
