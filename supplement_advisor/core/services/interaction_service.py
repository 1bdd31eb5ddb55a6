from typing import Sequence
from supplement_advisor.core.interactions.request_builder import InteractionRequestBuilder
from supplement_advisor.core.interactions.result_normalizer import normalize
from supplement_advisor.models.interaction import InteractionReport
from supplement_advisor.utils.openai_client import OpenAIClient
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('interaction_service')


class InteractionService:
    """제품 간 상호작용 분석 (요청 생성 -> 추론 호출 1회 -> 정규화)"""

    def __init__(self, request_builder: InteractionRequestBuilder, reasoning_client: OpenAIClient):
        self.request_builder = request_builder
        self.reasoning_client = reasoning_client

    async def check_interactions(self, product_names: Sequence[str]) -> InteractionReport:
        request = self.request_builder.build_interaction_prompt(product_names)
        logger.info(f"[INTERACTION] 상호작용 분석 요청: {', '.join(request.product_names)}")

        raw = await self.reasoning_client.complete_json(request.messages, request.temperature)
        report = normalize(raw)

        logger.info(
            f"[INTERACTION] 상호작용 {len(report.interactions)}개 발견, "
            f"전체 안전도: {report.overall_safety.value}"
        )
        return report
