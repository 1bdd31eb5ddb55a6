from typing import Dict, List, Sequence
from supplement_advisor.core.errors import InsufficientInputError
from supplement_advisor.core.ingredients.extractor import IngredientExtractor
from supplement_advisor.models.interaction import InteractionRequest
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('interaction_request_builder')

INTERACTION_SYSTEM_PROMPT = (
    "당신은 영양제 상호작용 전문가입니다. 여러 영양제를 동시에 복용할 때의 안전성을 평가하고, "
    "성분 간 상호작용을 분석합니다. 항상 JSON 형식으로만 응답하세요."
)

INTERACTION_RESPONSE_SCHEMA = """{
  "interactions": [
    {
      "supplement": "제품명",
      "extractedIngredients": ["성분1", "성분2"],
      "conflicts": ["충돌하는 다른 제품명"],
      "conflictIngredients": ["충돌하는 성분"],
      "warning": "상세한 경고 메시지 (한국어)",
      "severity": "high|medium|low",
      "recommendation": "복용 권장사항 (한국어)"
    }
  ],
  "overallSafety": "safe|caution|warning",
  "generalAdvice": "전반적인 조언 (한국어)"
}"""

INTERACTION_GUIDELINES = """상호작용이 없으면 interactions 배열을 비우고 overallSafety를 "safe"로 응답해주세요.
위 JSON 외의 다른 텍스트는 포함하지 마세요.
주의사항:
- 같이 복용하면 흡수율이 감소하는 경우 (예: 칼슘+철분, 칼슘+마그네슘)
- 출혈 위험이 증가하는 경우 (예: 오메가3+은행잎, 비타민E+혈액응고제)
- 독성이 증가하는 경우 (예: 고용량 비타민A+비타민D)
- 다른 약물의 효과를 변경시키는 경우"""


class InteractionRequestBuilder:
    """제품명 목록으로 상호작용 분석 요청을 조립합니다."""

    def __init__(self, extractor: IngredientExtractor, temperature: float = 0.3):
        self.extractor = extractor
        self.temperature = temperature

    @staticmethod
    def _distinct_names(product_names: Sequence[str]) -> List[str]:
        names: List[str] = []
        for name in product_names or []:
            if not isinstance(name, str):
                continue
            name = name.strip()
            if name and name not in names:
                names.append(name)
        return names

    def build_interaction_prompt(self, product_names: Sequence[str]) -> InteractionRequest:
        names = self._distinct_names(product_names)
        if len(names) < 2:
            raise InsufficientInputError(
                "최소 2개 이상의 제품이 필요합니다.",
                details={"productCount": len(names)}
            )

        local_ingredients: Dict[str, List[str]] = {
            name: self.extractor.extract_ordered(name) for name in names
        }
        distinct = {ingredient for ingredients in local_ingredients.values() for ingredient in ingredients}
        if len(distinct) < 2:
            raise InsufficientInputError(
                "상호작용을 확인하려면 2개 이상의 영양 성분이 필요합니다.",
                details={"ingredientCount": len(distinct)}
            )

        product_lines = "\n".join(f"{i + 1}. {name}" for i, name in enumerate(names))
        user_prompt = f"""다음 영양제 제품들을 분석해주세요:
{product_lines}

각 제품명에서 주요 영양 성분을 독립적으로 추출하고, 이들 성분 간의 상호작용을 분석해주세요.
충돌이 발견되면 관련 제품과 성분, 심각도(high/medium/low)와 그 근거를 제시해주세요.

응답 형식 (반드시 JSON):
{INTERACTION_RESPONSE_SCHEMA}

{INTERACTION_GUIDELINES}"""

        logger.info(f"[INTERACTION] 요청 생성: 제품 {len(names)}개, 로컬 추출 성분 {len(distinct)}개")
        return InteractionRequest(
            product_names=names,
            local_ingredients=local_ingredients,
            messages=[
                {"role": "system", "content": INTERACTION_SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt}
            ],
            temperature=self.temperature
        )
