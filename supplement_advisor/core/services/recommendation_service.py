from typing import Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from supplement_advisor.core.errors import MalformedResponseError, ValidationError
from supplement_advisor.models.supplement import RecommendationReport
from supplement_advisor.utils.openai_client import OpenAIClient
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('recommendation_service')

RECOMMEND_SYSTEM_PROMPT = (
    "당신은 영양제 및 건강 보조 식품 전문가입니다. 사용자의 증상을 분석하고 적절한 영양제와 "
    "구체적인 제품을 추천합니다. 항상 JSON 형식으로만 응답하세요."
)

KNOWN_BRANDS = ["센트룸", "종근당", "뉴트리코어", "솔가", "닥터스베스트", "나우푸드", "쏜리서치", "라이프익스텐션"]


def build_recommend_messages(symptom: str) -> List[Dict[str, str]]:
    """증상 텍스트를 그대로 포함한 추천 프롬프트"""
    prompt = f"""사용자가 다음과 같은 증상을 호소하고 있습니다: "{symptom}"

이 증상에 도움이 될 수 있는 영양제를 추천하고, 각 영양제에 대한 구체적인 제품명(브랜드 포함)도 함께 제시해주세요.

응답 형식 (반드시 JSON):
{{
  "supplements": [
    {{
      "name": "영양제 성분명 (예: 비타민D)",
      "description": "이 영양제가 증상에 도움이 되는 이유",
      "benefits": ["효능1", "효능2", "효능3"],
      "dosage": "권장 복용량",
      "recommendedProducts": [
        {{
          "productName": "구체적인 제품명 (예: 종근당 비타민D 2000IU)",
          "brand": "브랜드명",
          "features": "제품 특징",
          "estimatedPrice": "예상 가격대 (예: 15,000-20,000원)"
        }}
      ]
    }}
  ],
  "generalAdvice": "전반적인 건강 조언",
  "precautions": ["주의사항1", "주의사항2"]
}}

- 실제 한국 시장에서 구매 가능한 유명 브랜드 제품을 추천하세요 ({', '.join(KNOWN_BRANDS)} 등)
- 각 영양제당 2-3개의 구체적인 제품을 추천하세요
- 가격대도 현실적으로 제시하세요"""

    return [
        {"role": "system", "content": RECOMMEND_SYSTEM_PROMPT},
        {"role": "user", "content": prompt}
    ]


class RecommendationService:
    """증상 기반 영양제 추천"""

    def __init__(self, reasoning_client: OpenAIClient, temperature: Optional[float] = None):
        self.reasoning_client = reasoning_client
        self.temperature = (
            temperature if temperature is not None
            else reasoning_client.settings['chat'].get('recommend_temperature', 0.7)
        )

    async def recommend(self, symptom: str) -> RecommendationReport:
        if not isinstance(symptom, str) or not symptom.strip():
            raise ValidationError("증상을 입력해주세요.")

        logger.info(f"[RECOMMEND] 추천 요청 - 증상: {symptom}")
        raw = await self.reasoning_client.complete_json(
            build_recommend_messages(symptom),
            self.temperature
        )

        if "supplements" not in raw:
            raise MalformedResponseError(details="필수 필드 누락: supplements")
        try:
            report = RecommendationReport.model_validate(raw)
        except PydanticValidationError as e:
            logger.error(f"[RECOMMEND] 응답 스키마 검증 실패: {e.errors()}")
            raise MalformedResponseError(
                details=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            )

        logger.info(f"[RECOMMEND] 영양제 {len(report.supplements)}개 추천")
        return report
