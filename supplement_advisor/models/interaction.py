from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


class OverallSafety(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"


class Product(BaseModel):
    """성분 추출에 성공한 제품"""
    name: str
    ingredients: List[str]


class InteractionFinding(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    supplement: str                                         # 대상 제품
    extracted_ingredients: List[str] = Field(default_factory=list, alias="extractedIngredients")
    conflicts: List[str] = Field(default_factory=list)      # 충돌하는 다른 제품
    conflict_ingredients: List[str] = Field(default_factory=list, alias="conflictIngredients")
    warning: str = ""
    severity: Severity
    recommendation: str = ""


class InteractionReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    interactions: List[InteractionFinding]
    overall_safety: OverallSafety = Field(alias="overallSafety")
    general_advice: str = Field(default="", alias="generalAdvice")


class InteractionRequest(BaseModel):
    """추론 서비스에 보낼 상호작용 분석 요청"""
    product_names: List[str]
    local_ingredients: Dict[str, List[str]]
    messages: List[Dict[str, str]]
    temperature: float = 0.3
