from typing import List
from pydantic import BaseModel, ConfigDict, Field


class RecommendedProduct(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(alias="productName")
    brand: str = ""
    features: str = ""
    estimated_price: str = Field(default="", alias="estimatedPrice")  # 예: 15,000-20,000원


class SupplementRecommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    benefits: List[str] = Field(default_factory=list)
    dosage: str = ""
    recommended_products: List[RecommendedProduct] = Field(default_factory=list, alias="recommendedProducts")


class RecommendationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    supplements: List[SupplementRecommendation]
    general_advice: str = Field(default="", alias="generalAdvice")
    precautions: List[str] = Field(default_factory=list)


class SupplementInfo(BaseModel):
    description: str
    benefits: List[str] = Field(default_factory=list)
    dosage: str = ""
