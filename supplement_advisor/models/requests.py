from typing import List
from pydantic import BaseModel, ConfigDict, Field


class RecommendRequest(BaseModel):
    symptom: str


class SignupRequest(BaseModel):
    email: str
    password: str
    name: str = ""


class ExtractIngredientsRequest(BaseModel):
    product_name: str = Field(alias="productName")


class CheckInteractionsRequest(BaseModel):
    supplements: List[str]


class NaverShoppingRequest(BaseModel):
    query: str
    display: int = 10


class FoodSafetyRequest(BaseModel):
    product_name: str = Field(alias="productName")


class SupplementInfoRequest(BaseModel):
    supplement: str


class CreateReminderRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "supplement": "비타민D",
            "time": "09:00",
            "days": ["월", "수", "금"]
        }
    })

    supplement: str
    time: str
    days: List[str]
