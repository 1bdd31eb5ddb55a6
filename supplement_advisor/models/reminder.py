from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
import uuid


class Reminder(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    supplement: str
    time: str              # HH:MM
    days: List[str]        # 요일 라벨 (월~일)
    created_at: str = Field(alias="createdAt")

    @classmethod
    def create_new(cls, supplement: str, time: str, days: List[str]) -> "Reminder":
        """새로운 리마인더를 생성합니다."""
        return cls(
            id=str(uuid.uuid4()),
            supplement=supplement,
            time=time,
            days=days,
            created_at=datetime.now(timezone.utc).isoformat()
        )


class AuthenticatedUser(BaseModel):
    """인증 서비스에서 확인된 사용자"""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
