import re
from typing import List, Optional, Sequence
from supplement_advisor.core.errors import NotFoundError, UnauthorizedError, ValidationError
from supplement_advisor.core.reminders.reminder_repository import ReminderRepository
from supplement_advisor.models.reminder import Reminder
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('reminder_store')

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DEFAULT_WEEKDAYS = ["월", "화", "수", "목", "금", "토", "일"]


class ReminderStore:
    """사용자별 복용 알림 CRUD"""

    def __init__(self, repository: ReminderRepository, weekdays: Optional[Sequence[str]] = None):
        self.repository = repository
        self.weekdays = list(weekdays or DEFAULT_WEEKDAYS)

    @staticmethod
    def _require_identity(user_id: Optional[str]) -> str:
        if not isinstance(user_id, str) or not user_id.strip():
            raise UnauthorizedError()
        return user_id

    def _validate(self, supplement: str, time: str, days: Sequence[str]) -> List[str]:
        if not isinstance(supplement, str) or not supplement.strip():
            raise ValidationError("영양제 이름을 입력해주세요.")
        if not isinstance(time, str) or not TIME_PATTERN.match(time):
            raise ValidationError("시간은 HH:MM 형식이어야 합니다.", details={"time": time})
        if not days:
            raise ValidationError("요일을 하나 이상 선택해주세요.")

        unknown = [day for day in days if day not in self.weekdays]
        if unknown:
            raise ValidationError("알 수 없는 요일이 포함되어 있습니다.", details={"days": unknown})

        # 중복 제거, 요일 순서로 정렬
        return [day for day in self.weekdays if day in days]

    async def create(self, user_id: str, supplement: str, time: str, days: Sequence[str]) -> Reminder:
        user_id = self._require_identity(user_id)
        normalized_days = self._validate(supplement, time, days)

        reminder = Reminder.create_new(supplement.strip(), time, normalized_days)
        await self.repository.append(user_id, reminder)
        logger.info(f"[REMINDER] 알림 저장 - user={user_id}, {reminder.supplement} {reminder.time}")
        return reminder

    async def list(self, user_id: str) -> List[Reminder]:
        user_id = self._require_identity(user_id)
        reminders = await self.repository.list(user_id)
        logger.info(f"[REMINDER] 알림 {len(reminders)}개 조회 - user={user_id}")
        return reminders

    async def delete(self, user_id: str, reminder_id: str) -> None:
        """삭제 (없는 ID는 아무 것도 하지 않음)"""
        user_id = self._require_identity(user_id)
        try:
            await self.repository.remove(user_id, reminder_id)
            logger.info(f"[REMINDER] 알림 삭제 - user={user_id}, id={reminder_id}")
        except NotFoundError:
            logger.info(f"[REMINDER] 삭제할 알림 없음 - user={user_id}, id={reminder_id}")
