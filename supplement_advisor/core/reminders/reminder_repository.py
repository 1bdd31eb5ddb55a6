from typing import List
from pydantic import ValidationError as PydanticValidationError
from supplement_advisor.core.errors import MalformedResponseError, NotFoundError, UnauthorizedError
from supplement_advisor.core.reminders.key_value_store import KeyValueStore
from supplement_advisor.models.reminder import Reminder
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('reminder_repository')

KEY_PREFIX = "reminders:"


def reminders_key(user_id: str) -> str:
    if not isinstance(user_id, str) or not user_id.strip():
        raise UnauthorizedError()
    return f"{KEY_PREFIX}{user_id}"


class ReminderRepository:
    """사용자별 리마인더 목록 저장소 (list / append / replace)

    원자적 목록 연산을 가정하지 않는 read-modify-write 구조이며,
    같은 사용자의 동시 쓰기는 마지막 쓰기가 남습니다.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def list(self, user_id: str) -> List[Reminder]:
        raw = await self.store.get(reminders_key(user_id))
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"[REMINDER] 목록이 아닌 값 - user={user_id}")
            raise MalformedResponseError("저장소 데이터 형식이 올바르지 않습니다.")
        try:
            return [Reminder.model_validate(item) for item in raw]
        except PydanticValidationError as e:
            logger.error(f"[REMINDER] 형식이 잘못된 항목 - user={user_id}: {len(e.errors())}건")
            raise MalformedResponseError("저장소 데이터 형식이 올바르지 않습니다.")

    async def replace(self, user_id: str, reminders: List[Reminder]) -> None:
        await self.store.set(
            reminders_key(user_id),
            [reminder.model_dump(by_alias=True) for reminder in reminders]
        )

    async def append(self, user_id: str, reminder: Reminder) -> None:
        reminders = await self.list(user_id)
        reminders.append(reminder)
        await self.replace(user_id, reminders)

    async def remove(self, user_id: str, reminder_id: str) -> None:
        reminders = await self.list(user_id)
        remaining = [r for r in reminders if r.id != reminder_id]
        if len(remaining) == len(reminders):
            raise NotFoundError(details={"reminderId": reminder_id})
        await self.replace(user_id, remaining)
