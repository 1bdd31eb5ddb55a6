from fastapi import APIRouter, Depends
from supplement_advisor.api.dependencies import get_current_user, get_reminder_store
from supplement_advisor.core.reminders.reminder_store import ReminderStore
from supplement_advisor.models.reminder import AuthenticatedUser
from supplement_advisor.models.requests import CreateReminderRequest

router = APIRouter()


@router.post("/reminders")
async def create_reminder(
    body: CreateReminderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: ReminderStore = Depends(get_reminder_store)
):
    """복용 알림 저장"""
    reminder = await store.create(user.id, body.supplement, body.time, body.days)
    return {"success": True, "reminder": reminder.model_dump(by_alias=True)}


@router.get("/reminders")
async def list_reminders(
    user: AuthenticatedUser = Depends(get_current_user),
    store: ReminderStore = Depends(get_reminder_store)
):
    """복용 알림 조회"""
    reminders = await store.list(user.id)
    return {"reminders": [reminder.model_dump(by_alias=True) for reminder in reminders]}


@router.delete("/reminders/{reminder_id}")
async def delete_reminder(
    reminder_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: ReminderStore = Depends(get_reminder_store)
):
    """복용 알림 삭제 (없는 ID도 성공)"""
    await store.delete(user.id, reminder_id)
    return {"success": True}
