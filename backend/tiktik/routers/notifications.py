from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import notification_repo
from tiktik.schemas.common import SuccessResponse
from tiktik.schemas.notification import NotificationListResponse, NotificationResponse

router = APIRouter()


@router.get("/{user_id}", response_model=NotificationListResponse)
async def list_notifications(user_id: int, db: AsyncSession = Depends(get_db)):
    notifications = await notification_repo.get_notifications_by_user(db, user_id)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications]
    )


@router.post("/{notification_id}/read", response_model=SuccessResponse)
async def mark_notification_read(notification_id: int, db: AsyncSession = Depends(get_db)):
    await notification_repo.mark_read(db, notification_id)
    await db.commit()
    return SuccessResponse()
