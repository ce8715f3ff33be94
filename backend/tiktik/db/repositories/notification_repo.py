from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.errors import NotFoundError
from tiktik.models.notification import Notification

NOTIFICATION_LIMIT = 50


async def create_notification(
    session: AsyncSession,
    user_id: int,
    type: str,
    title: str,
    message: str | None = None,
    link: str | None = None,
) -> Notification:
    notification = Notification(user_id=user_id, type=type, title=title, message=message, link=link)
    session.add(notification)
    await session.flush()
    return notification


async def get_notifications_by_user(
    session: AsyncSession, user_id: int, limit: int = NOTIFICATION_LIMIT
) -> list[Notification]:
    result = await session.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def mark_read(session: AsyncSession, notification_id: int) -> None:
    result = await session.execute(
        update(Notification)
        .where(Notification.id == notification_id)
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        raise NotFoundError("Notification not found")
