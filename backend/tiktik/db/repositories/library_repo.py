from datetime import datetime
from typing import Literal
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.repositories.user_repo import user_exists
from tiktik.db.repositories.video_repo import video_exists
from tiktik.db.session import dialect_insert
from tiktik.errors import NotFoundError
from tiktik.models.analytics import Analytics
from tiktik.models.library import WatchHistory, WatchLater
from tiktik.models.video import Video


async def _require_user(session: AsyncSession, user_id: int) -> None:
    if not await user_exists(session, user_id):
        raise NotFoundError("User not found")


async def _require_video(session: AsyncSession, video_id: int) -> None:
    if not await video_exists(session, video_id):
        raise NotFoundError("Video not found")


async def record_view(
    session: AsyncSession,
    video_id: int,
    user_id: int | None = None,
    watch_time: int = 0,
    completed: bool = False,
    device_type: str | None = None,
    session_id: str | None = None,
) -> Analytics:
    """Count one view and append its analytics event. Callers decide what counts as a view."""
    if user_id is not None:
        await _require_user(session, user_id)
    result = await session.execute(
        update(Video)
        .where(Video.id == video_id)
        .values(views=Video.views + 1)
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        raise NotFoundError("Video not found")
    event = Analytics(
        video_id=video_id,
        user_id=user_id,
        watch_time=watch_time,
        completed=completed,
        device_type=device_type,
        session_id=session_id,
    )
    session.add(event)
    await session.flush()
    return event


async def upsert_watch_history(
    session: AsyncSession, user_id: int, video_id: int, watch_time: int, completed: bool = False
) -> None:
    """Last write wins: the stored watch_time is replaced, never accumulated."""
    await _require_user(session, user_id)
    await _require_video(session, video_id)
    now = datetime.utcnow()
    stmt = dialect_insert(session, WatchHistory).values(
        user_id=user_id,
        video_id=video_id,
        watch_time=watch_time,
        completed=completed,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "video_id"],
        set_={"watch_time": stmt.excluded.watch_time, "completed": stmt.excluded.completed, "updated_at": now},
    )
    await session.execute(stmt)


async def get_watch_history_entry(session: AsyncSession, user_id: int, video_id: int) -> WatchHistory | None:
    result = await session.execute(
        select(WatchHistory)
        .where(WatchHistory.user_id == user_id, WatchHistory.video_id == video_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().one_or_none()


async def toggle_watch_later(session: AsyncSession, user_id: int, video_id: int) -> Literal["added", "removed"]:
    await _require_video(session, video_id)
    removed = await session.execute(
        delete(WatchLater)
        .where(WatchLater.user_id == user_id, WatchLater.video_id == video_id)
        .execution_options(synchronize_session=False)
    )
    if removed.rowcount:
        return "removed"
    await session.execute(
        dialect_insert(session, WatchLater).values(user_id=user_id, video_id=video_id).on_conflict_do_nothing()
    )
    return "added"


async def get_video_analytics(session: AsyncSession, video_id: int) -> dict:
    await _require_video(session, video_id)
    result = await session.execute(
        select(Analytics).where(Analytics.video_id == video_id).order_by(Analytics.created_at, Analytics.id)
    )
    events = list(result.scalars().all())
    return {
        "total_views": len(events),
        "unique_viewers": len({e.user_id for e in events if e.user_id is not None}),
        "total_watch_time": sum(e.watch_time or 0 for e in events),
        "events": events,
    }
