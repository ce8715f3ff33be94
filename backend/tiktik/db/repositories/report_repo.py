from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.errors import NotFoundError, ValidationError
from tiktik.models.comment import Comment
from tiktik.models.report import Report, Revenue
from tiktik.models.video import Video


async def create_report(
    session: AsyncSession,
    reporter_id: int,
    reason: str,
    video_id: int | None = None,
    comment_id: int | None = None,
    description: str | None = None,
) -> Report:
    if video_id is None and comment_id is None:
        raise ValidationError("videoId or commentId required")
    if video_id is not None:
        found = await session.execute(select(Video.id).where(Video.id == video_id))
        if found.scalar_one_or_none() is None:
            raise NotFoundError("Video not found")
    if comment_id is not None:
        found = await session.execute(select(Comment.id).where(Comment.id == comment_id))
        if found.scalar_one_or_none() is None:
            raise NotFoundError("Comment not found")
    report = Report(
        reporter_id=reporter_id,
        video_id=video_id,
        comment_id=comment_id,
        reason=reason,
        description=description,
    )
    session.add(report)
    await session.flush()
    await session.refresh(report)
    return report


async def get_pending_reports(session: AsyncSession) -> list[Report]:
    result = await session.execute(
        select(Report).where(Report.status == "pending").order_by(Report.created_at.desc(), Report.id.desc())
    )
    return list(result.scalars().all())


async def get_revenue_by_user(session: AsyncSession, user_id: int) -> list[Revenue]:
    result = await session.execute(
        select(Revenue).where(Revenue.user_id == user_id).order_by(Revenue.created_at.desc(), Revenue.id.desc())
    )
    return list(result.scalars().all())
