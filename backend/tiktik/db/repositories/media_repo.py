"""Chapters and subtitles attached to a video."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.models.video import Subtitle, VideoChapter


async def get_chapters(session: AsyncSession, video_id: int) -> list[VideoChapter]:
    result = await session.execute(
        select(VideoChapter).where(VideoChapter.video_id == video_id).order_by(VideoChapter.timestamp)
    )
    return list(result.scalars().all())


async def create_chapter(session: AsyncSession, video_id: int, title: str, timestamp: int) -> VideoChapter:
    chapter = VideoChapter(video_id=video_id, title=title, timestamp=timestamp)
    session.add(chapter)
    await session.flush()
    await session.refresh(chapter)
    return chapter


async def get_subtitles(session: AsyncSession, video_id: int) -> list[Subtitle]:
    result = await session.execute(
        select(Subtitle).where(Subtitle.video_id == video_id).order_by(Subtitle.language)
    )
    return list(result.scalars().all())


async def create_subtitle(
    session: AsyncSession,
    video_id: int,
    language: str,
    subtitle_url: str | None = None,
    subtitle_data: str | None = None,
    is_auto_generated: bool = False,
) -> Subtitle:
    subtitle = Subtitle(
        video_id=video_id,
        language=language,
        subtitle_url=subtitle_url,
        subtitle_data=subtitle_data,
        is_auto_generated=is_auto_generated,
    )
    session.add(subtitle)
    await session.flush()
    await session.refresh(subtitle)
    return subtitle
