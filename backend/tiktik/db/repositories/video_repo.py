"""Video persistence and the read projection shared by every video listing.

A projected video is a plain dict: all ``videos`` columns plus the uploader's
``channel`` name and ``avatar`` and live ``likes``/``dislikes`` counts taken
from the ``likes`` table. The stored ``likes_count``/``dislikes_count``
columns are never used for reads.
"""
from datetime import datetime
from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.models.like import Like, ReactionType
from tiktik.models.library import WatchHistory, WatchLater
from tiktik.models.playlist import Playlist, PlaylistVideo
from tiktik.models.subscription import Subscription
from tiktik.models.user import User
from tiktik.models.video import Video, VideoStatus

VIDEO_LIST_LIMIT = 100
FEED_LIMIT = 50


def _reaction_count(kind: ReactionType):
    return (
        select(func.count(Like.id))
        .where(Like.video_id == Video.id, Like.type == kind.value)
        .correlate(Video)
        .scalar_subquery()
    )


def video_projection(*extra_columns) -> Select:
    return (
        select(
            Video,
            User.name.label("channel"),
            User.avatar.label("avatar"),
            _reaction_count(ReactionType.like).label("likes"),
            _reaction_count(ReactionType.dislike).label("dislikes"),
            *extra_columns,
        )
        .join(User, User.id == Video.user_id)
        .execution_options(populate_existing=True)
    )


def to_video_view(row) -> dict:
    video = row[0]
    view = {c.key: getattr(video, c.key) for c in Video.__table__.columns}
    view.update(zip(row._fields[1:], row[1:]))
    return view


async def get_video_by_id(session: AsyncSession, video_id: int) -> Video | None:
    result = await session.execute(
        select(Video).where(Video.id == video_id).execution_options(populate_existing=True)
    )
    return result.scalars().one_or_none()


async def video_exists(session: AsyncSession, video_id: int) -> bool:
    result = await session.execute(select(Video.id).where(Video.id == video_id))
    return result.scalar_one_or_none() is not None


async def get_video_view(session: AsyncSession, video_id: int) -> dict | None:
    result = await session.execute(video_projection().where(Video.id == video_id))
    row = result.first()
    return to_video_view(row) if row else None


async def list_videos(
    session: AsyncSession,
    user_id: int | None = None,
    category: str | None = None,
    search: str | None = None,
    limit: int = VIDEO_LIST_LIMIT,
) -> list[dict]:
    q = video_projection().where(Video.status == VideoStatus.live.value)
    if user_id is not None:
        q = q.where(Video.user_id == user_id)
    if category and category != "all":
        q = q.where(Video.category == category)
    if search:
        term = search.lower()
        q = q.where(
            or_(
                func.lower(Video.title).contains(term, autoescape=True),
                func.lower(func.coalesce(Video.description, "")).contains(term, autoescape=True),
            )
        )
    q = q.order_by(Video.created_at.desc(), Video.id.desc()).limit(limit)
    result = await session.execute(q)
    return [to_video_view(row) for row in result.all()]


async def get_subscription_feed(session: AsyncSession, follower_id: int, limit: int = FEED_LIMIT) -> list[dict]:
    channels = select(Subscription.channel_id).where(Subscription.follower_id == follower_id)
    result = await session.execute(
        video_projection()
        .where(Video.user_id.in_(channels), Video.status == VideoStatus.live.value)
        .order_by(Video.created_at.desc(), Video.id.desc())
        .limit(limit)
    )
    return [to_video_view(row) for row in result.all()]


async def list_pending_videos(session: AsyncSession) -> list[dict]:
    result = await session.execute(
        video_projection()
        .where(Video.status == VideoStatus.pending.value)
        .order_by(Video.created_at.desc(), Video.id.desc())
    )
    return [to_video_view(row) for row in result.all()]


async def list_watch_later(session: AsyncSession, user_id: int) -> list[dict]:
    saved = select(WatchLater.video_id).where(WatchLater.user_id == user_id)
    result = await session.execute(
        video_projection().where(Video.id.in_(saved)).order_by(Video.created_at.desc(), Video.id.desc())
    )
    return [to_video_view(row) for row in result.all()]


async def list_watch_history(session: AsyncSession, user_id: int) -> list[dict]:
    result = await session.execute(
        video_projection(WatchHistory.watch_time.label("watch_time"), WatchHistory.updated_at.label("last_watched"))
        .join(WatchHistory, WatchHistory.video_id == Video.id)
        .where(WatchHistory.user_id == user_id)
        .order_by(WatchHistory.updated_at.desc(), WatchHistory.id.desc())
    )
    return [to_video_view(row) for row in result.all()]


async def create_video(
    session: AsyncSession,
    user_id: int,
    title: str,
    description: str | None = None,
    category: str | None = None,
    video_url: str | None = None,
    video_path: str | None = None,
    status: VideoStatus = VideoStatus.pending,
) -> Video:
    video = Video(
        user_id=user_id,
        title=title,
        description=description,
        category=category,
        video_url=video_url,
        video_path=video_path,
        status=status.value,
        published_at=datetime.utcnow() if status == VideoStatus.live else None,
    )
    session.add(video)
    await session.flush()
    await session.refresh(video)
    return video


async def set_status(session: AsyncSession, video: Video, status: VideoStatus) -> Video:
    video.status = status.value
    if status == VideoStatus.live:
        video.published_at = datetime.utcnow()
    video.updated_at = datetime.utcnow()
    await session.flush()
    await session.refresh(video)
    return video


async def release_from_playlists(session: AsyncSession, video_ids: Select) -> None:
    """Lower video_count on every playlist holding one of the videos about to be deleted."""
    held = (
        select(func.count(PlaylistVideo.id))
        .where(PlaylistVideo.playlist_id == Playlist.id, PlaylistVideo.video_id.in_(video_ids))
        .correlate(Playlist)
        .scalar_subquery()
    )
    containing = select(PlaylistVideo.playlist_id).where(PlaylistVideo.video_id.in_(video_ids))
    await session.execute(
        update(Playlist)
        .where(Playlist.id.in_(containing))
        .values(video_count=Playlist.video_count - held, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )


async def delete_video(session: AsyncSession, video: Video) -> None:
    await release_from_playlists(session, select(Video.id).where(Video.id == video.id))
    await session.delete(video)
    await session.flush()
