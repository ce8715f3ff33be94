from datetime import datetime
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.repositories.video_repo import video_projection, to_video_view
from tiktik.db.session import dialect_insert
from tiktik.errors import ConflictError, NotFoundError
from tiktik.models.playlist import Playlist, PlaylistVideo
from tiktik.models.video import Video


async def create_playlist(
    session: AsyncSession, user_id: int, title: str, description: str | None = None, privacy: str = "public"
) -> Playlist:
    playlist = Playlist(user_id=user_id, title=title, description=description, privacy=privacy)
    session.add(playlist)
    await session.flush()
    await session.refresh(playlist)
    return playlist


async def get_playlist_by_id(session: AsyncSession, playlist_id: int) -> Playlist | None:
    result = await session.execute(
        select(Playlist).where(Playlist.id == playlist_id).execution_options(populate_existing=True)
    )
    return result.scalars().one_or_none()


async def get_playlists_by_user(session: AsyncSession, user_id: int) -> list[Playlist]:
    result = await session.execute(
        select(Playlist).where(Playlist.user_id == user_id).order_by(Playlist.created_at.desc(), Playlist.id.desc())
    )
    return list(result.scalars().all())


async def list_playlist_videos(session: AsyncSession, playlist_id: int) -> list[dict]:
    result = await session.execute(
        video_projection(PlaylistVideo.position.label("position"))
        .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        .where(PlaylistVideo.playlist_id == playlist_id)
        .order_by(PlaylistVideo.position)
    )
    return [to_video_view(row) for row in result.all()]


async def add_video(session: AsyncSession, playlist: Playlist, video_id: int) -> PlaylistVideo:
    """Append a video at the end of the playlist."""
    result = await session.execute(select(Video.id).where(Video.id == video_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Video not found")
    last = await session.execute(
        select(func.max(PlaylistVideo.position)).where(PlaylistVideo.playlist_id == playlist.id)
    )
    position = (last.scalar() or 0) + 1
    inserted = await session.execute(
        dialect_insert(session, PlaylistVideo)
        .values(playlist_id=playlist.id, video_id=video_id, position=position)
        .on_conflict_do_nothing()
    )
    if not inserted.rowcount:
        raise ConflictError("Video already in playlist")
    await session.execute(
        update(Playlist)
        .where(Playlist.id == playlist.id)
        .values(video_count=Playlist.video_count + 1, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    item = await session.execute(
        select(PlaylistVideo).where(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
    )
    return item.scalars().one()


async def remove_video(session: AsyncSession, playlist: Playlist, video_id: int) -> None:
    removed = await session.execute(
        delete(PlaylistVideo)
        .where(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
        .execution_options(synchronize_session=False)
    )
    if not removed.rowcount:
        raise NotFoundError("Video not in playlist")
    await session.execute(
        update(Playlist)
        .where(Playlist.id == playlist.id)
        .values(video_count=Playlist.video_count - 1, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
