from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import playlist_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import NotFoundError, PermissionDeniedError
from tiktik.models.playlist import Playlist
from tiktik.models.user import User
from tiktik.schemas.common import SuccessResponse
from tiktik.schemas.playlist import (
    PlaylistCreate,
    PlaylistEnvelope,
    PlaylistItemEnvelope,
    PlaylistItemRequest,
    PlaylistItemResponse,
    PlaylistListResponse,
    PlaylistResponse,
)
from tiktik.schemas.video import VideoListResponse

router = APIRouter()


async def _get_owned_playlist(db: AsyncSession, playlist_id: int, user: User) -> Playlist:
    playlist = await playlist_repo.get_playlist_by_id(db, playlist_id)
    if not playlist:
        raise NotFoundError("Playlist not found")
    if playlist.user_id != user.id:
        raise PermissionDeniedError("Not the owner of this playlist")
    return playlist


@router.post("", response_model=PlaylistEnvelope)
async def create_playlist(
    body: PlaylistCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    playlist = await playlist_repo.create_playlist(
        db, current_user.id, body.title, description=body.description, privacy=body.privacy
    )
    await db.commit()
    return PlaylistEnvelope(playlist=PlaylistResponse.model_validate(playlist))


@router.get("/{user_id}", response_model=PlaylistListResponse)
async def list_playlists(user_id: int, db: AsyncSession = Depends(get_db)):
    playlists = await playlist_repo.get_playlists_by_user(db, user_id)
    return PlaylistListResponse(playlists=[PlaylistResponse.model_validate(p) for p in playlists])


@router.get("/{playlist_id}/videos", response_model=VideoListResponse)
async def list_playlist_videos(playlist_id: int, db: AsyncSession = Depends(get_db)):
    playlist = await playlist_repo.get_playlist_by_id(db, playlist_id)
    if not playlist:
        raise NotFoundError("Playlist not found")
    videos = await playlist_repo.list_playlist_videos(db, playlist_id)
    return VideoListResponse(videos=videos)


@router.post("/{playlist_id}/videos", response_model=PlaylistItemEnvelope)
async def add_playlist_video(
    playlist_id: int,
    body: PlaylistItemRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    playlist = await _get_owned_playlist(db, playlist_id, current_user)
    item = await playlist_repo.add_video(db, playlist, body.video_id)
    await db.commit()
    return PlaylistItemEnvelope(item=PlaylistItemResponse.model_validate(item))


@router.delete("/{playlist_id}/videos/{video_id}", response_model=SuccessResponse)
async def remove_playlist_video(
    playlist_id: int,
    video_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    playlist = await _get_owned_playlist(db, playlist_id, current_user)
    await playlist_repo.remove_video(db, playlist, video_id)
    await db.commit()
    return SuccessResponse()
