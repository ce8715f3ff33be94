import logging
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import library_repo, media_repo, reaction_repo, video_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import NotFoundError, PermissionDeniedError
from tiktik.models.user import User
from tiktik.models.video import Video, VideoStatus
from tiktik.schemas.common import ActionResponse, SuccessResponse
from tiktik.schemas.video import (
    ChapterCreate,
    ChapterEnvelope,
    ChapterListResponse,
    ChapterResponse,
    ReactionRequest,
    SubtitleCreate,
    SubtitleEnvelope,
    SubtitleListResponse,
    SubtitleResponse,
    VideoCreate,
    VideoDetailResponse,
    VideoEnvelope,
    VideoListResponse,
    ViewRequest,
)
from tiktik.services import upload_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_owned_video(db: AsyncSession, video_id: int, user: User) -> Video:
    video = await video_repo.get_video_by_id(db, video_id)
    if not video:
        raise NotFoundError("Video not found")
    if video.user_id != user.id and not user.is_admin:
        raise PermissionDeniedError("Not the owner of this video")
    return video


@router.get("", response_model=VideoListResponse)
async def list_videos(
    user_id: int | None = Query(None, alias="userId"),
    category: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Live videos, newest first, at most 100."""
    videos = await video_repo.list_videos(db, user_id=user_id, category=category, search=search)
    return VideoListResponse(videos=videos)


@router.post("", response_model=VideoEnvelope)
async def create_video(
    body: VideoCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Register a video hosted elsewhere by URL. It goes live immediately."""
    video = await video_repo.create_video(
        db,
        user_id=current_user.id,
        title=body.title,
        description=body.description,
        category=body.category,
        video_url=body.video_url,
        status=VideoStatus.live,
    )
    view = await video_repo.get_video_view(db, video.id)
    await db.commit()
    logger.info(f"User {current_user.id} created video {video.id} from URL")
    return VideoEnvelope(video=view)


@router.post("/upload", response_model=VideoEnvelope)
async def upload_video(
    video: UploadFile = File(...),
    title: str = Form(..., min_length=1),
    description: str | None = Form(None),
    category: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store an uploaded file. The video waits in moderation until an admin approves it."""
    video_path, video_url = await upload_service.save_video_file(video)
    try:
        created = await video_repo.create_video(
            db,
            user_id=current_user.id,
            title=title,
            description=description,
            category=category,
            video_url=video_url,
            video_path=video_path,
            status=VideoStatus.pending,
        )
        view = await video_repo.get_video_view(db, created.id)
        await db.commit()
    except Exception:
        upload_service.remove_file(video_path)
        raise
    logger.info(f"User {current_user.id} uploaded video {created.id}, pending review")
    return VideoEnvelope(video=view)


@router.get("/{video_id}", response_model=VideoDetailResponse)
async def get_video(video_id: int, db: AsyncSession = Depends(get_db)):
    view = await video_repo.get_video_view(db, video_id)
    if not view:
        raise NotFoundError("Video not found")
    return VideoDetailResponse(video=view)


@router.delete("/{video_id}", response_model=SuccessResponse)
async def delete_video(
    video_id: int,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    video = await _get_owned_video(db, video_id, current_user)
    video_path = video.video_path
    await video_repo.delete_video(db, video)
    await db.commit()
    background_tasks.add_task(upload_service.remove_file, video_path)
    return SuccessResponse()


@router.post("/{video_id}/like", response_model=ActionResponse)
async def react_to_video(
    video_id: int,
    body: ReactionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    action = await reaction_repo.toggle_reaction(db, current_user.id, body.type, video_id=video_id)
    await db.commit()
    return ActionResponse(action=action)


@router.post("/{video_id}/view", response_model=SuccessResponse)
async def record_view(video_id: int, body: ViewRequest, db: AsyncSession = Depends(get_db)):
    await library_repo.record_view(
        db,
        video_id,
        user_id=body.user_id,
        watch_time=body.watch_time,
        completed=body.completed,
        device_type=body.device_type,
        session_id=body.session_id,
    )
    await db.commit()
    return SuccessResponse()


@router.get("/{video_id}/chapters", response_model=ChapterListResponse)
async def list_chapters(video_id: int, db: AsyncSession = Depends(get_db)):
    chapters = await media_repo.get_chapters(db, video_id)
    return ChapterListResponse(chapters=[ChapterResponse.model_validate(c) for c in chapters])


@router.post("/{video_id}/chapters", response_model=ChapterEnvelope)
async def create_chapter(
    video_id: int,
    body: ChapterCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await _get_owned_video(db, video_id, current_user)
    chapter = await media_repo.create_chapter(db, video_id, body.title, body.timestamp)
    await db.commit()
    return ChapterEnvelope(chapter=ChapterResponse.model_validate(chapter))


@router.get("/{video_id}/subtitles", response_model=SubtitleListResponse)
async def list_subtitles(video_id: int, db: AsyncSession = Depends(get_db)):
    subtitles = await media_repo.get_subtitles(db, video_id)
    return SubtitleListResponse(subtitles=[SubtitleResponse.model_validate(s) for s in subtitles])


@router.post("/{video_id}/subtitles", response_model=SubtitleEnvelope)
async def create_subtitle(
    video_id: int,
    body: SubtitleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await _get_owned_video(db, video_id, current_user)
    subtitle = await media_repo.create_subtitle(
        db,
        video_id,
        language=body.language,
        subtitle_url=body.subtitle_url,
        subtitle_data=body.subtitle_data,
        is_auto_generated=body.is_auto_generated,
    )
    await db.commit()
    return SubtitleEnvelope(subtitle=SubtitleResponse.model_validate(subtitle))
