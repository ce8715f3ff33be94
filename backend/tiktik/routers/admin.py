"""Moderation endpoints. Every route requires an admin account."""
import logging
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import notification_repo, report_repo, user_repo, video_repo
from tiktik.dependencies import get_admin_user
from tiktik.errors import NotFoundError
from tiktik.models.user import User
from tiktik.models.video import Video, VideoStatus
from tiktik.schemas.common import SuccessResponse
from tiktik.schemas.notification import ReportListResponse, ReportResponse
from tiktik.schemas.user import AdminUserListResponse
from tiktik.schemas.video import VideoEnvelope, VideoListResponse
from tiktik.services import upload_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_video_or_404(db: AsyncSession, video_id: int) -> Video:
    video = await video_repo.get_video_by_id(db, video_id)
    if not video:
        raise NotFoundError("Video not found")
    return video


async def _moderate(db: AsyncSession, video_id: int, status: VideoStatus, admin: User) -> dict:
    video = await _get_video_or_404(db, video_id)
    await video_repo.set_status(db, video, status)
    if status == VideoStatus.live:
        title, message = "Video approved", f'Your video "{video.title}" is now live.'
    else:
        title, message = "Video rejected", f'Your video "{video.title}" was rejected by moderation.'
    await notification_repo.create_notification(
        db, video.user_id, type="moderation", title=title, message=message, link=f"/videos/{video.id}"
    )
    view = await video_repo.get_video_view(db, video.id)
    await db.commit()
    logger.info(f"Admin {admin.id} set video {video_id} to {status.value}")
    return view


@router.get("/videos", response_model=VideoListResponse)
async def list_pending_videos(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    videos = await video_repo.list_pending_videos(db)
    return VideoListResponse(videos=videos)


@router.post("/videos/{video_id}/approve", response_model=VideoEnvelope)
async def approve_video(
    video_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    view = await _moderate(db, video_id, VideoStatus.live, admin)
    return VideoEnvelope(video=view)


@router.post("/videos/{video_id}/reject", response_model=VideoEnvelope)
async def reject_video(
    video_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    view = await _moderate(db, video_id, VideoStatus.rejected, admin)
    return VideoEnvelope(video=view)


@router.delete("/videos/{video_id}", response_model=SuccessResponse)
async def delete_video(
    video_id: int,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    video = await _get_video_or_404(db, video_id)
    video_path = video.video_path
    await video_repo.delete_video(db, video)
    await db.commit()
    background_tasks.add_task(upload_service.remove_file, video_path)
    logger.info(f"Admin {admin.id} deleted video {video_id}")
    return SuccessResponse()


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    users = await user_repo.list_users_with_video_count(db)
    return AdminUserListResponse(users=users)


@router.get("/reports", response_model=ReportListResponse)
async def list_pending_reports(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    reports = await report_repo.get_pending_reports(db)
    return ReportListResponse(reports=[ReportResponse.model_validate(r) for r in reports])
