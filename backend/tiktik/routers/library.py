"""Watch later, watch history and per-video analytics."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import library_repo, video_repo
from tiktik.dependencies import get_current_user
from tiktik.models.user import User
from tiktik.schemas.common import ActionResponse, SuccessResponse
from tiktik.schemas.library import AnalyticsEvent, AnalyticsSummary, WatchHistoryRequest, WatchLaterRequest
from tiktik.schemas.video import VideoListResponse

router = APIRouter()


@router.post("/watch-later", response_model=ActionResponse)
async def toggle_watch_later(
    body: WatchLaterRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    action = await library_repo.toggle_watch_later(db, current_user.id, body.video_id)
    await db.commit()
    return ActionResponse(action=action)


@router.get("/watch-later/{user_id}", response_model=VideoListResponse)
async def list_watch_later(user_id: int, db: AsyncSession = Depends(get_db)):
    videos = await video_repo.list_watch_later(db, user_id)
    return VideoListResponse(videos=videos)


@router.post("/watch-history", response_model=SuccessResponse)
async def report_watch_time(body: WatchHistoryRequest, db: AsyncSession = Depends(get_db)):
    await library_repo.upsert_watch_history(
        db, body.user_id, body.video_id, body.watch_time, completed=body.completed
    )
    await db.commit()
    return SuccessResponse()


@router.get("/watch-history/{user_id}", response_model=VideoListResponse)
async def list_watch_history(user_id: int, db: AsyncSession = Depends(get_db)):
    videos = await video_repo.list_watch_history(db, user_id)
    return VideoListResponse(videos=videos)


@router.get("/analytics/{video_id}", response_model=AnalyticsSummary)
async def video_analytics(video_id: int, db: AsyncSession = Depends(get_db)):
    summary = await library_repo.get_video_analytics(db, video_id)
    events = [AnalyticsEvent.model_validate(e) for e in summary.pop("events")]
    return AnalyticsSummary(events=events, **summary)
