from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import subscription_repo, video_repo
from tiktik.dependencies import get_current_user
from tiktik.models.user import User
from tiktik.schemas.subscription import (
    SubscriptionActionResponse,
    SubscriptionListResponse,
    SubscriptionRequest,
)
from tiktik.schemas.video import VideoListResponse

router = APIRouter()


@router.post("", response_model=SubscriptionActionResponse)
async def toggle_subscription(
    body: SubscriptionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    action, subscriber_count = await subscription_repo.toggle_subscription(db, current_user.id, body.channel_id)
    await db.commit()
    return SubscriptionActionResponse(action=action, subscriber_count=subscriber_count)


@router.get("/{user_id}", response_model=SubscriptionListResponse)
async def list_subscriptions(user_id: int, db: AsyncSession = Depends(get_db)):
    subscriptions = await subscription_repo.list_subscriptions(db, user_id)
    return SubscriptionListResponse(subscriptions=subscriptions)


@router.get("/{user_id}/videos", response_model=VideoListResponse)
async def subscription_feed(user_id: int, db: AsyncSession = Depends(get_db)):
    """Live videos from subscribed channels, newest first, at most 50."""
    videos = await video_repo.get_subscription_feed(db, user_id)
    return VideoListResponse(videos=videos)
