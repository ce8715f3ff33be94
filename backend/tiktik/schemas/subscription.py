from datetime import datetime
from pydantic import BaseModel, Field


class SubscriptionRequest(BaseModel):
    channel_id: int = Field(alias="channelId")

    class Config:
        populate_by_name = True


class SubscriptionActionResponse(BaseModel):
    success: bool = True
    action: str
    subscriber_count: int = Field(serialization_alias="subscriberCount")


class SubscriptionResponse(BaseModel):
    id: int
    follower_id: int
    channel_id: int
    notification_enabled: bool
    created_at: datetime
    channel_name: str
    channel_avatar: str | None = None


class SubscriptionListResponse(BaseModel):
    subscriptions: list[SubscriptionResponse]
