from datetime import datetime
from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    id: int
    name: str
    avatar: str | None = None
    channel_name: str | None = None
    channel_description: str | None = None
    channel_banner: str | None = None
    subscriber_count: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserProfileResponse(BaseModel):
    user: UserProfile


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    avatar: str | None = None
    channel_name: str | None = Field(None, alias="channelName")
    channel_description: str | None = Field(None, alias="channelDescription")
    channel_banner: str | None = Field(None, alias="channelBanner")

    class Config:
        populate_by_name = True


class AdminUser(BaseModel):
    id: int
    email: str
    name: str
    avatar: str | None = None
    subscriber_count: int
    is_admin: bool
    created_at: datetime
    video_count: int


class AdminUserListResponse(BaseModel):
    users: list[AdminUser]
