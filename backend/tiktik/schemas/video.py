from datetime import datetime
from pydantic import BaseModel, Field

from tiktik.models.like import ReactionType


class VideoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    video_url: str = Field(alias="videoUrl", min_length=1)

    class Config:
        populate_by_name = True


class VideoResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    video_path: str | None = None
    video_url: str | None = None
    hls_url: str | None = None
    status: str
    duration: int
    views: int
    category: str | None = None
    tags: str | None = None
    privacy: str
    is_short: bool
    is_live: bool
    is_monetized: bool
    created_at: datetime
    published_at: datetime | None = None
    updated_at: datetime | None = None
    # Joined from the uploader and counted live from likes
    channel: str
    avatar: str | None = None
    likes: int = 0
    dislikes: int = 0
    # Present on watch-history and playlist listings only
    watch_time: int | None = None
    last_watched: datetime | None = None
    position: int | None = None


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]


class VideoEnvelope(BaseModel):
    success: bool = True
    video: VideoResponse


class VideoDetailResponse(BaseModel):
    video: VideoResponse


class ReactionRequest(BaseModel):
    type: ReactionType


class ViewRequest(BaseModel):
    user_id: int | None = Field(None, alias="userId")
    watch_time: int = Field(0, alias="watchTime", ge=0)
    completed: bool = False
    device_type: str | None = Field(None, alias="deviceType")
    session_id: str | None = Field(None, alias="sessionId")

    class Config:
        populate_by_name = True


class ChapterCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    timestamp: int = Field(ge=0)


class ChapterResponse(BaseModel):
    id: int
    video_id: int
    title: str
    timestamp: int
    created_at: datetime

    class Config:
        from_attributes = True


class ChapterEnvelope(BaseModel):
    success: bool = True
    chapter: ChapterResponse


class ChapterListResponse(BaseModel):
    chapters: list[ChapterResponse]


class SubtitleCreate(BaseModel):
    language: str = Field(min_length=1, max_length=16)
    subtitle_url: str | None = Field(None, alias="subtitleUrl")
    subtitle_data: str | None = Field(None, alias="subtitleData")
    is_auto_generated: bool = Field(False, alias="isAutoGenerated")

    class Config:
        populate_by_name = True


class SubtitleResponse(BaseModel):
    id: int
    video_id: int
    language: str
    subtitle_url: str | None = None
    subtitle_data: str | None = None
    is_auto_generated: bool
    created_at: datetime

    class Config:
        from_attributes = True


class SubtitleEnvelope(BaseModel):
    success: bool = True
    subtitle: SubtitleResponse


class SubtitleListResponse(BaseModel):
    subtitles: list[SubtitleResponse]
