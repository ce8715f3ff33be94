from datetime import datetime
from pydantic import BaseModel, Field


class WatchLaterRequest(BaseModel):
    video_id: int = Field(alias="videoId")

    class Config:
        populate_by_name = True


class WatchHistoryRequest(BaseModel):
    user_id: int = Field(alias="userId")
    video_id: int = Field(alias="videoId")
    watch_time: int = Field(0, alias="watchTime", ge=0)
    completed: bool = False

    class Config:
        populate_by_name = True


class AnalyticsEvent(BaseModel):
    id: int
    video_id: int
    user_id: int | None = None
    session_id: str | None = None
    watch_time: int
    completed: bool
    unique_visitor: bool
    device_type: str | None = None
    location: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class AnalyticsSummary(BaseModel):
    total_views: int = Field(serialization_alias="totalViews")
    unique_viewers: int = Field(serialization_alias="uniqueViewers")
    total_watch_time: int = Field(serialization_alias="totalWatchTime")
    events: list[AnalyticsEvent]
