from datetime import datetime
from pydantic import BaseModel, Field


class PlaylistCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    privacy: str = "public"


class PlaylistResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    privacy: str
    thumbnail_url: str | None = None
    video_count: int
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PlaylistEnvelope(BaseModel):
    success: bool = True
    playlist: PlaylistResponse


class PlaylistListResponse(BaseModel):
    playlists: list[PlaylistResponse]


class PlaylistItemRequest(BaseModel):
    video_id: int = Field(alias="videoId")

    class Config:
        populate_by_name = True


class PlaylistItemResponse(BaseModel):
    id: int
    playlist_id: int
    video_id: int
    position: int
    added_at: datetime

    class Config:
        from_attributes = True


class PlaylistItemEnvelope(BaseModel):
    success: bool = True
    item: PlaylistItemResponse
