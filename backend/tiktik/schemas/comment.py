from datetime import datetime
from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    video_id: int = Field(alias="videoId")
    text: str = Field(min_length=1)
    parent_id: int | None = Field(None, alias="parentId")

    class Config:
        populate_by_name = True


class CommentResponse(BaseModel):
    id: int
    video_id: int
    user_id: int
    text: str
    parent_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
    author: str
    avatar: str | None = None
    likes: int = 0


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]


class CommentEnvelope(BaseModel):
    success: bool = True
    comment: CommentResponse


class CommentDeleteResponse(BaseModel):
    success: bool = True
    deleted: int
