from datetime import datetime
from pydantic import BaseModel, Field


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str | None = None
    link: str | None = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]


class ReportCreate(BaseModel):
    video_id: int | None = Field(None, alias="videoId")
    comment_id: int | None = Field(None, alias="commentId")
    reason: str = Field(min_length=1, max_length=255)
    description: str | None = None

    class Config:
        populate_by_name = True


class ReportResponse(BaseModel):
    id: int
    reporter_id: int | None = None
    video_id: int | None = None
    comment_id: int | None = None
    reason: str
    description: str | None = None
    status: str
    created_at: datetime
    resolved_at: datetime | None = None

    class Config:
        from_attributes = True


class ReportEnvelope(BaseModel):
    success: bool = True
    report: ReportResponse


class ReportListResponse(BaseModel):
    reports: list[ReportResponse]


class RevenueResponse(BaseModel):
    id: int
    user_id: int
    video_id: int | None = None
    amount: float
    source: str | None = None
    transaction_id: str | None = None
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class RevenueListResponse(BaseModel):
    revenue: list[RevenueResponse]
    total_revenue: float = Field(serialization_alias="totalRevenue")
