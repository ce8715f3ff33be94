"""Content reports and creator revenue."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import report_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import PermissionDeniedError
from tiktik.models.user import User
from tiktik.schemas.notification import (
    ReportCreate,
    ReportEnvelope,
    ReportResponse,
    RevenueListResponse,
    RevenueResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/reports", response_model=ReportEnvelope)
async def create_report(
    body: ReportCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    report = await report_repo.create_report(
        db,
        current_user.id,
        body.reason,
        video_id=body.video_id,
        comment_id=body.comment_id,
        description=body.description,
    )
    await db.commit()
    logger.info(f"User {current_user.id} filed report {report.id}: {body.reason}")
    return ReportEnvelope(report=ReportResponse.model_validate(report))


@router.get("/revenue/{user_id}", response_model=RevenueListResponse)
async def get_revenue(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if user_id != current_user.id and not current_user.is_admin:
        raise PermissionDeniedError("Cannot view another user's revenue")
    rows = await report_repo.get_revenue_by_user(db, user_id)
    total = sum(r.amount for r in rows)
    return RevenueListResponse(
        revenue=[RevenueResponse.model_validate(r) for r in rows],
        total_revenue=total,
    )
