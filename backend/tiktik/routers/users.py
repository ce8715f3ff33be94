import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import user_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import NotFoundError
from tiktik.models.user import User
from tiktik.schemas.common import SuccessResponse
from tiktik.schemas.user import UserProfile, UserProfileResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.patch("/me", response_model=UserProfileResponse)
async def update_me(
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updates = body.model_dump(exclude_unset=True)
    if updates:
        current_user = await user_repo.update_user(db, current_user, **updates)
    await db.commit()
    return UserProfileResponse(user=UserProfile.model_validate(current_user))


@router.delete("/me", response_model=SuccessResponse)
async def delete_me(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the account with its videos, comments, likes, subscriptions and playlists."""
    await user_repo.delete_user(db, current_user)
    await db.commit()
    return SuccessResponse()


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await user_repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return UserProfileResponse(user=UserProfile.model_validate(user))
