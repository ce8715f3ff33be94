import logging
from datetime import datetime
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.repositories.video_repo import release_from_playlists
from tiktik.models.user import User
from tiktik.models.video import Video
from tiktik.models.subscription import Subscription

logger = logging.getLogger(__name__)


async def get_user_by_id(session: AsyncSession, user_id: int) -> User | None:
    result = await session.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    return result.scalars().one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalars().one_or_none()


async def user_exists(session: AsyncSession, user_id: int) -> bool:
    result = await session.execute(select(User.id).where(User.id == user_id))
    return result.scalar_one_or_none() is not None


async def create_user(
    session: AsyncSession,
    email: str,
    password_hash: str,
    name: str,
    avatar: str | None = None,
    is_admin: bool = False,
) -> User:
    user = User(email=email, password_hash=password_hash, name=name, avatar=avatar, is_admin=is_admin)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


async def update_user(session: AsyncSession, user: User, **kwargs) -> User:
    for k, v in kwargs.items():
        if hasattr(user, k):
            setattr(user, k, v)
    user.updated_at = datetime.utcnow()
    await session.flush()
    await session.refresh(user)
    return user


async def get_subscriber_count(session: AsyncSession, user_id: int) -> int:
    result = await session.execute(select(User.subscriber_count).where(User.id == user_id))
    return result.scalar_one()


async def delete_user(session: AsyncSession, user: User) -> None:
    """Delete an account and everything it owns.

    Subscription and playlist rows cascade away with the user and their
    videos, so the cached subscriber_count of every followed channel and the
    video_count of every playlist holding one of the user's videos are
    decremented first, in the same transaction.
    """
    followed = select(Subscription.channel_id).where(Subscription.follower_id == user.id)
    await session.execute(
        update(User)
        .where(User.id.in_(followed), User.id != user.id)
        .values(subscriber_count=User.subscriber_count - 1)
        .execution_options(synchronize_session=False)
    )
    await release_from_playlists(session, select(Video.id).where(Video.user_id == user.id))
    await session.delete(user)
    await session.flush()
    logger.info(f"Deleted user {user.id} ({user.email})")


async def list_users_with_video_count(session: AsyncSession) -> list[dict]:
    video_count = (
        select(func.count(Video.id))
        .where(Video.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    result = await session.execute(
        select(User, video_count.label("video_count")).order_by(User.created_at.desc(), User.id.desc())
    )
    return [
        {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "avatar": user.avatar,
            "subscriber_count": user.subscriber_count,
            "is_admin": user.is_admin,
            "created_at": user.created_at,
            "video_count": count,
        }
        for user, count in result.all()
    ]
