import logging
from typing import Literal
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import dialect_insert
from tiktik.errors import NotFoundError
from tiktik.models.subscription import Subscription
from tiktik.models.user import User

logger = logging.getLogger(__name__)

SubscriptionAction = Literal["subscribed", "unsubscribed"]


async def _adjust_subscriber_count(session: AsyncSession, channel_id: int, delta: int) -> None:
    await session.execute(
        update(User)
        .where(User.id == channel_id)
        .values(subscriber_count=User.subscriber_count + delta)
        .execution_options(synchronize_session=False)
    )


async def toggle_subscription(
    session: AsyncSession, follower_id: int, channel_id: int
) -> tuple[SubscriptionAction, int]:
    """Subscribe or unsubscribe, returning the action and the channel's new subscriber_count.

    The counter only moves when this call actually deleted or inserted a row,
    so concurrent toggles on the same pair cannot double count.
    """
    result = await session.execute(select(User.id).where(User.id == channel_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Channel not found")

    removed = await session.execute(
        delete(Subscription)
        .where(Subscription.follower_id == follower_id, Subscription.channel_id == channel_id)
        .execution_options(synchronize_session=False)
    )
    if removed.rowcount:
        await _adjust_subscriber_count(session, channel_id, -1)
        action: SubscriptionAction = "unsubscribed"
    else:
        inserted = await session.execute(
            dialect_insert(session, Subscription)
            .values(follower_id=follower_id, channel_id=channel_id)
            .on_conflict_do_nothing()
        )
        if inserted.rowcount:
            await _adjust_subscriber_count(session, channel_id, 1)
        action = "subscribed"

    count = await session.execute(select(User.subscriber_count).where(User.id == channel_id))
    subscriber_count = count.scalar_one()
    logger.info(f"User {follower_id} {action} channel {channel_id} (subscribers: {subscriber_count})")
    return action, subscriber_count


async def is_subscribed(session: AsyncSession, follower_id: int, channel_id: int) -> bool:
    result = await session.execute(
        select(Subscription.id).where(Subscription.follower_id == follower_id, Subscription.channel_id == channel_id)
    )
    return result.scalar_one_or_none() is not None


async def list_subscriptions(session: AsyncSession, follower_id: int) -> list[dict]:
    result = await session.execute(
        select(Subscription, User.name, User.avatar)
        .join(User, User.id == Subscription.channel_id)
        .where(Subscription.follower_id == follower_id)
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
    )
    return [
        {
            "id": sub.id,
            "follower_id": sub.follower_id,
            "channel_id": sub.channel_id,
            "notification_enabled": sub.notification_enabled,
            "created_at": sub.created_at,
            "channel_name": name,
            "channel_avatar": avatar,
        }
        for sub, name, avatar in result.all()
    ]
