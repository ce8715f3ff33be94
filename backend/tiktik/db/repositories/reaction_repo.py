"""Like/dislike toggling for videos and comments.

Each (user, video) and (user, comment) pair holds at most one row. Calling
``toggle_reaction`` moves that pair through three states:

    none    --kind-->      kind      "added"
    kind    --kind-->      none      "removed"
    kind    --opposite-->  opposite  "updated"

Inserts use ON CONFLICT DO NOTHING against the unique constraints, so two
concurrent toggles cannot create duplicate rows; the loser re-reads the
winning row and toggles it.
"""
import logging
from typing import Literal
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import dialect_insert
from tiktik.errors import ConflictError, NotFoundError, ValidationError
from tiktik.models.comment import Comment
from tiktik.models.like import Like, ReactionType
from tiktik.models.video import Video

logger = logging.getLogger(__name__)

ReactionAction = Literal["added", "updated", "removed"]


async def _target_exists(session: AsyncSession, video_id: int | None, comment_id: int | None) -> bool:
    if video_id is not None:
        q = select(Video.id).where(Video.id == video_id)
    else:
        q = select(Comment.id).where(Comment.id == comment_id)
    result = await session.execute(q)
    return result.scalar_one_or_none() is not None


def _target_filter(user_id: int, video_id: int | None, comment_id: int | None):
    if video_id is not None:
        return (Like.user_id == user_id, Like.video_id == video_id)
    return (Like.user_id == user_id, Like.comment_id == comment_id)


async def _bump_counter(session: AsyncSession, video_id: int | None, comment_id: int | None, kind: str, delta: int):
    """Keep the advisory stored counters roughly in step. Reads never use them."""
    if video_id is not None:
        column = Video.likes_count if kind == ReactionType.like.value else Video.dislikes_count
        await session.execute(
            update(Video)
            .where(Video.id == video_id)
            .values({column: column + delta})
            .execution_options(synchronize_session=False)
        )
    elif kind == ReactionType.like.value:
        await session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(likes_count=Comment.likes_count + delta)
            .execution_options(synchronize_session=False)
        )


async def get_reaction(
    session: AsyncSession, user_id: int, video_id: int | None = None, comment_id: int | None = None
) -> Like | None:
    q = select(Like).where(*_target_filter(user_id, video_id, comment_id))
    if session.bind.dialect.name == "postgresql":
        q = q.with_for_update()
    result = await session.execute(q.execution_options(populate_existing=True))
    return result.scalars().one_or_none()


async def toggle_reaction(
    session: AsyncSession,
    user_id: int,
    kind: ReactionType,
    video_id: int | None = None,
    comment_id: int | None = None,
) -> ReactionAction:
    if (video_id is None) == (comment_id is None):
        raise ValidationError("Exactly one of video or comment must be given")
    if not await _target_exists(session, video_id, comment_id):
        raise NotFoundError("Video not found" if video_id is not None else "Comment not found")
    kind = ReactionType(kind)

    # Second pass only runs when a concurrent toggle inserted first
    for _ in range(2):
        existing = await get_reaction(session, user_id, video_id, comment_id)
        if existing is not None:
            if existing.type == kind.value:
                result = await session.execute(
                    delete(Like).where(Like.id == existing.id).execution_options(synchronize_session=False)
                )
                if result.rowcount:
                    await _bump_counter(session, video_id, comment_id, kind.value, -1)
                logger.debug(f"User {user_id} removed {kind.value} on video={video_id} comment={comment_id}")
                return "removed"
            previous = existing.type
            await session.execute(
                update(Like)
                .where(Like.id == existing.id)
                .values(type=kind.value)
                .execution_options(synchronize_session=False)
            )
            await _bump_counter(session, video_id, comment_id, previous, -1)
            await _bump_counter(session, video_id, comment_id, kind.value, 1)
            logger.debug(f"User {user_id} switched {previous} -> {kind.value} on video={video_id} comment={comment_id}")
            return "updated"

        stmt = (
            dialect_insert(session, Like)
            .values(user_id=user_id, video_id=video_id, comment_id=comment_id, type=kind.value)
            .on_conflict_do_nothing()
        )
        result = await session.execute(stmt)
        if result.rowcount:
            await _bump_counter(session, video_id, comment_id, kind.value, 1)
            logger.debug(f"User {user_id} added {kind.value} on video={video_id} comment={comment_id}")
            return "added"
    raise ConflictError("Reaction changed concurrently, try again")
