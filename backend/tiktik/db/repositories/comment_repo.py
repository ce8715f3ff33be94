from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.errors import NotFoundError, ValidationError
from tiktik.models.comment import Comment
from tiktik.models.like import Like, ReactionType
from tiktik.models.user import User
from tiktik.models.video import Video


def _projection():
    likes = (
        select(func.count(Like.id))
        .where(Like.comment_id == Comment.id, Like.type == ReactionType.like.value)
        .correlate(Comment)
        .scalar_subquery()
    )
    return (
        select(Comment, User.name.label("author"), User.avatar.label("avatar"), likes.label("likes"))
        .join(User, User.id == Comment.user_id)
        .execution_options(populate_existing=True)
    )


def _to_view(row) -> dict:
    comment = row[0]
    view = {c.key: getattr(comment, c.key) for c in Comment.__table__.columns}
    view.update(zip(row._fields[1:], row[1:]))
    return view


async def get_comment_by_id(session: AsyncSession, comment_id: int) -> Comment | None:
    result = await session.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalars().one_or_none()


async def get_comment_view(session: AsyncSession, comment_id: int) -> dict | None:
    result = await session.execute(_projection().where(Comment.id == comment_id))
    row = result.first()
    return _to_view(row) if row else None


async def list_comments(session: AsyncSession, video_id: int) -> list[dict]:
    result = await session.execute(
        _projection()
        .where(Comment.video_id == video_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return [_to_view(row) for row in result.all()]


async def create_comment(
    session: AsyncSession, video_id: int, user_id: int, text: str, parent_id: int | None = None
) -> Comment:
    result = await session.execute(select(Video.id).where(Video.id == video_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Video not found")
    if parent_id is not None:
        parent = await get_comment_by_id(session, parent_id)
        if not parent:
            raise NotFoundError("Parent comment not found")
        if parent.video_id != video_id:
            raise ValidationError("Parent comment belongs to another video")
    comment = Comment(video_id=video_id, user_id=user_id, text=text, parent_id=parent_id)
    session.add(comment)
    await session.flush()
    await session.refresh(comment)
    return comment


async def collect_subtree_ids(session: AsyncSession, comment_id: int) -> list[int]:
    """Ids of the comment and every reply below it, at any depth."""
    tree = select(Comment.id).where(Comment.id == comment_id).cte("comment_tree", recursive=True)
    tree = tree.union_all(select(Comment.id).join(tree, Comment.parent_id == tree.c.id))
    result = await session.execute(select(tree.c.id))
    return list(result.scalars().all())


async def delete_comment_tree(session: AsyncSession, comment_id: int) -> int:
    """Delete a comment with all its descendants as one set; returns how many rows went."""
    ids = await collect_subtree_ids(session, comment_id)
    if not ids:
        raise NotFoundError("Comment not found")
    await session.execute(
        delete(Comment).where(Comment.id.in_(ids)).execution_options(synchronize_session=False)
    )
    return len(ids)
