from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories import comment_repo, reaction_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import NotFoundError, PermissionDeniedError
from tiktik.models.user import User
from tiktik.schemas.common import ActionResponse
from tiktik.schemas.comment import CommentCreate, CommentDeleteResponse, CommentEnvelope, CommentListResponse
from tiktik.schemas.video import ReactionRequest

router = APIRouter()


@router.get("/{video_id}", response_model=CommentListResponse)
async def list_comments(video_id: int, db: AsyncSession = Depends(get_db)):
    comments = await comment_repo.list_comments(db, video_id)
    return CommentListResponse(comments=comments)


@router.post("", response_model=CommentEnvelope)
async def create_comment(
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = await comment_repo.create_comment(
        db, body.video_id, current_user.id, body.text, parent_id=body.parent_id
    )
    view = await comment_repo.get_comment_view(db, comment.id)
    await db.commit()
    return CommentEnvelope(comment=view)


@router.post("/{comment_id}/like", response_model=ActionResponse)
async def react_to_comment(
    comment_id: int,
    body: ReactionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    action = await reaction_repo.toggle_reaction(db, current_user.id, body.type, comment_id=comment_id)
    await db.commit()
    return ActionResponse(action=action)


@router.delete("/{comment_id}", response_model=CommentDeleteResponse)
async def delete_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a comment and every reply beneath it."""
    comment = await comment_repo.get_comment_by_id(db, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    if comment.user_id != current_user.id and not current_user.is_admin:
        raise PermissionDeniedError("Not the author of this comment")
    deleted = await comment_repo.delete_comment_tree(db, comment_id)
    await db.commit()
    return CommentDeleteResponse(deleted=deleted)
