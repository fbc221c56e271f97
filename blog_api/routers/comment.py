import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.dependencies.auth import get_current_admin, get_optional_admin
from blog_api.dependencies.mysql import get_session
from blog_api.exceptions import NotFoundError
from blog_api.models.comment import MODERATION_TARGETS, Comment, CommentStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["Comments"])


class WriteCommentRequest(BaseModel):
    # status, created_at 등 그 외 필드는 무시됨
    author: str = Field(min_length=1)
    email: EmailStr
    content: str = Field(min_length=1)
    article_id: int


class EditCommentRequest(BaseModel):
    content: str = Field(min_length=1)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author: str
    email: str
    content: str
    status: CommentStatus
    created_at: datetime
    article_id: int


async def _set_status(
    comment_id: int, status: CommentStatus, session: AsyncSession
) -> None:
    """승인/비승인 전이. 같은 상태로 다시 전이해도 성공으로 처리합니다."""
    if status not in MODERATION_TARGETS:
        raise ValueError(f"{status} is not a moderation target")

    result = await session.execute(
        update(Comment).where(Comment.id == comment_id).values(status=status)
    )
    if result.rowcount == 0:
        raise NotFoundError("Comment not found")
    await session.commit()
    logger.info("댓글 상태 변경: comment_id=%d status=%s", comment_id, status)


@router.post("", response_model=CommentResponse, status_code=201)
async def write_comment(
    body: WriteCommentRequest,
    session: AsyncSession = Depends(get_session),
) -> Comment:
    comment = Comment.new(
        author=body.author,
        email=body.email,
        content=body.content,
        article_id=body.article_id,
    )
    session.add(comment)
    await session.commit()
    return comment


@router.get("", response_model=list[CommentResponse])
async def get_article_comments(
    article_id: int = Query(...),
    session: AsyncSession = Depends(get_session),
) -> list[Comment]:
    """글 하나의 승인된 댓글만 조회합니다. 관리자 요청이어도 동일합니다."""
    result = await session.scalars(
        select(Comment).where(
            Comment.article_id == article_id,
            Comment.status == CommentStatus.approved,
        )
    )
    return list(result.all())


@router.get("/all", response_model=list[CommentResponse])
async def get_all_comments(
    admin: str | None = Depends(get_optional_admin),
    session: AsyncSession = Depends(get_session),
) -> list[Comment]:
    """관리자는 모든 상태의 댓글을, 익명 요청은 승인된 댓글만 받습니다."""
    stmt = select(Comment)
    if admin is None:
        stmt = stmt.where(Comment.status == CommentStatus.approved)
    result = await session.scalars(stmt)
    return list(result.all())


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: int,
    session: AsyncSession = Depends(get_session),
) -> Comment:
    comment = await session.scalar(select(Comment).where(Comment.id == comment_id))
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


@router.put("/{comment_id}")
async def edit_comment(
    comment_id: int,
    body: EditCommentRequest,
    _admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
) -> str:
    result = await session.execute(
        update(Comment).where(Comment.id == comment_id).values(content=body.content)
    )
    if result.rowcount == 0:
        raise NotFoundError("Comment not found")
    await session.commit()
    return "comment is updated"


@router.patch("/{comment_id}/approve")
async def approve_comment(
    comment_id: int,
    _admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
) -> str:
    await _set_status(comment_id, CommentStatus.approved, session)
    return "comment is approved"


@router.patch("/{comment_id}/disapprove")
async def disapprove_comment(
    comment_id: int,
    _admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
) -> str:
    await _set_status(comment_id, CommentStatus.disapproved, session)
    return "comment is disapproved"


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: int,
    admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
) -> str:
    result = await session.execute(delete(Comment).where(Comment.id == comment_id))
    if result.rowcount == 0:
        raise NotFoundError("Comment not found")
    await session.commit()
    logger.info("댓글 삭제: comment_id=%d by=%s", comment_id, admin)
    return "comment is deleted"
