from enum import StrEnum, auto

from sqlalchemy import Column, Enum, Integer, String, Text

from blog_api.dependencies.mysql import Base
from blog_api.models.mixin import BaseMixin


class CommentStatus(StrEnum):
    pending = auto()
    approved = auto()
    disapproved = auto()


# 생성 이후 status는 승인/비승인으로만 바뀐다. pending으로 되돌리는 전이는 없음
MODERATION_TARGETS = frozenset({CommentStatus.approved, CommentStatus.disapproved})


class Comment(Base, BaseMixin):
    __tablename__ = "comment"

    author = Column(String(100), nullable=False, comment="작성자 이름")
    email = Column(String(255), nullable=False, comment="작성자 이메일")
    content = Column(Text, nullable=False, comment="댓글 내용")
    status = Column(
        Enum(CommentStatus),
        nullable=False,
        default=CommentStatus.pending,
        index=True,
        comment="검토 상태(pending/approved/disapproved)",
    )
    article_id = Column(Integer, nullable=False, index=True, comment="글 ID")

    @classmethod
    def new(cls, author: str, email: str, content: str, article_id: int) -> "Comment":
        """status는 항상 pending, 작성 시각은 INSERT 시점에 BaseMixin 기본값으로 채워집니다."""
        return cls(
            author=author,
            email=email,
            content=content,
            article_id=article_id,
            status=CommentStatus.pending,
        )
