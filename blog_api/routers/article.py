import logging
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel, ConfigDict
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.dependencies.auth import get_current_admin
from blog_api.dependencies.mysql import get_session
from blog_api.dependencies.s3 import delete_image, get_s3_client, save_image
from blog_api.exceptions import NotFoundError, ValidationError
from blog_api.models.article import Article

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    excerpt: str
    image: str
    created_at: datetime | None


@router.post("", response_model=ArticleResponse, status_code=201)
async def write_article(
    title: str | None = Form(default=None),
    excerpt: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    _admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
    s3=Depends(get_s3_client),
) -> Article:
    """글 작성 (admin 전용). 이미지는 S3에 먼저 저장하고 경로만 DB에 기록합니다."""
    if not title or not excerpt or image is None or not image.filename:
        raise ValidationError("title, excerpt, image는 모두 필수입니다.")

    image_path = await save_image(s3, image)

    article = Article(title=title, excerpt=excerpt, image=image_path)
    session.add(article)
    try:
        await session.commit()
        await session.refresh(article)
    except SQLAlchemyError:
        # DB 기록에 실패하면 먼저 올린 이미지도 지운다
        await session.rollback()
        await delete_image(s3, image_path)
        raise
    logger.info("글 작성 완료: article_id=%d", article.id)
    return article


@router.get("", response_model=list[ArticleResponse])
async def get_articles(
    session: AsyncSession = Depends(get_session),
) -> list[Article]:
    result = await session.scalars(select(Article))
    return list(result.all())


@router.delete("/{article_id}")
async def delete_article(
    article_id: int,
    _admin: str = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
) -> str:
    result = await session.execute(delete(Article).where(Article.id == article_id))
    if result.rowcount == 0:
        raise NotFoundError("Article not found")
    await session.commit()
    return "article is deleted"
