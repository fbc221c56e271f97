import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from blog_api.config.config import settings
from blog_api.dependencies import mysql, s3
from blog_api.exception_handler import (
    custom_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)

# 모든 모델을 import하여 Base.metadata에 등록
import blog_api.models.article  # noqa: F401
import blog_api.models.comment  # noqa: F401
import blog_api.models.user  # noqa: F401

from blog_api.models.user import User
from blog_api.routers import article as article_router
from blog_api.routers import comment as comment_router
from blog_api.routers import upload as upload_router
from blog_api.routers import user as user_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger(__name__)


async def _create_master_admin(
    session_factory: async_sessionmaker = mysql._async_session,
) -> None:
    """최초 마스터 admin 계정을 생성합니다 (이미 존재하면 스킵)."""
    async with session_factory() as session:
        existing = await session.scalar(
            select(User).where(User.username == settings.admin.username)
        )
        if existing is not None:
            return

        admin = User(username=settings.admin.username)
        admin.set_password(settings.admin.password)
        session.add(admin)
        await session.commit()
        logger.info("마스터 admin 계정 생성 완료: %s", settings.admin.username)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await mysql.startup()
    await _create_master_admin()
    await s3.startup()
    yield
    await mysql.shutdown()


app = FastAPI(lifespan=lifespan)

app.add_exception_handler(HTTPException, custom_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.allow_origins,
    allow_credentials=True,
    allow_methods=settings.cors.allow_methods,
    allow_headers=["*"],
)

app.include_router(user_router.router)
app.include_router(comment_router.router)
app.include_router(article_router.router)
app.include_router(upload_router.router)


@app.get(
    "/health",
    tags=["Health Check"],
    summary="Health Check용 API",
)
async def health_check() -> str:
    return "ok"
