import os

# settings는 import 시점에 로딩되므로 앱 모듈보다 먼저 설정합니다.
os.environ.setdefault("MYSQL__HOST", "127.0.0.1")
os.environ.setdefault("MYSQL__USER", "test")
os.environ.setdefault("MYSQL__PASSWD", "test")
os.environ.setdefault("MYSQL__PORT", "3306")
os.environ.setdefault("MYSQL__DB", "blog_test")
os.environ.setdefault("S3__ENDPOINT_URL", "http://127.0.0.1:9000")
os.environ.setdefault("S3__ACCESS_KEY", "test")
os.environ.setdefault("S3__SECRET_KEY", "test")
os.environ.setdefault("S3__BUCKET_NAME", "blog-test")
os.environ.setdefault("JWT__SECRET_KEY", "test-secret-key-for-blog-api-0123456789")
os.environ.setdefault("ADMIN__USERNAME", "admin")
os.environ.setdefault("ADMIN__PASSWORD", "admin-password")

from typing import AsyncGenerator, Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from botocore.exceptions import ClientError  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from blog_api.dependencies.mysql import Base, get_session  # noqa: E402
from blog_api.dependencies.s3 import get_s3_client  # noqa: E402
from blog_api.main import _create_master_admin, app  # noqa: E402
from blog_api.models.comment import Comment, CommentStatus  # noqa: E402


class _FakeBody:
    def __init__(self, data: bytes) -> None:
        self._data = data

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    async def read(self) -> bytes:
        return self._data


class FakeS3Client:
    """put_object/delete_object/get_object만 흉내내는 메모리 기반 S3 client"""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], tuple[bytes, str]] = {}

    async def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str):
        self.objects[(Bucket, Key)] = (Body, ContentType)
        return {}

    async def delete_object(self, Bucket: str, Key: str):
        self.objects.pop((Bucket, Key), None)
        return {}

    async def get_object(self, Bucket: str, Key: str):
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "not found"}}, "GetObject"
            )
        body, content_type = self.objects[(Bucket, Key)]
        return {"Body": _FakeBody(body), "ContentType": content_type}


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    MySQL 대신 테스트마다 새로 만드는 in-memory SQLite DB.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    await engine.dispose()


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker, s3_client: FakeS3Client
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    SQLite/가짜 S3에 연결된 테스트 클라이언트. 마스터 관리자 계정을 미리 생성합니다.
    """

    async def _get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_s3_client] = lambda: s3_client

    await _create_master_admin(session_factory)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_headers(api_client: httpx.AsyncClient) -> dict:
    """관리자 인증 헤더를 반환합니다."""
    from blog_api.config.config import settings

    response = await api_client.post(
        "/login",
        json={
            "username": settings.admin.username,
            "password": settings.admin.password,
        },
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_comment(session_factory: async_sessionmaker) -> Callable:
    """원하는 상태의 댓글을 DB에 직접 생성하고 id를 반환합니다."""

    async def _make(
        status: CommentStatus = CommentStatus.pending,
        article_id: int = 1,
        content: str = "테스트 댓글",
    ) -> int:
        async with session_factory() as session:
            comment = Comment(
                author="tester",
                email="tester@example.com",
                content=content,
                status=status,
                article_id=article_id,
            )
            session.add(comment)
            await session.commit()
            return comment.id

    return _make
