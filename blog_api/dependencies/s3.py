import logging
import time
from pathlib import PurePath
from typing import AsyncGenerator

import aioboto3
from botocore.exceptions import ClientError
from fastapi import UploadFile

from blog_api.config.config import settings

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"

# aioboto3 Session은 재사용하고 S3 client는 요청마다 생성합니다.
_session = aioboto3.Session(
    aws_access_key_id=settings.s3.access_key,
    aws_secret_access_key=settings.s3.secret_key,
    region_name=settings.s3.region,
)


async def get_s3_client() -> AsyncGenerator:
    """`s3=Depends(get_s3_client)`로 사용"""
    async with _session.client(
        "s3",
        endpoint_url=settings.s3.endpoint_url,
    ) as client:
        yield client


def _object_key(filename: str) -> str:
    return f"{UPLOAD_PREFIX}/{int(time.time() * 1000)}-{PurePath(filename).name}"


async def save_image(s3, image: UploadFile) -> str:
    """
    업로드된 이미지를 버킷에 저장하고 참조 경로(`/uploads/...`)를 반환합니다.
    반환된 경로는 그대로 DB에 저장됩니다.
    """
    key = _object_key(image.filename)
    body = await image.read()
    await s3.put_object(
        Bucket=settings.s3.bucket_name,
        Key=key,
        Body=body,
        ContentType=image.content_type or "application/octet-stream",
    )
    logger.info("이미지 업로드 완료: key=%s size=%d", key, len(body))
    return f"/{key}"


async def delete_image(s3, image_path: str) -> None:
    """save_image가 반환한 경로의 객체를 삭제합니다."""
    key = image_path.lstrip("/")
    await s3.delete_object(Bucket=settings.s3.bucket_name, Key=key)
    logger.info("이미지 삭제 완료: key=%s", key)


async def load_image(s3, filename: str) -> tuple[bytes, str] | None:
    """`/uploads/{filename}` 객체를 읽어 (본문, content type)을 반환합니다. 없으면 None."""
    try:
        obj = await s3.get_object(
            Bucket=settings.s3.bucket_name, Key=f"{UPLOAD_PREFIX}/{filename}"
        )
    except ClientError as e:
        if e.response["Error"]["Code"] in ("NoSuchKey", "404"):
            return None
        raise
    async with obj["Body"] as stream:
        body = await stream.read()
    return body, obj.get("ContentType", "application/octet-stream")


async def startup() -> None:
    """서버 시작 시 S3 연결 확인 및 버킷 초기화를 수행합니다."""
    async with _session.client("s3", endpoint_url=settings.s3.endpoint_url) as s3:
        try:
            await s3.create_bucket(Bucket=settings.s3.bucket_name)
            logger.info("S3 버킷 생성 완료: %s", settings.s3.bucket_name)
        except ClientError as e:
            if e.response["Error"]["Code"] not in (
                "BucketAlreadyExists",
                "BucketAlreadyOwnedByYou",
            ):
                raise
        logger.info("S3 연결 완료: bucket=%s", settings.s3.bucket_name)
