from fastapi import APIRouter, Depends
from starlette.responses import Response

from blog_api.dependencies.s3 import get_s3_client, load_image
from blog_api.exceptions import NotFoundError

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.get("/{filename}")
async def get_upload(filename: str, s3=Depends(get_s3_client)) -> Response:
    """글 이미지 조회. DB에 저장된 `/uploads/...` 경로로 그대로 접근합니다."""
    found = await load_image(s3, filename)
    if found is None:
        raise NotFoundError("Image not found")
    body, content_type = found
    return Response(content=body, media_type=content_type)
