import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def custom_exception_handler(_request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """요청 값 검증 실패는 422 대신 400으로 응답합니다."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"][1:]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Missing or invalid fields", "errors": errors},
    )


def store_exception_handler(request: Request, exc: SQLAlchemyError):
    # 내부 오류 내용은 로그에만 남기고 클라이언트에는 노출하지 않음
    logger.error(
        "DB 오류: %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"message": "Internal server error"})
