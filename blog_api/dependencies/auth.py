import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Header

from blog_api.config.config import settings
from blog_api.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def create_access_token(username: str, now: datetime | None = None) -> str:
    """JWT 액세스 토큰을 생성합니다. 유효기간은 발급 시점부터 jwt.expire_minutes."""
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt.expire_minutes),
    }
    return jwt.encode(
        payload, settings.jwt.secret_key, algorithm=settings.jwt.algorithm
    )


def decode_access_token(token: str) -> str:
    """
    토큰 서명과 만료를 검증하고 username(sub)을 반환합니다.
    DB 조회 없이 서명 키와 현재 시각만으로 판단합니다.
    """
    if not token:
        raise AuthenticationError("No token provided")
    try:
        payload = jwt.decode(
            token,
            settings.jwt.secret_key,
            algorithms=[settings.jwt.algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired", status_code=403) from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token", status_code=403) from e

    username = payload.get("sub")
    if not username:
        raise AuthenticationError("Invalid token payload", status_code=403)
    return username


def _has_bearer_token(authorization: str | None) -> bool:
    return authorization is not None and authorization.startswith(BEARER_PREFIX)


async def get_current_admin(
    authorization: str | None = Header(default=None),
) -> str:
    """관리자 전용 API에서 사용합니다. 인증된 username을 반환합니다."""
    if authorization is None:
        raise AuthenticationError("No token provided")
    if not _has_bearer_token(authorization):
        raise AuthenticationError("Invalid authorization header format")
    return decode_access_token(authorization.removeprefix(BEARER_PREFIX).strip())


async def get_optional_admin(
    authorization: str | None = Header(default=None),
) -> str | None:
    """
    인증이 선택적인 엔드포인트에서 사용합니다.
    - Bearer 토큰이 없으면 None (익명 요청)
    - Bearer 토큰이 있으면 검증하고, 실패 시 익명으로 낮추지 않고 그대로 거절
    """
    if not _has_bearer_token(authorization):
        return None
    return decode_access_token(authorization.removeprefix(BEARER_PREFIX).strip())
