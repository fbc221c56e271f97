import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.dependencies.auth import create_access_token
from blog_api.dependencies.mysql import get_session
from blog_api.exceptions import AuthenticationError
from blog_api.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> LoginResponse:
    user = await session.scalar(select(User).where(User.username == body.username))
    if user is None or not user.verify_password(body.password):
        logger.info("로그인 실패: username=%s", body.username)
        raise AuthenticationError("Invalid username or password")

    return LoginResponse(access_token=create_access_token(user.username))
