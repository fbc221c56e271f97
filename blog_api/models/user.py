from passlib.context import CryptContext
from sqlalchemy import Column, String

from blog_api.dependencies.mysql import Base
from blog_api.models.mixin import BaseMixin

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User(Base, BaseMixin):
    """관리자 로그인 계정"""

    __tablename__ = "user"

    username = Column(String(50), unique=True, nullable=False, comment="로그인 ID")
    hashed_password = Column(String(100), nullable=False, comment="암호화된 비밀번호")

    def set_password(self, plain_password: str) -> None:
        self.hashed_password = pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str) -> bool:
        return pwd_context.verify(plain_password, self.hashed_password)
