from sqlalchemy import Column, String, Text

from blog_api.dependencies.mysql import Base
from blog_api.models.mixin import BaseMixin


class Article(Base, BaseMixin):
    __tablename__ = "article"

    title = Column(String(200), nullable=False, comment="글 제목")
    excerpt = Column(Text, nullable=False, comment="글 요약")
    image = Column(String(500), nullable=False, comment="업로드 이미지 경로(/uploads/...)")
