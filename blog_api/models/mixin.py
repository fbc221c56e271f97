from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer


def utc_now() -> datetime:
    """모든 시각은 앱 서버에서 naive UTC(초 단위)로 기록합니다."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class BaseMixin:
    """
    모든 모델(테이블)의 공통 컬럼을 정의
    """

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
