"""
SQLAlchemy Base 설정 및 공통 시간 함수
"""

from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

# Base 모델
Base = declarative_base()

def now_utc() -> datetime:
    """DB 저장용 UTC 시각 (tzinfo 없음)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)

def as_utc(value: datetime) -> datetime:
    """DB에서 읽은 naive 시각을 UTC aware 로 변환"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
