"""
Models 패키지
SQLAlchemy 모델과 공통 시간 함수
"""

from .base import Base, now_utc, as_utc
from .letter import Letter

__all__ = [
    "Base",
    "now_utc",
    "as_utc",
    "Letter",
]
