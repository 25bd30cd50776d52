"""
편지 모델
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, BigInteger, Integer
from sqlalchemy.dialects import mysql
from .base import Base, now_utc

# MySQL TEXT 는 64KB 제한이라 이미지는 LONGTEXT 사용
LongText = Text().with_variant(mysql.LONGTEXT(), "mysql")

# 비밀 코드는 인증 수단이라 대소문자/악센트까지 정확히 비교 (기본 _ci collation 회피)
SecretCode = String(255).with_variant(mysql.VARCHAR(255, collation="utf8mb4_bin"), "mysql")

# MySQL DATETIME 기본값은 초 단위로 반올림되므로 마이크로초까지 저장
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")

class Letter(Base):
    __tablename__ = "letter_TB"

    LETTER_ID = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    SECRET_CODE = Column(SecretCode, unique=True, index=True, nullable=False)
    FROM_NAME = Column(Text, nullable=False)
    TO_NAME = Column(Text, nullable=False)
    TEXT = Column(Text, nullable=False)
    SIGNATURE = Column(Text, nullable=False)
    IMAGE = Column(LongText, nullable=True)
    SENT_AT = Column(Timestamp, default=now_utc, nullable=False)
    EXPIRES_AT = Column(Timestamp, index=True, nullable=False)
    HAS_REPLY = Column(Boolean, default=False, nullable=False)

    # 답장 (한 번만 허용)
    REPLY_TEXT = Column(Text, nullable=True)
    REPLY_SIGNATURE = Column(Text, nullable=True)
    REPLY_IMAGE = Column(LongText, nullable=True)
    REPLY_SENT_AT = Column(Timestamp, nullable=True)
