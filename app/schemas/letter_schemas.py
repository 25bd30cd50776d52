# app/schemas/letter_schemas.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# 요청 스키마
# 필수 여부는 서비스에서 검사 (누락 시 422 대신 400 응답)
class LetterCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    secret_code: Optional[str] = Field(default=None, alias="secretCode")
    text: Optional[str] = None
    signature: Optional[str] = None
    image: Optional[str] = None


class ReplyRequest(BaseModel):
    text: Optional[str] = None
    signature: Optional[str] = None
    image: Optional[str] = None


# 응답 스키마
class LetterSentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Letter sent successfully"
    expires_at: datetime = Field(alias="expiresAt")


class ReplyRecord(BaseModel):
    text: str
    signature: str
    image: Optional[str] = None
    sent: datetime


class LetterRecord(BaseModel):
    """조회 시 돌려주는 편지 전체 (답장 포함)"""
    model_config = ConfigDict(populate_by_name=True)

    secret_code: str = Field(alias="secretCode")
    from_: str = Field(alias="from")
    to: str
    text: str
    signature: str
    image: Optional[str] = None
    sent: datetime
    expires: datetime
    has_reply: bool = Field(default=False, alias="hasReply")
    reply: Optional[ReplyRecord] = None
