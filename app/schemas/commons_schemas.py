"""
공통 스키마 - 여러 API에서 공유하는 스키마들
"""

from pydantic import BaseModel

# 기본 응답 스키마 (성공/오류 모두 {message})
class MessageResponse(BaseModel):
    message: str

class HealthResponse(BaseModel):
    status: str = "ok"
