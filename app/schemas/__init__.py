"""
스키마 패키지
순환 import 방지를 위해 공통 스키마만 노출
"""

from .commons_schemas import MessageResponse, HealthResponse

# 편지 스키마는 필요할 때 직접 import
# from .letter_schemas import LetterCreateRequest, LetterRecord, ReplyRequest
