# app/exceptions.py
"""
편지 서비스 예외 및 FastAPI 예외 핸들러

모든 오류는 {"message": ...} 형태로 응답한다.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.logger import logger


class LetterServiceError(Exception):
    """편지 서비스 기본 예외"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message}


class LetterValidationError(LetterServiceError):
    """필수 필드 누락"""
    status_code = 400


class PayloadTooLargeError(LetterServiceError):
    """이미지 인코딩 길이 초과"""
    status_code = 400

    def __init__(self, length: int, limit: int):
        super().__init__("Image is too large")
        self.length = length
        self.limit = limit


class ConflictError(LetterServiceError):
    """비밀 코드 중복 또는 이미 답장된 편지"""
    status_code = 400


class LetterNotFoundError(LetterServiceError):
    """코드가 없거나 만료되어 삭제됨 (두 경우를 구분하지 않음)"""
    status_code = 404

    def __init__(self, message: str = "No letter found with this code"):
        super().__init__(message)


class LetterExpiredError(LetterServiceError):
    """답장 시점에 이미 만료된 편지"""
    status_code = 400

    def __init__(self):
        super().__init__("Letter has expired")


class InternalServerError(LetterServiceError):
    """저장소 오류 등 예상치 못한 오류 (내부 정보는 노출하지 않음)"""
    status_code = 500

    def __init__(self):
        super().__init__("Server error")


async def letter_service_exception_handler(request: Request, exc: LetterServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f" {request.method} {request.url.path} 실패: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f" 잘못된 요청 본문: {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """라우팅 단계 오류 (405 등) 도 {"message"} 형태로 통일"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )
