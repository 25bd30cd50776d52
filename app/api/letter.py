# app/api/letter.py

from fastapi import APIRouter, Depends, status
from app.dependencies import get_letter_service
from app.exceptions import InternalServerError, LetterServiceError, LetterValidationError
from app.schemas.commons_schemas import MessageResponse
from app.schemas.letter_schemas import (
    LetterCreateRequest,
    LetterRecord,
    LetterSentResponse,
    ReplyRequest,
)
from app.services.letter_service import LetterService
from app.utils.logger import logger

router = APIRouter(prefix="/letters", tags=["letter"])


@router.post("", response_model=LetterSentResponse, status_code=status.HTTP_201_CREATED)
async def send_letter(request: LetterCreateRequest, letters: LetterService = Depends(get_letter_service)):
    """비밀 코드로 편지 전송"""
    try:
        expires_at = await letters.submit(
            from_=request.from_,
            to=request.to,
            secret_code=request.secret_code,
            text=request.text,
            signature=request.signature,
            image=request.image,
        )
        return LetterSentResponse(expires_at=expires_at)

    except LetterServiceError:
        raise
    except Exception as e:
        logger.error(f"❌ 편지 전송 API 오류: {e}")
        raise InternalServerError()


@router.get("", include_in_schema=False)
@router.get("/", include_in_schema=False)
async def get_letter_without_code():
    raise LetterValidationError("Secret code is required")


@router.get("/{secret_code}", response_model=LetterRecord)
async def get_letter(secret_code: str, letters: LetterService = Depends(get_letter_service)):
    """비밀 코드로 편지 조회 (만료 시 404)"""
    try:
        return await letters.retrieve(secret_code)

    except LetterServiceError:
        raise
    except Exception as e:
        logger.error(f"❌ 편지 조회 API 오류: {e}")
        raise InternalServerError()


@router.post("/{secret_code}/reply", response_model=MessageResponse)
async def reply_letter(secret_code: str, request: ReplyRequest, letters: LetterService = Depends(get_letter_service)):
    """편지에 답장 (한 번만 가능)"""
    try:
        await letters.reply(
            secret_code=secret_code,
            text=request.text,
            signature=request.signature,
            image=request.image,
        )
        return MessageResponse(message="Reply sent successfully")

    except LetterServiceError:
        raise
    except Exception as e:
        logger.error(f"❌ 답장 API 오류: {e}")
        raise InternalServerError()
