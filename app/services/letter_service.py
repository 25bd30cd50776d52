# app/services/letter_service.py
"""
편지 저장소 서비스
- 비밀 코드로 편지 저장 / 조회 / 답장
- 만료된 편지는 조회 시 삭제 + 주기적 일괄 삭제
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.config import settings
from app.exceptions import (
    ConflictError,
    LetterExpiredError,
    LetterNotFoundError,
    LetterValidationError,
    PayloadTooLargeError,
)
from app.models import Letter, as_utc, now_utc
from app.schemas.letter_schemas import LetterRecord, ReplyRecord
from app.services.database_service import DatabaseService
from app.utils.logger import logger


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


class LetterService:
    def __init__(
        self,
        database: DatabaseService,
        clock: Callable[[], datetime] = now_utc,
        ttl: Optional[timedelta] = None,
        max_image_length: Optional[int] = None,
    ):
        self.database = database
        self.clock = clock
        self.ttl = ttl or timedelta(hours=settings.letter_ttl_hours)
        self.max_image_length = max_image_length or settings.max_image_length

    def _check_image(self, image: Optional[str]):
        if image is not None and len(image) > self.max_image_length:
            raise PayloadTooLargeError(len(image), self.max_image_length)

    async def submit(
        self,
        from_: str,
        to: str,
        secret_code: str,
        text: str,
        signature: str,
        image: Optional[str] = None,
    ) -> datetime:
        """새 편지 저장 후 만료 시각 반환"""
        if any(_is_blank(v) for v in (from_, to, secret_code, text, signature)):
            raise LetterValidationError("All fields are required")
        if len(secret_code) > settings.max_secret_code_length:
            raise LetterValidationError("Secret code is too long")
        if "/" in secret_code:
            # URL 경로 한 구간으로 조회되므로 "/" 가 들어간 코드는 다시 읽을 수 없음
            raise LetterValidationError('Secret code must not contain "/"')
        self._check_image(image)

        now = self.clock()
        expires = now + self.ttl

        try:
            async with self.database.async_session() as session:
                # 만료된 편지가 코드를 점유하고 있으면 먼저 정리
                await session.execute(
                    delete(Letter)
                    .where(Letter.SECRET_CODE == secret_code, Letter.EXPIRES_AT < now)
                    .execution_options(synchronize_session=False)
                )
                session.add(Letter(
                    SECRET_CODE=secret_code,
                    FROM_NAME=from_,
                    TO_NAME=to,
                    TEXT=text,
                    SIGNATURE=signature,
                    IMAGE=image,
                    SENT_AT=now,
                    EXPIRES_AT=expires,
                    HAS_REPLY=False,
                ))
                try:
                    await session.commit()
                except IntegrityError:
                    # 유니크 인덱스 위반 = 이미 사용 중인 코드
                    await session.rollback()
                    logger.info(" 중복 비밀 코드로 편지 전송 거부")
                    raise ConflictError("Secret code already in use")
        except SQLAlchemyError as e:
            logger.error(f" 편지 저장 실패: {e}")
            raise

        logger.info(f" 편지 저장 완료 (만료: {expires.isoformat()})")
        return as_utc(expires)

    async def retrieve(self, secret_code: str) -> LetterRecord:
        """편지 조회 - 만료된 편지는 삭제하고 없는 것으로 처리"""
        if _is_blank(secret_code):
            raise LetterValidationError("Secret code is required")

        try:
            async with self.database.async_session() as session:
                result = await session.execute(select(Letter).where(Letter.SECRET_CODE == secret_code))
                letter = result.scalar_one_or_none()
                if not letter:
                    raise LetterNotFoundError()

                if self.clock() > letter.EXPIRES_AT:
                    await session.execute(
                        delete(Letter)
                        .where(Letter.LETTER_ID == letter.LETTER_ID)
                        .execution_options(synchronize_session=False)
                    )
                    await session.commit()
                    logger.info(" 만료된 편지 조회 - 삭제 처리")
                    raise LetterNotFoundError()

                return self._to_record(letter)
        except SQLAlchemyError as e:
            logger.error(f" 편지 조회 실패: {e}")
            raise

    async def reply(
        self,
        secret_code: str,
        text: str,
        signature: str,
        image: Optional[str] = None,
    ) -> ReplyRecord:
        """답장 저장 - 편지당 한 번만 허용"""
        if _is_blank(text) or _is_blank(signature):
            raise LetterValidationError("Text and signature are required")
        self._check_image(image)

        try:
            async with self.database.async_session() as session:
                result = await session.execute(select(Letter).where(Letter.SECRET_CODE == secret_code))
                letter = result.scalar_one_or_none()
                if not letter:
                    raise LetterNotFoundError()

                now = self.clock()
                if now > letter.EXPIRES_AT:
                    raise LetterExpiredError()

                # 조건부 업데이트: 답장이 없고 아직 만료되지 않은 경우에만 반영
                result = await session.execute(
                    update(Letter)
                    .where(
                        Letter.LETTER_ID == letter.LETTER_ID,
                        Letter.HAS_REPLY == False,  # noqa: E712
                        Letter.EXPIRES_AT >= now,
                    )
                    .values(
                        HAS_REPLY=True,
                        REPLY_TEXT=text,
                        REPLY_SIGNATURE=signature,
                        REPLY_IMAGE=image,
                        REPLY_SENT_AT=now,
                    )
                    .execution_options(synchronize_session=False)
                )
                await session.commit()

                if result.rowcount == 0:
                    current = await session.get(Letter, letter.LETTER_ID, populate_existing=True)
                    if current is None:
                        raise LetterNotFoundError()
                    if now > current.EXPIRES_AT:
                        raise LetterExpiredError()
                    logger.info(" 이미 답장된 편지에 대한 답장 거부")
                    raise ConflictError("Letter already has a reply")
        except SQLAlchemyError as e:
            logger.error(f" 답장 저장 실패: {e}")
            raise

        logger.info(" 답장 저장 완료")
        return ReplyRecord(text=text, signature=signature, image=image, sent=as_utc(now))

    async def sweep(self) -> int:
        """만료된 편지 일괄 삭제, 삭제 건수 반환"""
        now = self.clock()
        try:
            async with self.database.async_session() as session:
                result = await session.execute(
                    delete(Letter)
                    .where(Letter.EXPIRES_AT < now)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f" 만료 편지 정리 실패: {e}")
            raise

        removed = result.rowcount or 0
        logger.info(f" 만료 편지 정리 완료: {removed}건 삭제")
        return removed

    @staticmethod
    def _to_record(letter: Letter) -> LetterRecord:
        reply = None
        if letter.HAS_REPLY:
            reply = ReplyRecord(
                text=letter.REPLY_TEXT,
                signature=letter.REPLY_SIGNATURE,
                image=letter.REPLY_IMAGE,
                sent=as_utc(letter.REPLY_SENT_AT),
            )
        return LetterRecord(
            secret_code=letter.SECRET_CODE,
            from_=letter.FROM_NAME,
            to=letter.TO_NAME,
            text=letter.TEXT,
            signature=letter.SIGNATURE,
            image=letter.IMAGE,
            sent=as_utc(letter.SENT_AT),
            expires=as_utc(letter.EXPIRES_AT),
            has_reply=letter.HAS_REPLY,
            reply=reply,
        )
