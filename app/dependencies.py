# app/dependencies.py
"""
FastAPI 의존성 - 시작 시 만든 서비스 인스턴스를 핸들러에 전달
"""

from fastapi import Request

from app.services.letter_service import LetterService


def get_letter_service(request: Request) -> LetterService:
    return request.app.state.letter_service
