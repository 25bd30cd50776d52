# app/main.py
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api import client, letter
from app.exceptions import (
    LetterServiceError,
    http_exception_handler,
    letter_service_exception_handler,
    request_validation_exception_handler,
)
from app.schemas.commons_schemas import HealthResponse
from app.services.database_service import DatabaseService
from app.services.letter_service import LetterService
from app.services.scheduler_service import SchedulerService
from app.utils.logger import setup_logger
from app.config import settings
import uvicorn

# 로거 설정
logger = setup_logger()

app = FastAPI(
    title="Secret Letters Service",
    description="비밀 코드로 주고받는 24시간 익명 편지 서비스",
    version="1.0.0",
    debug=settings.debug
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,  # 실제 배포시에는 특정 도메인으로 제한
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_exception_handler(LetterServiceError, letter_service_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

@app.on_event("startup")
async def startup_event():
    """앱 시작시 초기화 - DB 연결 실패 시 바로 종료"""
    logger.info(" Secret Letters Service 시작")
    logger.info(f" Debug 모드: {settings.debug}")

    database = DatabaseService(echo=settings.debug)
    try:
        await database.ping()
        await database.create_tables()
    except Exception as e:
        logger.error(f" 데이터베이스 연결 실패: {e}")
        await database.close()
        raise

    letter_service = LetterService(database)
    scheduler_service = SchedulerService(letter_service)

    app.state.database = database
    app.state.letter_service = letter_service
    app.state.scheduler_service = scheduler_service

    # 시작 시 한 번 정리 후 주기 작업 등록
    if settings.sweep_on_startup:
        await scheduler_service.sweep_job()
    scheduler_service.start()
    logger.info(" 스케줄러 시작 완료")

@app.on_event("shutdown")
async def shutdown_event():
    """앱 종료시 정리"""
    logger.info(" Secret Letters Service 종료")
    scheduler_service = getattr(app.state, "scheduler_service", None)
    if scheduler_service:
        scheduler_service.stop()
    database = getattr(app.state, "database", None)
    if database:
        await database.close()

@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok")

# 라우터 등록 - 프론트엔드 호환을 위해 /api/letters 와 /letters 모두 지원
app.include_router(letter.router, prefix="/api")
app.include_router(letter.router)

# 클라이언트 셸 (catch-all 이라 마지막에 등록)
app.include_router(client.router)

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
