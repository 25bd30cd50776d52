# app/services/database_service.py
"""
데이터베이스 서비스
SQLAlchemy 기반 비동기 DB 연결 (앱 시작 시 생성, 종료 시 해제)
"""

import asyncio
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.models import Base
from app.utils.logger import logger


class DatabaseService:
    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self.database_url = database_url or settings.sqlalchemy_url

        if self.database_url.startswith("sqlite"):
            # 메모리 DB 는 연결 하나를 계속 공유해야 데이터가 유지됨
            self.engine = create_async_engine(
                self.database_url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            self.engine = create_async_engine(self.database_url, echo=echo, pool_pre_ping=True, pool_recycle=3600)

        self.async_session = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(" DatabaseService 초기화 완료")

    async def ping(self, timeout: float = None):
        """연결 확인 - 실패하면 예외를 그대로 올림"""
        async def _select_one():
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await asyncio.wait_for(_select_one(), timeout=timeout or settings.db_connect_timeout)
        logger.info(" 데이터베이스 연결 확인 완료")

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(" 데이터베이스 테이블 생성 완료")

    async def close(self):
        await self.engine.dispose()
        logger.info("🔌 데이터베이스 연결 종료")
