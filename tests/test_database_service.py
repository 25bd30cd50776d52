"""
Tests for DatabaseService and application startup
"""

import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect, select
from sqlalchemy.dialects import mysql
from sqlalchemy.schema import CreateTable

from app.models import Letter, now_utc
from app.services.database_service import DatabaseService


class TestDatabaseService:

    @pytest.mark.asyncio
    async def test_create_tables_adds_unique_code_index(self, database):
        async with database.engine.connect() as conn:
            indexes = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_indexes("letter_TB"))

        code_index = [ix for ix in indexes if ix["column_names"] == ["SECRET_CODE"]]
        assert code_index
        assert code_index[0]["unique"]

    @pytest.mark.asyncio
    async def test_ping(self, database):
        await database.ping(timeout=5)

    @pytest.mark.asyncio
    async def test_ping_unreachable_store_raises(self, tmp_path):
        db = DatabaseService(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/letters.db")
        try:
            with pytest.raises(Exception):
                await db.ping(timeout=5)
        finally:
            await db.close()


class TestStartup:

    def test_startup_fails_fast_when_store_unreachable(self, monkeypatch):
        from app.main import app

        async def unreachable(self, timeout=None):
            raise ConnectionError("store unreachable")

        monkeypatch.setattr(DatabaseService, "ping", unreachable)

        with pytest.raises(ConnectionError):
            with TestClient(app):
                pass

    def test_startup_wires_services(self, client):
        state = client.app.state

        assert state.letter_service.database is state.database
        assert state.scheduler_service.scheduler.running
        assert state.scheduler_service.scheduler.get_job("expired_letter_sweep") is not None


def _create_store_with_letters(url: str):
    """만료된 편지 1건과 유효한 편지 1건이 있는 파일 DB 준비"""

    async def _prepare():
        db = DatabaseService(url)
        try:
            await db.create_tables()
            now = now_utc()
            async with db.async_session() as session:
                session.add_all([
                    Letter(SECRET_CODE="stale", FROM_NAME="A", TO_NAME="B", TEXT="old", SIGNATURE="A",
                           SENT_AT=now - timedelta(hours=30), EXPIRES_AT=now - timedelta(hours=6)),
                    Letter(SECRET_CODE="fresh", FROM_NAME="A", TO_NAME="B", TEXT="new", SIGNATURE="A",
                           SENT_AT=now, EXPIRES_AT=now + timedelta(hours=24)),
                ])
                await session.commit()
        finally:
            await db.close()

    asyncio.run(_prepare())


def _stored_codes(url: str):
    async def _read():
        db = DatabaseService(url)
        try:
            async with db.async_session() as session:
                result = await session.execute(select(Letter.SECRET_CODE))
                return sorted(result.scalars().all())
        finally:
            await db.close()

    return asyncio.run(_read())


class TestStartupSweep:

    @pytest.fixture
    def store_url(self, tmp_path, monkeypatch):
        from app.config import settings

        url = f"sqlite+aiosqlite:///{tmp_path}/letters.db"
        monkeypatch.setattr(settings, "database_url", url)
        _create_store_with_letters(url)
        return url

    def test_startup_removes_expired_letters(self, store_url, monkeypatch):
        from app.config import settings
        from app.main import app

        monkeypatch.setattr(settings, "sweep_on_startup", True)

        with TestClient(app):
            pass

        assert _stored_codes(store_url) == ["fresh"]

    def test_startup_sweep_can_be_disabled(self, store_url, monkeypatch):
        from app.config import settings
        from app.main import app

        monkeypatch.setattr(settings, "sweep_on_startup", False)

        with TestClient(app):
            pass

        assert _stored_codes(store_url) == ["fresh", "stale"]


class TestMySQLColumnTypes:
    """MySQL DDL - 비밀 코드는 정확 비교, 시각은 마이크로초까지"""

    @pytest.fixture
    def ddl(self):
        return str(CreateTable(Letter.__table__).compile(dialect=mysql.dialect()))

    def test_secret_code_uses_binary_collation(self, ddl):
        code_line = next(line for line in ddl.splitlines() if "SECRET_CODE" in line)

        assert "VARCHAR(255)" in code_line
        assert "utf8mb4_bin" in code_line

    def test_timestamps_keep_microseconds(self, ddl):
        for column in ("SENT_AT", "EXPIRES_AT", "REPLY_SENT_AT"):
            line = next(line for line in ddl.splitlines() if line.strip().startswith(f"`{column}`"))
            assert "DATETIME(6)" in line
