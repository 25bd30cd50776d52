# tests/conftest.py
"""
pytest 설정 - app.config 는 import 시점에 설정을 읽으므로 환경 변수를 먼저 세팅
"""

import os
from datetime import datetime, timedelta

os.environ.setdefault("MYSQL_HOST", "localhost")
os.environ.setdefault("MYSQL_PORT", "3306")
os.environ.setdefault("MYSQL_USER", "test")
os.environ.setdefault("MYSQL_PASSWORD", "test")
os.environ.setdefault("MYSQL_DATABASE", "secret_letters_test")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.services.database_service import DatabaseService
from app.services.letter_service import LetterService


class FakeClock:
    """테스트용 시계 - naive UTC 시각을 직접 조정"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0))


@pytest.fixture
async def database():
    db = DatabaseService("sqlite+aiosqlite:///:memory:")
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def letter_service(database, clock):
    return LetterService(database, clock=clock)


@pytest.fixture
def letter_payload():
    return {
        "from": "A",
        "to": "B",
        "secretCode": "X1",
        "text": "hi",
        "signature": "A",
    }


@pytest.fixture
def client(tmp_path, monkeypatch):
    """앱 전체 (startup/shutdown 포함) - 클라이언트 셸은 임시 디렉토리"""
    from app.config import settings
    from app.main import app

    (tmp_path / "index.html").write_text("<html><body>letters</body></html>")
    (tmp_path / "app.js").write_text("console.log('letters');")
    monkeypatch.setattr(settings, "static_dir", str(tmp_path))

    with TestClient(app) as test_client:
        yield test_client
