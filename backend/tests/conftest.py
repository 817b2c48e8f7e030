"""pytest 설정 및 공유 fixture

테스트 인프라:
- 테스트 DB 엔진/세션 (기본: 테스트마다 새 SQLite 파일)
- FastAPI AsyncClient
- Settings 캐시 / Oracle 설정
- 테스트 데이터 fixture
"""

import os

# app import 전에 설정되어야 함 (모듈 로드 시 Settings/엔진 생성)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from collections.abc import AsyncGenerator
from typing import Any
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.dependencies import get_settings_cache
from app.core.config import Settings
from app.core.database import Base, build_engine, get_db
from app.infrastructure.cache.settings_cache import SettingsCache
from app.main import app
from app import models  # noqa: F401  Base.metadata에 전체 모델 등록
from app.models.meeting import Meeting
from app.models.user import User


# ===== 테스트 설정 =====


@pytest.fixture
def test_settings() -> Settings:
    """테스트용 설정 (Oracle 미설정 → fallback 경로)"""
    return Settings(
        app_env="test",
        debug=True,
        jwt_secret_key="test-secret-key",
        telemetry_enabled=False,
        ai_api_key=None,
        ai_api_url="https://oracle.test/v1/chat/completions",
        ai_model="test-model",
        ai_request_timeout_seconds=5.0,
    )


@pytest.fixture
def oracle_settings(test_settings: Settings) -> Settings:
    """Oracle이 설정된 테스트용 설정"""
    return test_settings.model_copy(update={"ai_api_key": "env-api-key"})


# ===== 데이터베이스 Fixture =====


@pytest.fixture
async def test_engine(tmp_path):
    """테스트용 비동기 엔진

    TEST_DATABASE_URL이 없으면 테스트마다 새 SQLite 파일 사용
    """
    test_db_url = os.getenv(
        "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    )
    engine = build_engine(test_db_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 DB 세션 (function scope)"""
    session_maker = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session


@pytest.fixture
def settings_cache() -> SettingsCache:
    """settings 레코드가 없는 상태로 미리 채운 캐시"""
    cache = SettingsCache(ttl_seconds=60.0)
    cache.seed(None)
    return cache


# ===== FastAPI Client Fixture =====


@pytest.fixture
async def async_client(
    db_session: AsyncSession, settings_cache: SettingsCache
) -> AsyncGenerator[AsyncClient, None]:
    """실제 DB 세션을 사용하는 비동기 클라이언트"""

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_settings_cache] = lambda: settings_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ===== 테스트 데이터 Fixture =====


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """테스트용 사용자 (회의 작성자)"""
    user = User(
        id=uuid4(),
        email="test@example.com",
        name="테스트 사용자",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def test_user2(db_session: AsyncSession) -> User:
    """두 번째 테스트용 사용자 (작성자 아님)"""
    user = User(
        id=uuid4(),
        email="test2@example.com",
        name="테스트 사용자2",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def test_meeting(db_session: AsyncSession, test_user: User) -> Meeting:
    """테스트용 회의 (작성자: test_user, 프로젝트 소속)"""
    meeting = Meeting(
        id=uuid4(),
        title="벤더 계약 회의",
        notes="Discuss vendor contract renewal and assign follow-up",
        project_id=uuid4(),
        created_by=test_user.id,
    )
    db_session.add(meeting)
    await db_session.commit()
    return meeting


# ===== 유틸리티 함수 =====


def assert_uuid(value: Any) -> UUID:
    """UUID 검증 및 변환"""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    raise ValueError(f"Invalid UUID: {value}")
