"""Settings 캐시 단위 테스트"""

import pytest

from app.infrastructure.cache.settings_cache import AISettingsSnapshot, SettingsCache
from app.models.setting import AppSetting


class FakeClock:
    """수동으로 진행하는 monotonic 시계"""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.mark.asyncio
async def test_get_missing_record_returns_none(db_session, clock):
    """레코드가 없으면 None"""
    cache = SettingsCache(ttl_seconds=60.0, clock=clock)

    assert await cache.get(db_session) is None


@pytest.mark.asyncio
async def test_get_loads_record(db_session, clock):
    db_session.add(AppSetting(id="default", ai_api_key="db-key", ai_model="db-model"))
    await db_session.commit()
    cache = SettingsCache(ttl_seconds=60.0, clock=clock)

    snapshot = await cache.get(db_session)

    assert snapshot == AISettingsSnapshot(ai_api_key="db-key", ai_model="db-model")


@pytest.mark.asyncio
async def test_get_is_cached_within_ttl(db_session, clock):
    """TTL 안에서는 DB 변경이 반영되지 않음"""
    cache = SettingsCache(ttl_seconds=60.0, clock=clock)
    assert await cache.get(db_session) is None

    db_session.add(AppSetting(id="default", ai_api_key="db-key"))
    await db_session.commit()
    clock.advance(30)

    assert await cache.get(db_session) is None


@pytest.mark.asyncio
async def test_get_reloads_after_ttl(db_session, clock):
    """TTL이 지나면 다시 조회"""
    cache = SettingsCache(ttl_seconds=60.0, clock=clock)
    assert await cache.get(db_session) is None

    db_session.add(AppSetting(id="default", ai_api_key="db-key"))
    await db_session.commit()
    clock.advance(61)

    snapshot = await cache.get(db_session)
    assert snapshot.ai_api_key == "db-key"


@pytest.mark.asyncio
async def test_seed_and_invalidate(db_session, clock):
    """seed 값은 TTL 동안 유지, invalidate 후 DB에서 다시 읽음"""
    cache = SettingsCache(ttl_seconds=60.0, clock=clock)
    cache.seed(AISettingsSnapshot(ai_api_key="seeded"))

    assert (await cache.get(db_session)).ai_api_key == "seeded"

    cache.invalidate()

    assert await cache.get(db_session) is None
