"""배포 설정 캐시 - Settings Cache

settings 테이블의 AI 설정 레코드를 짧은 TTL 동안 메모리에 보관합니다.
설정 변경은 드물고 최대 TTL만큼의 지연 반영은 허용되므로,
요청마다 DB를 조회하지 않습니다.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_SETTINGS_ID
from app.models.setting import AppSetting

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AISettingsSnapshot:
    """settings 레코드의 AI 설정 스냅샷 (세션과 무관한 불변 값)"""

    ai_api_key: str | None = None
    ai_api_url: str | None = None
    ai_model: str | None = None

    @classmethod
    def from_record(cls, record: AppSetting) -> "AISettingsSnapshot":
        return cls(
            ai_api_key=record.ai_api_key,
            ai_api_url=record.ai_api_url,
            ai_model=record.ai_model,
        )


class SettingsCache:
    """TTL 기반 read-through 캐시

    모듈 전역 싱글톤이 아니라 의존성으로 주입합니다.
    테스트에서는 ttl_seconds=0 또는 seed()로 미리 채운 인스턴스를 사용합니다.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._value: AISettingsSnapshot | None = None
        self._loaded_at: float | None = None

    def _is_fresh(self) -> bool:
        if self._loaded_at is None:
            return False
        return self._clock() - self._loaded_at < self.ttl_seconds

    async def get(self, db: AsyncSession) -> AISettingsSnapshot | None:
        """캐시된 설정 반환 (만료 시 DB 재조회)

        레코드가 없으면 None을 캐시합니다 (환경변수 설정으로 대체).
        """
        if self._is_fresh():
            return self._value

        result = await db.execute(
            select(AppSetting).where(AppSetting.id == DEFAULT_SETTINGS_ID)
        )
        record = result.scalar_one_or_none()

        self._value = AISettingsSnapshot.from_record(record) if record else None
        self._loaded_at = self._clock()
        logger.debug(f"[Settings Cache] 설정 레코드 로드 (exists={record is not None})")
        return self._value

    def seed(self, snapshot: AISettingsSnapshot | None) -> None:
        """캐시를 미리 채움 (TTL은 지금부터 계산)"""
        self._value = snapshot
        self._loaded_at = self._clock()

    def invalidate(self) -> None:
        """캐시 무효화 - 다음 조회 시 DB에서 다시 읽음"""
        self._value = None
        self._loaded_at = None
        logger.info("[Settings Cache] 캐시 무효화")
