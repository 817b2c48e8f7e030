"""Suggestion Oracle 클라이언트

외부 추론 엔드포인트(chat-completion 호환)를 한 번 호출하여
회의록에서 태스크 제안 초안을 추출합니다.

설정 우선순위: settings 레코드 → 환경변수(Settings).
API 키나 URL이 없으면 네트워크 호출 없이 fallback 세트를 반환합니다.
HTTP 오류, 네트워크 오류, 타임아웃, JSON 파싱 오류는 모두 같은 실패 경로로
처리되어 fallback 세트로 대체되며, 호출자에게 예외가 전달되지 않습니다.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.telemetry import get_suggestion_metrics, get_tracer, timed_operation
from app.infrastructure.cache.settings_cache import SettingsCache
from app.infrastructure.suggestion.fallback import build_fallback_suggestions
from app.infrastructure.suggestion.response_parser import (
    extract_message_content,
    parse_oracle_content,
)
from app.prompt.v1.workflows.task_suggestion import build_suggestion_prompts
from app.schemas.suggestion import SuggestionDraft
from app.schemas.task import ExistingTaskSummary

logger = logging.getLogger(__name__)


class OracleUnavailableError(Exception):
    """Oracle 호출/파싱 실패 (클라이언트 내부 전용, 외부로 전파하지 않음)"""


@dataclass(frozen=True)
class OracleConfig:
    """해석이 끝난 Oracle 호출 설정"""

    api_url: str | None
    api_key: str | None
    model: str
    temperature: float = 0.3
    timeout_seconds: float = 60.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_url)


@dataclass
class OracleResult:
    """Oracle 호출 결과 (성공: suggestions / 실패: error)"""

    suggestions: list[SuggestionDraft] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, suggestions: list[SuggestionDraft]) -> "OracleResult":
        return cls(suggestions=suggestions)

    @classmethod
    def failure(cls, reason: str) -> "OracleResult":
        return cls(error=reason)


class SuggestionOracleClient:
    """회의록 → 태스크 제안 Oracle 클라이언트

    Usage:
        >>> client = SuggestionOracleClient(db, settings_cache)
        >>> drafts = await client.process_meeting_notes(notes, existing_tasks=tasks)

    Attributes:
        db: settings 레코드 조회용 세션
        settings_cache: settings 레코드 TTL 캐시
        settings: 환경변수 설정 (기본값: get_settings())
    """

    def __init__(
        self,
        db: AsyncSession,
        settings_cache: SettingsCache,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.db = db
        self.settings_cache = settings_cache
        self.settings = settings or get_settings()
        # 테스트에서 httpx.MockTransport 주입
        self._transport = transport

    async def resolve_config(self) -> OracleConfig:
        """settings 레코드 → 환경변수 순으로 설정 해석"""
        record = await self.settings_cache.get(self.db)

        api_key = (record and record.ai_api_key) or self.settings.ai_api_key
        api_url = (record and record.ai_api_url) or self.settings.ai_api_url
        model = (record and record.ai_model) or self.settings.ai_model

        return OracleConfig(
            api_url=api_url,
            api_key=api_key,
            model=model,
            temperature=self.settings.ai_temperature,
            timeout_seconds=self.settings.ai_request_timeout_seconds,
        )

    async def process_meeting_notes(
        self,
        notes: str,
        project_id: UUID | None = None,
        existing_tasks: Sequence[ExistingTaskSummary] | None = None,
    ) -> list[SuggestionDraft]:
        """회의록에서 제안 초안 추출 (실패 시 fallback, 예외 없음)

        Args:
            notes: 회의록 원문
            project_id: 소속 프로젝트 ID (로그 컨텍스트용)
            existing_tasks: 중복 방지용 기존 태스크 요약

        Returns:
            status가 pending인 정규화된 제안 초안 목록
        """
        config = await self.resolve_config()

        if not config.is_configured:
            logger.warning("AI API not configured, returning fallback suggestions")
            self._record_outcome("unconfigured")
            return build_fallback_suggestions(notes)

        with get_tracer().start_as_current_span("suggestion.oracle_request") as span:
            span.set_attribute("suggestion.model", config.model)
            span.set_attribute("suggestion.existing_tasks", len(existing_tasks or []))
            with timed_operation() as timer:
                result = await self.request_suggestions(config, notes, existing_tasks)
            span.set_attribute("suggestion.ok", result.ok)

        metrics = get_suggestion_metrics()
        if metrics:
            metrics.oracle_request_duration.record(timer.duration)

        if not result.ok:
            logger.warning(
                f"Oracle unavailable (project={project_id}): {result.error}, "
                "returning fallback suggestions"
            )
            self._record_outcome("fallback")
            return build_fallback_suggestions(notes)

        logger.info(
            f"Oracle returned {len(result.suggestions)} suggestions "
            f"(project={project_id}, existing_tasks={len(existing_tasks or [])})"
        )
        self._record_outcome("success")
        return result.suggestions

    async def request_suggestions(
        self,
        config: OracleConfig,
        notes: str,
        existing_tasks: Sequence[ExistingTaskSummary] | None = None,
    ) -> OracleResult:
        """Oracle 호출 후 결과 타입으로 반환

        요청 생성, 전송, 응답 해석 중 발생한 모든 예외는 failure로 변환되며
        호출자에게 전파되지 않습니다.
        """
        try:
            system_prompt, user_prompt = build_suggestion_prompts(notes, existing_tasks)
            payload = {
                "model": config.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": config.temperature,
                "response_format": {"type": "json_object"},
            }
            content = await asyncio.wait_for(
                self._call(config, payload),
                timeout=config.timeout_seconds,
            )
            return OracleResult.success(parse_oracle_content(content, notes))
        except asyncio.TimeoutError:
            logger.error(f"AI API timeout after {config.timeout_seconds}s")
            return OracleResult.failure("timeout")
        except OracleUnavailableError as e:
            return OracleResult.failure(str(e))
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError 등 응답 해석 오류
            logger.error(f"AI response content could not be parsed: {e}")
            return OracleResult.failure(f"invalid content: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error while calling AI API: {e}")
            return OracleResult.failure(f"unexpected error: {type(e).__name__}")

    async def _call(self, config: OracleConfig, payload: dict) -> str:
        """HTTP 요청 1회 수행 후 message content 반환

        Raises:
            OracleUnavailableError: HTTP/네트워크/응답 구조 오류
        """
        headers = {
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(config.timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(config.api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"AI API timeout: {e}")
            raise OracleUnavailableError("timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"AI API request error: {e}")
            raise OracleUnavailableError(f"request error: {e}") from e

        if response.is_error:
            logger.error(f"AI API error: {response.status_code} {response.text[:500]}")
            raise OracleUnavailableError(f"HTTP {response.status_code}")

        try:
            return extract_message_content(response.json())
        except ValueError as e:
            # OracleResponseError, JSONDecodeError, UnicodeDecodeError
            logger.error(f"AI API returned an unexpected body: {e}")
            raise OracleUnavailableError(f"unexpected body: {e}") from e

    def _record_outcome(self, outcome: str) -> None:
        metrics = get_suggestion_metrics()
        if metrics:
            metrics.oracle_requests_total.add(1, {"outcome": outcome})
