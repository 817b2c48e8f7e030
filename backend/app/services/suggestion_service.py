"""회의 → 태스크 제안 라이프사이클 서비스

제안 생성(최초/재처리), 승인(제안 → 태스크), 거절을 담당합니다.
모든 연산은 회의 작성자만 수행할 수 있습니다.

상태 전이:
    pending → approved (종료)
    pending → rejected (종료)
검토가 끝난 제안에 대한 재승인/재거절은 ConflictError로 거부하며 상태를 바꾸지 않습니다.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.constants import DEFAULT_ESTIMATED_HOURS
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.core.telemetry import get_suggestion_metrics
from app.infrastructure.cache.settings_cache import SettingsCache
from app.infrastructure.suggestion.oracle_client import SuggestionOracleClient
from app.models.ai_suggestion import AISuggestion
from app.models.meeting import Meeting
from app.models.task import TaskPriority
from app.repositories.interface import IMeetingRepository, ITaskRepository
from app.repositories.meeting_repository import MeetingRepository
from app.repositories.suggestion_repository import SuggestionRepository
from app.repositories.task_repository import TaskRepository
from app.schemas.suggestion import (
    ApproveSuggestionRequest,
    PendingSuggestionResponse,
    RejectSuggestionResponse,
    SuggestionResponse,
)
from app.schemas.task import TaskCreateData, TaskResponse

logger = logging.getLogger(__name__)


class SuggestionService:
    """제안 라이프사이클 서비스"""

    def __init__(
        self,
        db: AsyncSession,
        settings_cache: SettingsCache,
        oracle_client: SuggestionOracleClient | None = None,
        meeting_repository: IMeetingRepository | None = None,
        task_repository: ITaskRepository | None = None,
        settings: Settings | None = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.oracle_client = oracle_client or SuggestionOracleClient(
            db, settings_cache, settings=self.settings
        )
        self.meetings = meeting_repository or MeetingRepository(db)
        self.tasks = task_repository or TaskRepository(db)
        self.suggestions = SuggestionRepository(db)

    async def list_pending_suggestions(self, user_id: UUID) -> list[PendingSuggestionResponse]:
        """사용자가 작성한 모든 회의의 대기 중 제안 (최신순)"""
        suggestions = await self.suggestions.list_pending_for_owner(user_id)
        return [PendingSuggestionResponse.model_validate(s) for s in suggestions]

    async def list_meeting_suggestions(
        self, meeting_id: UUID, user_id: UUID
    ) -> list[SuggestionResponse]:
        """회의의 모든 제안 (최신순)"""
        await self._get_owned_meeting(meeting_id, user_id)

        suggestions = await self.suggestions.list_by_meeting(meeting_id)
        return [SuggestionResponse.model_validate(s) for s in suggestions]

    async def process_meeting(self, meeting_id: UUID, user_id: UUID) -> list[SuggestionResponse]:
        """회의록으로 제안 생성 (재처리 포함)

        호출할 때마다 새 pending 제안이 추가되며 기존 제안은 건드리지 않습니다.
        프로젝트 범위의 기존 태스크를 중복 방지 컨텍스트로 전달하므로
        이미 승인되어 태스크가 된 제안은 재처리 시 다시 제안되지 않도록 합니다.
        """
        meeting = await self._get_owned_meeting(meeting_id, user_id)

        existing_tasks = await self.tasks.list_task_summaries(
            meeting.project_id, meeting_id=meeting.id
        )

        drafts = await self.oracle_client.process_meeting_notes(
            meeting.notes,
            project_id=meeting.project_id,
            existing_tasks=existing_tasks,
        )

        saved = await self.suggestions.add_batch(meeting.id, drafts)

        logger.info(
            f"Generated {len(saved)} suggestions for meeting {meeting.id} "
            f"(existing_tasks={len(existing_tasks)})"
        )
        metrics = get_suggestion_metrics()
        if metrics:
            metrics.suggestions_generated_total.add(len(saved))

        return [SuggestionResponse.model_validate(s) for s in saved]

    async def approve_suggestion(
        self, suggestion_id: UUID, user_id: UUID, data: ApproveSuggestionRequest
    ) -> TaskResponse:
        """제안 승인 → 태스크 생성

        필드 우선순위: 요청 값 → 제안에서 유도한 값 → 기본값.
        태스크 생성이 성공한 뒤에만 제안 상태를 approved로 변경합니다.
        상태 변경은 pending 조건부 UPDATE라서 동시 승인 중 하나만 성공합니다.
        """
        suggestion = await self._get_owned_suggestion(suggestion_id, user_id)
        self._ensure_pending(suggestion)

        meeting = suggestion.meeting
        task_data = TaskCreateData(
            project_id=data.project_id or meeting.project_id,
            title=data.title or suggestion.suggested_task,
            description=(
                data.description
                or suggestion.suggested_description
                or suggestion.original_text
            ),
            priority=data.priority or TaskPriority.MEDIUM,
            estimated_hours=(
                data.estimated_hours
                if data.estimated_hours is not None
                else DEFAULT_ESTIMATED_HOURS
            ),
            assigned_to=data.assigned_to or user_id,
            due_date=data.due_date or self._default_due_date(),
            meeting_id=suggestion.meeting_id,
        )

        task = await self.tasks.create_task(task_data, created_by=user_id)
        if not await self.suggestions.mark_approved(suggestion, user_id):
            # 동시 요청이 먼저 검토함 → 요청 트랜잭션 롤백으로 태스크 생성도 취소
            raise ConflictError("SUGGESTION_ALREADY_REVIEWED")

        logger.info(f"Suggestion {suggestion.id} approved by {user_id}, created task {task.id}")
        self._record_review("approved")

        return TaskResponse.model_validate(task)

    async def reject_suggestion(
        self, suggestion_id: UUID, user_id: UUID, reason: str | None
    ) -> RejectSuggestionResponse:
        """제안 거절 (사유 필수, 태스크 생성 없음)"""
        suggestion = await self._get_owned_suggestion(suggestion_id, user_id)

        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("REJECTION_REASON_REQUIRED")

        self._ensure_pending(suggestion)

        if not await self.suggestions.mark_rejected(suggestion, user_id, reason):
            raise ConflictError("SUGGESTION_ALREADY_REVIEWED")

        logger.info(f"Suggestion {suggestion.id} rejected by {user_id}")
        self._record_review("rejected")

        return RejectSuggestionResponse(message="Suggestion rejected successfully")

    async def _get_owned_meeting(self, meeting_id: UUID, user_id: UUID) -> Meeting:
        """회의 조회 + 작성자 확인"""
        meeting = await self.meetings.get_meeting(meeting_id)
        if not meeting:
            raise NotFoundError("MEETING_NOT_FOUND")

        if meeting.created_by != user_id:
            raise ForbiddenError("MEETING_ACCESS_DENIED")

        return meeting

    async def _get_owned_suggestion(self, suggestion_id: UUID, user_id: UUID) -> AISuggestion:
        """제안 조회 + 소속 회의 작성자 확인"""
        suggestion = await self.suggestions.get_with_meeting(suggestion_id)
        if not suggestion:
            raise NotFoundError("SUGGESTION_NOT_FOUND")

        # 권한은 제안이 아닌 회의 작성자 기준
        if suggestion.meeting.created_by != user_id:
            raise ForbiddenError("SUGGESTION_ACCESS_DENIED")

        return suggestion

    @staticmethod
    def _ensure_pending(suggestion: AISuggestion) -> None:
        if not suggestion.is_pending:
            raise ConflictError("SUGGESTION_ALREADY_REVIEWED")

    def _default_due_date(self) -> datetime:
        return datetime.now(timezone.utc) + timedelta(days=self.settings.suggestion_due_days)

    @staticmethod
    def _record_review(action: str) -> None:
        metrics = get_suggestion_metrics()
        if metrics:
            metrics.suggestion_reviews_total.add(1, {"action": action})
