"""제안 저장소 (Suggestion Store)

회의 1 : N 제안. 모든 조회는 회의 범위로 한정되며,
제안은 생성과 승인/거절 전이 외에는 수정/삭제하지 않습니다.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import SuggestionStatus
from app.models.ai_suggestion import AISuggestion
from app.models.meeting import Meeting
from app.schemas.suggestion import SuggestionDraft


class SuggestionRepository:
    """AISuggestion 저장소 (SQLAlchemy)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_batch(
        self, meeting_id: UUID, drafts: Sequence[SuggestionDraft]
    ) -> list[AISuggestion]:
        """초안 목록을 pending 제안으로 저장 (한 배치는 같은 생성 시각 공유)"""
        created_at = datetime.now(timezone.utc)
        suggestions = [
            AISuggestion(
                meeting_id=meeting_id,
                original_text=draft.original_text,
                suggested_task=draft.suggested_task,
                suggested_description=draft.suggested_description,
                confidence_score=draft.confidence_score,
                status=SuggestionStatus.PENDING,
                created_at=created_at,
            )
            for draft in drafts
        ]
        self.db.add_all(suggestions)
        await self.db.flush()
        return suggestions

    async def get_with_meeting(self, suggestion_id: UUID) -> AISuggestion | None:
        """제안 조회 (소속 회의 포함)"""
        query = (
            select(AISuggestion)
            .options(selectinload(AISuggestion.meeting))
            .where(AISuggestion.id == suggestion_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_by_meeting(self, meeting_id: UUID) -> list[AISuggestion]:
        """회의의 모든 제안 (최신순)"""
        query = (
            select(AISuggestion)
            .where(AISuggestion.meeting_id == meeting_id)
            .order_by(AISuggestion.created_at.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_pending_for_owner(self, user_id: UUID) -> list[AISuggestion]:
        """사용자가 작성한 회의들의 대기 중 제안 (회의 포함, 최신순)"""
        query = (
            select(AISuggestion)
            .join(Meeting, AISuggestion.meeting_id == Meeting.id)
            .options(selectinload(AISuggestion.meeting))
            .where(
                Meeting.created_by == user_id,
                AISuggestion.status == SuggestionStatus.PENDING,
            )
            .order_by(AISuggestion.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def mark_approved(self, suggestion: AISuggestion, reviewer_id: UUID) -> bool:
        """pending → approved (이미 검토된 경우 False)"""
        return await self._transition(suggestion, SuggestionStatus.APPROVED, reviewer_id)

    async def mark_rejected(
        self, suggestion: AISuggestion, reviewer_id: UUID, reason: str
    ) -> bool:
        """pending → rejected (이미 검토된 경우 False)"""
        return await self._transition(
            suggestion, SuggestionStatus.REJECTED, reviewer_id, rejection_reason=reason
        )

    async def _transition(
        self,
        suggestion: AISuggestion,
        status: str,
        reviewer_id: UUID,
        rejection_reason: str | None = None,
    ) -> bool:
        """status == pending 조건부 UPDATE

        동시 요청 중 하나만 행을 갱신하며, 나머지는 0행으로 끝납니다.
        """
        result = await self.db.execute(
            update(AISuggestion)
            .where(
                AISuggestion.id == suggestion.id,
                AISuggestion.status == SuggestionStatus.PENDING,
            )
            .values(
                status=status,
                reviewed_by=reviewer_id,
                reviewed_at=datetime.now(timezone.utc),
                rejection_reason=rejection_reason,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.db.refresh(
            suggestion, ["status", "reviewed_by", "reviewed_at", "rejection_reason"]
        )
        return True
