"""Suggestion 스키마

회의록에서 추출된 태스크 제안의 요청/응답 모델.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.constants import SuggestionStatus
from app.models.task import TaskPriority
from app.schemas.common_brief import MeetingBriefResponse


class SuggestionDraft(BaseModel):
    """Oracle(또는 fallback)이 반환하는 정규화된 제안 초안

    id/meeting_id는 저장 시점에 부여됩니다.
    """

    original_text: str
    suggested_task: str
    suggested_description: str | None = None
    confidence_score: float = Field(ge=0.0, le=1.0)
    status: str = SuggestionStatus.PENDING


class SuggestionResponse(BaseModel):
    """제안 응답"""

    id: UUID
    meeting_id: UUID = Field(serialization_alias="meetingId")
    original_text: str = Field(serialization_alias="originalText")
    suggested_task: str = Field(serialization_alias="suggestedTask")
    suggested_description: str | None = Field(serialization_alias="suggestedDescription")
    confidence_score: float = Field(serialization_alias="confidenceScore")
    status: str
    reviewed_by: UUID | None = Field(default=None, serialization_alias="reviewedBy")
    reviewed_at: datetime | None = Field(default=None, serialization_alias="reviewedAt")
    rejection_reason: str | None = Field(default=None, serialization_alias="rejectionReason")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        populate_by_name = True
        from_attributes = True


class PendingSuggestionResponse(SuggestionResponse):
    """대기 중 제안 응답 (회의 간략 정보 포함)"""

    meeting: MeetingBriefResponse


class ApproveSuggestionRequest(BaseModel):
    """제안 승인 요청

    지정한 필드는 제안에서 유도한 기본값보다 우선합니다.
    """

    project_id: UUID | None = Field(default=None, alias="projectId")
    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    estimated_hours: float | None = Field(default=None, gt=0, alias="estimatedHours")
    assigned_to: UUID | None = Field(default=None, alias="assignedTo")
    due_date: datetime | None = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True


class RejectSuggestionRequest(BaseModel):
    """제안 거절 요청

    빈 사유(공백만 있는 경우 포함)는 서비스에서 REJECTION_REASON_REQUIRED로 거부합니다.
    """

    reason: str | None = Field(default=None, max_length=2000)


class RejectSuggestionResponse(BaseModel):
    """제안 거절 응답"""

    message: str
