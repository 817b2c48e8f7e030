"""Brief Response 스키마

Suggestion 목록에서 사용되는 간략화된 응답 타입.
"""

from uuid import UUID

from pydantic import BaseModel, Field


class MeetingBriefResponse(BaseModel):
    """회의 간략 정보 (대기 중 제안 목록에 포함)"""

    id: UUID
    title: str
    project_id: UUID | None = Field(default=None, serialization_alias="projectId")

    class Config:
        populate_by_name = True
        from_attributes = True
