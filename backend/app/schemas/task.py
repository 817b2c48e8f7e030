"""Task 스키마

태스크 생성 자체는 외부 협력자 영역이며, 여기서는
제안 승인 시 전달하는 필드와 응답 형태만 정의합니다.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.task import TaskPriority


class ExistingTaskSummary(BaseModel):
    """중복 제안 방지용 기존 태스크 요약"""

    title: str
    description: str | None = None

    class Config:
        from_attributes = True


class TaskCreateData(BaseModel):
    """승인된 제안으로부터 태스크를 생성할 때 전달하는 필드"""

    project_id: UUID | None = None
    title: str = Field(min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_hours: float = Field(gt=0)
    assigned_to: UUID
    due_date: datetime
    meeting_id: UUID


class TaskResponse(BaseModel):
    """태스크 응답"""

    id: UUID
    project_id: UUID | None = Field(serialization_alias="projectId")
    meeting_id: UUID | None = Field(serialization_alias="meetingId")
    title: str
    description: str | None
    status: str
    priority: str
    estimated_hours: float = Field(serialization_alias="estimatedHours")
    assigned_to: UUID = Field(serialization_alias="assignedTo")
    due_date: datetime = Field(serialization_alias="dueDate")
    created_by: UUID = Field(serialization_alias="createdBy")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        populate_by_name = True
        from_attributes = True
