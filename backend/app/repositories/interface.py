"""외부 협력자 Repository 인터페이스 정의

회의/태스크 저장소는 제안 파이프라인 바깥의 도메인입니다.
Protocol 기반 인터페이스로 구조적 서브타이핑 지원.
"""

from typing import Protocol
from uuid import UUID

from app.models.meeting import Meeting
from app.models.task import Task
from app.schemas.task import ExistingTaskSummary, TaskCreateData


class IMeetingRepository(Protocol):
    """회의 조회 인터페이스"""

    async def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        """회의 조회 (notes, project_id, created_by 포함)"""
        ...


class ITaskRepository(Protocol):
    """태스크 조회/생성 인터페이스"""

    async def list_task_summaries(
        self, project_id: UUID | None, meeting_id: UUID | None = None
    ) -> list[ExistingTaskSummary]:
        """중복 방지 컨텍스트용 기존 태스크 요약 목록

        Args:
            project_id: 프로젝트 ID (있으면 프로젝트 범위로 조회)
            meeting_id: 프로젝트가 없는 회의일 때 해당 회의에서 생성된 태스크로 한정
        """
        ...

    async def create_task(self, data: TaskCreateData, created_by: UUID) -> Task:
        """태스크 생성"""
        ...
