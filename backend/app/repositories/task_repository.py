from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task import Task, TaskStatus
from app.schemas.task import ExistingTaskSummary, TaskCreateData


class TaskRepository:
    """태스크 조회/생성 (SQLAlchemy)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_task_summaries(
        self, project_id: UUID | None, meeting_id: UUID | None = None
    ) -> list[ExistingTaskSummary]:
        """프로젝트(없으면 회의) 범위의 기존 태스크 제목/설명"""
        if project_id is not None:
            condition = Task.project_id == project_id
        elif meeting_id is not None:
            condition = Task.meeting_id == meeting_id
        else:
            return []

        query = select(Task.title, Task.description).where(condition).order_by(Task.created_at)
        result = await self.db.execute(query)
        return [
            ExistingTaskSummary(title=row.title, description=row.description)
            for row in result.all()
        ]

    async def create_task(self, data: TaskCreateData, created_by: UUID) -> Task:
        task = Task(
            project_id=data.project_id,
            meeting_id=data.meeting_id,
            title=data.title,
            description=data.description,
            status=TaskStatus.TODO.value,
            priority=data.priority.value,
            estimated_hours=data.estimated_hours,
            assigned_to=data.assigned_to,
            due_date=data.due_date,
            created_by=created_by,
        )
        self.db.add(task)
        await self.db.flush()
        return task
