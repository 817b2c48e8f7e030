from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.meeting import Meeting


class MeetingRepository:
    """회의 조회 (SQLAlchemy)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        result = await self.db.execute(select(Meeting).where(Meeting.id == meeting_id))
        return result.scalar_one_or_none()
