"""Repository 패키지

Repository 패턴 구현체들을 모아둔 패키지.
- interface: 외부 협력자(회의 조회, 태스크 조회/생성) Protocol
- meeting_repository / task_repository: SQLAlchemy 구현체
- suggestion_repository: 제안 저장소
"""

from app.repositories.interface import IMeetingRepository, ITaskRepository
from app.repositories.meeting_repository import MeetingRepository
from app.repositories.suggestion_repository import SuggestionRepository
from app.repositories.task_repository import TaskRepository

__all__ = [
    "IMeetingRepository",
    "ITaskRepository",
    "MeetingRepository",
    "SuggestionRepository",
    "TaskRepository",
]
