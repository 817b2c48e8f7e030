from app.models.ai_suggestion import AISuggestion
from app.models.meeting import Meeting
from app.models.setting import AppSetting
from app.models.task import Task, TaskPriority, TaskStatus
from app.models.user import User

__all__ = [
    "User",
    "Meeting",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "AISuggestion",
    "AppSetting",
]
