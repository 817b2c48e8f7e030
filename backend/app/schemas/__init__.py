from app.schemas.common import ErrorDetail, ErrorResponse
from app.schemas.suggestion import (
    ApproveSuggestionRequest,
    PendingSuggestionResponse,
    RejectSuggestionRequest,
    RejectSuggestionResponse,
    SuggestionDraft,
    SuggestionResponse,
)
from app.schemas.task import ExistingTaskSummary, TaskCreateData, TaskResponse

__all__ = [
    "ApproveSuggestionRequest",
    "ErrorDetail",
    "ErrorResponse",
    "ExistingTaskSummary",
    "PendingSuggestionResponse",
    "RejectSuggestionRequest",
    "RejectSuggestionResponse",
    "SuggestionDraft",
    "SuggestionResponse",
    "TaskCreateData",
    "TaskResponse",
]
