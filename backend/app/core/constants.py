"""Application constants and configuration values"""


# Suggestion status constants
class SuggestionStatus:
    """Suggestion 상태 상수"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# settings 테이블의 단일 레코드 ID
DEFAULT_SETTINGS_ID = "default"

# Oracle 응답 정규화 기본값
DEFAULT_CONFIDENCE_SCORE = 0.8
DEFAULT_SUGGESTED_TASK = "Review meeting notes"
ORIGINAL_TEXT_FALLBACK_LENGTH = 100
MAX_SUGGESTED_TASK_LENGTH = 500

# 승인 시 기본값
DEFAULT_ESTIMATED_HOURS = 1.0
